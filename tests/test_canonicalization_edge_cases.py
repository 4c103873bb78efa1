"""Targeted tests for canonicalization edge cases and determinism."""

import dataclasses
import random
import unicodedata
from enum import IntEnum

import pytest
from actp_hash.codes import ErrorCode
from actp_hash.kernel.canonical import (
    canonicalize,
    DuplicateKeyError,
    NonFiniteNumberError,
    UnsupportedTypeError,
)
from actp_hash.kernel.digest import digest_raw_string, digest_value


class TestCanonicalizationDeterminism:
    """Prove canonicalization is deterministic across runs."""

    def test_same_value_same_digest_repeated_runs(self):
        value = {"integer": 42, "float": 3.14159265358979323846, "list": [1, "two", None]}
        results = {canonicalize(value) for _ in range(5)}
        assert len(results) == 1
        assert digest_value(value) == digest_value(value)

    def test_semantic_object_key_order_independent(self):
        value1 = {"b": 2, "a": 1, "c": 3}
        value2 = {"a": 1, "b": 2, "c": 3}
        value3 = {"c": 3, "a": 1, "b": 2}

        assert canonicalize(value1) == canonicalize(value2) == canonicalize(value3)
        assert digest_value(value1) == digest_value(value2) == digest_value(value3)

    def test_cross_run_determinism_shuffled_insertion(self):
        """Simulates different processes building the same object in different orders."""
        keys = ["z", "a", "m", "b", "x", "c", "y"]
        values = {key: i for i, key in enumerate(keys)}
        nested_keys = ["inner_z", "inner_a", "inner_b"]

        def build(rng):
            order = list(keys)
            rng.shuffle(order)
            inner_order = list(nested_keys)
            rng.shuffle(inner_order)
            obj = {key: values[key] for key in order}
            obj["nested"] = {key: key.upper() for key in inner_order}
            return obj

        canonical_forms = {canonicalize(build(random.Random(seed))) for seed in range(20)}
        assert len(canonical_forms) == 1

    def test_list_order_is_significant(self):
        assert canonicalize([1, 2]) != canonicalize([2, 1])

    def test_unicode_normalization_nfc(self):
        """Same string in different normalization forms -> same digest."""
        nfc_form = "caf\u00e9"
        nfd_form = unicodedata.normalize("NFD", nfc_form)
        assert nfc_form != nfd_form

        assert digest_value({"text": nfc_form}) == digest_value({"text": nfd_form})

    def test_none_vs_missing_key_semantics(self):
        """None is rendered; a missing key is simply absent. They hash differently."""
        assert digest_value({"key": None}) != digest_value({})
        assert digest_value({"outer": {"inner": None}}) != digest_value({"outer": {}})

    def test_int_and_float_tags_are_respected(self):
        """1 and 1.5 differ; 1 and 1.0 share a rendering but no coercion happens."""
        assert canonicalize({"n": 1}) == '{"n":1}'
        assert canonicalize({"n": 1.5}) == '{"n":1.5}'
        assert canonicalize({"n": 1.0}) == '{"n":1}'

    def test_int_enum_renders_as_number(self):
        class Level(IntEnum):
            HIGH = 3

        assert canonicalize({"level": Level.HIGH}) == '{"level":3}'


class TestAbsentValues:
    """There is no canonical 'absent' value: sentinels are rejected, not rendered."""

    @pytest.mark.parametrize("sentinel", [..., dataclasses.MISSING, NotImplemented])
    def test_missing_sentinels_rejected(self, sentinel):
        with pytest.raises(UnsupportedTypeError) as excinfo:
            canonicalize({"field": sentinel})
        assert excinfo.value.code == ErrorCode.UNSUPPORTED_TYPE
        assert excinfo.value.path == "$.field"

    def test_sentinel_never_rendered_as_undefined(self):
        with pytest.raises(UnsupportedTypeError):
            canonicalize([1, ...])

    def test_callables_rejected(self):
        with pytest.raises(UnsupportedTypeError, match="function"):
            canonicalize({"fn": lambda: None})


class TestStructuralFailures:
    """Malformed structures fail loudly with a location."""

    def test_cyclic_list_rejected(self):
        cyclic = [1]
        cyclic.append(cyclic)
        with pytest.raises(UnsupportedTypeError, match="Cyclic reference"):
            canonicalize(cyclic)

    def test_cyclic_dict_rejected(self):
        cyclic = {"a": 1}
        cyclic["self"] = cyclic
        with pytest.raises(UnsupportedTypeError) as excinfo:
            canonicalize({"root": cyclic})
        assert excinfo.value.path == "$.root.self"

    def test_keys_colliding_after_nfc_rejected(self):
        value = {"caf\u00e9": 1, "cafe\u0301": 2}
        with pytest.raises(DuplicateKeyError) as excinfo:
            canonicalize(value)
        assert excinfo.value.code == ErrorCode.DUPLICATE_KEY

    def test_unpaired_surrogate_rejected(self):
        with pytest.raises(UnsupportedTypeError, match="surrogate"):
            canonicalize({"text": "\ud800"})

    def test_unpaired_surrogate_in_key_rejected(self):
        with pytest.raises(UnsupportedTypeError, match="surrogate"):
            canonicalize({"\udfff": 1, "a": 2})

    def test_non_finite_error_code(self):
        with pytest.raises(NonFiniteNumberError) as excinfo:
            canonicalize({"x": {"y": float("-inf")}})
        assert excinfo.value.code == ErrorCode.NON_FINITE_NUMBER
        assert excinfo.value.path == "$.x.y"

    def test_non_string_key_in_nested_mapping_reports_path(self):
        with pytest.raises(UnsupportedTypeError) as excinfo:
            canonicalize({"outer": [{"ok": 1}, {2: "bad"}]})
        assert excinfo.value.path == "$.outer[1]"


class TestDeepNesting:
    """Nesting depth is not bounded by the interpreter's recursion limit."""

    def test_deeply_nested_mapping(self):
        depth = 5000
        value = {}
        for _ in range(depth):
            value = {"c": value}
        assert canonicalize(value) == '{"c":' * depth + "{}" + "}" * depth

    def test_deeply_nested_list(self):
        depth = 5000
        value = [1]
        for _ in range(depth):
            value = [value, None]
        result = canonicalize(value)
        assert result.startswith("[" * (depth + 1) + "1]")
        assert result.endswith(",null]" * depth)

    def test_deeply_nested_digest(self):
        value = {}
        for _ in range(3000):
            value = {"c": value}
        expected = digest_raw_string('{"c":' * 3000 + "{}" + "}" * 3000)
        assert digest_value(value) == expected

    def test_error_at_depth_reports_path(self):
        depth = 2000
        value = {"bad": float("nan")}
        for _ in range(depth):
            value = {"c": value}
        with pytest.raises(NonFiniteNumberError) as excinfo:
            canonicalize(value)
        assert excinfo.value.path == "$" + ".c" * depth + ".bad"

    def test_cycle_at_depth_detected(self):
        inner = {}
        value = inner
        for _ in range(2000):
            value = {"c": value}
        inner["loop"] = value
        with pytest.raises(UnsupportedTypeError, match="Cyclic reference"):
            canonicalize(value)
