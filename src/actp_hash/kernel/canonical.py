"""Canonical JSON rendering with explicit rules for cross-implementation hashing.

This module turns an in-memory JSON-like value into the single string that
every implementation (TypeScript, Python, Go, Rust, Java) must agree on
before hashing.

Key rules:
- Object keys NFC-normalized and sorted by their UTF-8 bytes, recursively
- Arrays preserve order
- Integers rendered in plain decimal, floats fixed-point with at most 18
  fractional digits (round half away from zero), trailing zeros stripped
- NaN / Infinity rejected
- Strings normalized to NFC, minimal escaping, non-ASCII emitted literally
- No whitespace
- Anything that is not None, bool, int, float, str, list or dict is rejected
"""

import json
import math
import unicodedata
from decimal import ROUND_HALF_UP, Context, Decimal
from typing import Any, Dict, Iterator, List, Set, Tuple, Union

from actp_hash.codes import ErrorCode

StructuredValue = Union[
    None, bool, int, float, str, List["StructuredValue"], Dict[str, "StructuredValue"]
]

FLOAT_FRACTION_DIGITS = 18

_FLOAT_QUANTUM = Decimal(1).scaleb(-FLOAT_FRACTION_DIGITS)
# Largest finite double has 309 integer digits; 18 more after the point.
_FLOAT_CONTEXT = Context(prec=400, rounding=ROUND_HALF_UP)


class CanonicalizationError(ValueError):
    """Raised when a value has no canonical form."""

    code = ErrorCode.UNSUPPORTED_TYPE

    def __init__(self, message: str, path: str = "$"):
        super().__init__(message)
        self.path = path


class UnsupportedTypeError(CanonicalizationError):
    """Raised when a value outside the JSON-like value set reaches the canonicalizer."""

    code = ErrorCode.UNSUPPORTED_TYPE


class NonFiniteNumberError(CanonicalizationError):
    """Raised for NaN and infinite floats."""

    code = ErrorCode.NON_FINITE_NUMBER


class DuplicateKeyError(CanonicalizationError):
    """Raised when two keys of one mapping collide after NFC normalization."""

    code = ErrorCode.DUPLICATE_KEY


def _normalize_string(s: str) -> str:
    """Normalize string to NFC (Unicode Normalization Form Canonical Composition)."""
    return unicodedata.normalize("NFC", s)


def _render_string(s: str, path: str) -> str:
    """Render a string as a minimally escaped JSON literal.

    json.dumps(ensure_ascii=False) escapes exactly '"', '\\' and the C0
    control characters (lowercase \\u00xx where no short escape exists).
    """
    normalized = _normalize_string(s)
    try:
        normalized.encode("utf-8")
    except UnicodeEncodeError:
        raise UnsupportedTypeError(
            f"String at {path} is not valid Unicode (unpaired surrogate)", path
        )
    return json.dumps(normalized, ensure_ascii=False)


def _render_int(value: int) -> str:
    # int() strips IntEnum-style subclasses whose str() is not a number
    return str(int(value))


def _render_float(value: float, path: str) -> str:
    """Render a finite float as fixed-point decimal, at most 18 fractional digits.

    Rounds the exact binary value of the float, half away from zero, the
    same rule as ECMAScript Number.prototype.toFixed.
    """
    if not math.isfinite(value):
        raise NonFiniteNumberError(
            f"Invalid number at {path}: NaN or Infinity not allowed", path
        )
    quantized = Decimal(value).quantize(_FLOAT_QUANTUM, context=_FLOAT_CONTEXT)
    text = format(quantized, "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    if text == "-0":
        return "0"
    return text


class _Frame:
    """An open container: its closing bracket and the children still to render."""

    __slots__ = ("node_id", "close", "children", "count")

    def __init__(self, node_id: int, close: str, children: Iterator[Tuple[str, Any, str]]):
        self.node_id = node_id
        self.close = close
        self.children = children
        self.count = 0


def _enter(value: Any, path: str, active: Set[int], out: List[str], stack: List[_Frame]) -> None:
    """Emit a scalar, or open a container and push its frame."""
    if value is None:
        out.append("null")
    elif isinstance(value, bool):
        out.append("true" if value else "false")
    elif isinstance(value, int):
        out.append(_render_int(value))
    elif isinstance(value, float):
        out.append(_render_float(value, path))
    elif isinstance(value, str):
        out.append(_render_string(value, path))
    elif isinstance(value, (list, dict)):
        if id(value) in active:
            raise UnsupportedTypeError(f"Cyclic reference at {path}", path)
        active.add(id(value))
        if isinstance(value, list):
            out.append("[")
            children = (("", item, f"{path}[{i}]") for i, item in enumerate(value))
            stack.append(_Frame(id(value), "]", children))
        else:
            out.append("{")
            stack.append(_Frame(id(value), "}", _iter_pairs(value, path)))
    else:
        raise UnsupportedTypeError(
            f"Unsupported type at {path}: {type(value).__name__}. "
            f"Only None, bool, int, float, str, list and dict are allowed.",
            path,
        )


def _iter_pairs(mapping: dict, path: str) -> Iterator[Tuple[str, Any, str]]:
    """Yield (rendered key + ':', value, path) sorted by the UTF-8 bytes of the NFC keys."""
    keyed = {}
    for key, item in mapping.items():
        if not isinstance(key, str):
            raise UnsupportedTypeError(
                f"Dictionary keys must be strings at {path}, got {type(key).__name__}",
                path,
            )
        normalized = _normalize_string(key)
        if normalized in keyed:
            raise DuplicateKeyError(
                f"Duplicate key {normalized!r} at {path} after NFC normalization", path
            )
        keyed[normalized] = item

    for key in sorted(keyed, key=lambda k: k.encode("utf-8", "surrogatepass")):
        child_path = f"{path}.{key}"
        yield _render_string(key, child_path) + ":", keyed[key], child_path


def _render(value: Any, path: str) -> str:
    """Render depth-first with an explicit stack; nesting depth is not limited by recursion.

    `active` holds ids of the containers open on the current path.
    """
    out: List[str] = []
    stack: List[_Frame] = []
    active: Set[int] = set()
    _enter(value, path, active, out, stack)
    while stack:
        frame = stack[-1]
        step = next(frame.children, None)
        if step is None:
            stack.pop()
            active.discard(frame.node_id)
            out.append(frame.close)
            continue
        prefix, child, child_path = step
        if frame.count:
            out.append(",")
        frame.count += 1
        out.append(prefix)
        _enter(child, child_path, active, out, stack)
    return "".join(out)


def canonicalize(value: StructuredValue) -> str:
    """Render a JSON-like value to its canonical string.

    Args:
        value: None, bool, int, float, str, list or dict with str keys,
            nested arbitrarily

    Returns:
        Canonical JSON string (no whitespace)

    Raises:
        UnsupportedTypeError: a node is not one of the allowed types, a key is
            not a string, a container contains itself, or a string is not
            encodable as UTF-8
        NonFiniteNumberError: a float is NaN or infinite
        DuplicateKeyError: two keys collide after NFC normalization
    """
    return _render(value, "$")


def canonical_bytes(value: StructuredValue) -> bytes:
    """UTF-8 encoding of canonicalize(value); the exact bytes that get hashed."""
    return canonicalize(value).encode("utf-8")
