"""Generate the catalogue JSON schema and the built-in catalogue, saved to schemas/."""

import json
from pathlib import Path
from typing import Optional

from actp_hash.catalogue import AGIRAILS_CATALOGUE, Catalogue


def generate_schemas(schemas_dir: Optional[Path] = None):
    """Write catalogue.schema.json and agirails_catalogue.json."""
    if schemas_dir is None:
        schemas_dir = Path(__file__).parent.parent / "schemas"
    schemas_dir.mkdir(exist_ok=True)

    catalogue_schema = Catalogue.model_json_schema()
    catalogue_schema_path = schemas_dir / "catalogue.schema.json"
    with open(catalogue_schema_path, 'w', encoding='utf-8') as f:
        json.dump(catalogue_schema, f, indent=2, ensure_ascii=False)
    print(f"Generated: {catalogue_schema_path}")

    # Editable starting point for --catalogue
    catalogue_path = schemas_dir / "agirails_catalogue.json"
    with open(catalogue_path, 'w', encoding='utf-8') as f:
        f.write(AGIRAILS_CATALOGUE.model_dump_json(indent=2))
        f.write("\n")
    print(f"Generated: {catalogue_path}")

    print("\nSchema generation complete!")


if __name__ == "__main__":
    generate_schemas()
