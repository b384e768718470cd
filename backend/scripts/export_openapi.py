"""Write the assembled OpenAPI document to disk.

Usage: python scripts/export_openapi.py [output.json]
"""

import json
import sys
from pathlib import Path

from dynamic_crud.config import get_settings
from dynamic_crud.main import build_api_document


def main(argv: list[str]) -> None:
    output = Path(argv[1] if len(argv) > 1 else "openapi.json")
    document = build_api_document(get_settings())
    output.write_text(json.dumps(document, indent=2))
    print(f"wrote {output}")


if __name__ == "__main__":
    main(sys.argv)
