# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""JSON Schema for entity records."""

import json
from pathlib import Path

SCHEMA_ID = "https://abn-search.invalid/schema/entity.json-schema.json"

_OPTIONAL_STRING = {"type": ["string", "null"]}


def _opt(description: str, **extra: object) -> dict[str, object]:
    return {**_OPTIONAL_STRING, "description": description, **extra}


# JSON Schema (Draft 2020-12)
JSON_SCHEMA: dict[str, object] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "$id": SCHEMA_ID,
    "title": "Entity",
    "description": "A business entity from the Australian Business Register",
    "type": "object",
    "required": ["abn", "acn", "primary_name"],
    "additionalProperties": False,
    "properties": {
        "abn": _opt("Australian Business Number", pattern=r"^\d{11}$"),
        "acn": _opt("Australian Company Number (ASIC number)", pattern=r"^\d{9}$"),
        "abn_current": {
            "type": ["boolean", "null"],
            "description": "Whether this is the entity's current ABN",
        },
        "entity_type": _opt("Entity type description"),
        "status": _opt("Entity status code (ACT, CAN)"),
        "main_name": _opt("Main organisation name"),
        "trading_name": _opt("Main trading name"),
        "business_name": _opt("Registered business name"),
        "legal_name": _opt("Legal name of an individual (given and family name)"),
        "legal_name2": _opt("Full name of an individual"),
        "other_trading_name": _opt("Other trading name"),
        "active_from_date": _opt("Status effective from (ISO 8601)", format="date"),
        "address_state_code": _opt("State of the main business address"),
        "address_post_code": _opt("Postcode of the main business address"),
        "address_from_date": _opt("Address effective from (ISO 8601)", format="date"),
        "last_updated": _opt("Record last updated (ISO 8601)", format="date"),
        "gst_from_date": _opt("GST registration effective from (ISO 8601)", format="date"),
        "primary_name": _opt("Most authoritative known name"),
        "secondary_name": _opt("First name not containing the primary name"),
    },
}


def write_json_schema(output: str | Path) -> None:
    """Write the JSON Schema to a file."""
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(JSON_SCHEMA, ensure_ascii=False, indent=2) + "\n",
        encoding="utf-8",
    )
