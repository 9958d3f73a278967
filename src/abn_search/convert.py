"""Write entity records to CSV and JSONL."""

import csv
import json
from collections.abc import Sequence
from datetime import datetime, timezone
from pathlib import Path

from abn_search.config import ABR_ENDPOINT
from abn_search.entity import Entity
from abn_search.schema import SCHEMA_ID

# Mapping from Entity.to_dict() keys to CSV column headers
CSV_COLUMNS = {
    "abn": "ABN",
    "acn": "ACN",
    "abn_current": "ABN Current",
    "entity_type": "Entity Type",
    "status": "Status",
    "primary_name": "Primary Name",
    "secondary_name": "Secondary Name",
    "main_name": "Main Name",
    "trading_name": "Trading Name",
    "business_name": "Business Name",
    "legal_name": "Legal Name",
    "legal_name2": "Full Name",
    "other_trading_name": "Other Trading Name",
    "active_from_date": "Active From",
    "address_state_code": "State",
    "address_post_code": "Postcode",
    "address_from_date": "Address From",
    "last_updated": "Last Updated",
    "gst_from_date": "GST From",
}


def _csv_value(value: object) -> str:
    if value is None:
        return ""
    if isinstance(value, bool):
        return "Y" if value else "N"
    return str(value)


def write_csv(entities: Sequence[Entity], output: str | Path) -> int:
    """Write entities to a UTF-8 CSV file (with BOM for Excel compatibility).

    None fields are written as empty strings, booleans as Y/N.

    Returns number of data rows written.
    """
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8-sig", newline="") as f:
        writer = csv.writer(f, quoting=csv.QUOTE_MINIMAL)
        writer.writerow(CSV_COLUMNS.values())
        for entity in entities:
            d = entity.to_dict()
            writer.writerow([_csv_value(d[k]) for k in CSV_COLUMNS])

    return len(entities)


def write_jsonl(
    entities: Sequence[Entity],
    output: str | Path,
    query: str | None = None,
    source: str = ABR_ENDPOINT,
) -> int:
    """Write entities to a JSONL file (one JSON object per line).

    Format:
    - Line 1: metadata object with _metadata key
    - Lines 2+: one compact JSON object per entity (None → null)

    Returns number of data rows written.
    """
    path = Path(output)
    path.parent.mkdir(parents=True, exist_ok=True)

    with path.open("w", encoding="utf-8") as f:
        metadata = {
            "$schema": SCHEMA_ID,
            "_metadata": {
                "source": source,
                "query": query,
                "count": len(entities),
                "retrieved": datetime.now(timezone.utc).isoformat(timespec="seconds"),
            },
        }
        f.write(json.dumps(metadata, ensure_ascii=False) + "\n")

        for entity in entities:
            f.write(json.dumps(entity.to_dict(), ensure_ascii=False) + "\n")

    return len(entities)
