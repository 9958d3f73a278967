# Copyright 2026 The abn-search Authors.
# SPDX-License-Identifier: Apache-2.0

"""Re-read written output files and check they agree."""

import csv
import json
from pathlib import Path

import jsonschema  # type: ignore


def verify_outputs(
    csv_path: str | Path,
    jsonl_path: str | Path,
    expected_count: int,
    json_schema_path: str | Path | None = None,
) -> list[str]:
    """Verify output files for record counts, spot-checks, and schema compliance.

    Checks:
    1. CSV: count data rows (skip header row)
    2. JSONL: count non-metadata lines
    3. Both counts must equal expected_count
    4. Spot-check: first and last record's ABN must match across formats
    5. If a schema path is provided, validate every JSONL record against it.

    Returns a list of error messages. An empty list means all checks passed.
    """
    errors: list[str] = []

    csv_count, csv_abns = _count_csv(Path(csv_path))
    jsonl_count, jsonl_abns = _count_jsonl(Path(jsonl_path))

    for fmt, count in [("CSV", csv_count), ("JSONL", jsonl_count)]:
        if count != expected_count:
            errors.append(f"{fmt}: expected {expected_count} records, found {count}")

    if csv_abns and jsonl_abns:
        for idx, label in [(0, "First"), (-1, "Last")]:
            if csv_abns[idx] != jsonl_abns[idx]:
                errors.append(
                    f"{label} record ABN mismatch: CSV={csv_abns[idx]!r} "
                    f"JSONL={jsonl_abns[idx]!r}"
                )

    if json_schema_path:
        errors.extend(verify_schema(jsonl_path, json_schema_path))

    return errors


def verify_schema(jsonl_path: str | Path, json_schema_path: str | Path) -> list[str]:
    """Validate every JSONL record against the JSON Schema."""
    errors: list[str] = []
    with open(json_schema_path, encoding="utf-8") as f:
        schema = json.load(f)
    validator = jsonschema.Draft202012Validator(schema)

    with open(jsonl_path, encoding="utf-8") as f:
        for line_no, line in enumerate(f, 1):
            if not line.strip():
                continue
            obj = json.loads(line)
            if "_metadata" in obj:
                continue
            for err in validator.iter_errors(obj):
                errors.append(f"JSONL line {line_no}: {err.message}")
    return errors


def _count_csv(path: Path) -> tuple[int, list[str]]:
    """Return (data row count, [first_abn, last_abn]) from a CSV output file."""
    with path.open(encoding="utf-8-sig", newline="") as f:
        abns = [row.get("ABN", "") for row in csv.DictReader(f)]
    return len(abns), ([abns[0], abns[-1]] if abns else [])


def _count_jsonl(path: Path) -> tuple[int, list[str]]:
    """Return (data row count, [first_abn, last_abn]) from a JSONL output file."""
    abns: list[str] = []
    with path.open(encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if not line:
                continue
            obj = json.loads(line)
            if "_metadata" in obj:
                continue
            abns.append(obj.get("abn") or "")
    return len(abns), ([abns[0], abns[-1]] if abns else [])
