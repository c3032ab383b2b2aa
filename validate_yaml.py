#!/usr/bin/env python3
"""Validate owner data YAML files against the schema and summarize their records."""
import sys
from pathlib import Path

import yaml

from config import Settings
from models import RecordKind, ValidationError, validate_owner_data

RECORD_NOUNS = {
    RecordKind.TRUCK: "trucks",
    RecordKind.EXPENSE: "expenses",
    RecordKind.PAY_ENTRY: "pay entries",
    RecordKind.MAINTENANCE_LOG: "maintenance logs",
}


def record_counts(data: dict) -> dict:
    """Number of records per kind in a validated owner file."""
    return {kind: len(data.get(kind.value) or {}) for kind in RecordKind}


def check_owner_file(filepath: Path) -> tuple[dict, list[str]]:
    """
    Validate a single owner YAML file.

    Returns (record counts, errors); counts are empty when the file has errors.
    """
    errors = []
    try:
        with open(filepath) as f:
            data = yaml.safe_load(f)
        data = data if data is not None else {}
        validate_owner_data(data)
        return record_counts(data), errors
    except yaml.YAMLError as e:
        errors.append(f"YAML parse error: {e}")
    except ValidationError as e:
        errors.append(f"Schema validation error: {e}")
        if e.field:
            errors.append(f"  at field: {e.field}")
    except OSError as e:
        errors.append(f"Error: {e}")
    return {}, errors


def validate_owner_file(filepath: Path) -> list[str]:
    """Validate a single owner YAML file. Returns list of errors."""
    return check_owner_file(filepath)[1]


def describe_counts(counts: dict) -> str:
    """'2 trucks, 14 expenses, 0 pay entries, 3 maintenance logs'"""
    return ", ".join(f"{counts[kind]} {RECORD_NOUNS[kind]}" for kind in RecordKind)


def main(argv=None):
    """Validate every owner file in the data directory."""
    argv = sys.argv[1:] if argv is None else argv
    data_dir = Path(argv[0]) if argv else Settings().data_dir

    if not data_dir.exists():
        print(f"Error: data directory not found: {data_dir}")
        return 1

    owner_files = sorted(list(data_dir.glob("*.yaml")) + list(data_dir.glob("*.yml")))
    if not owner_files:
        print(f"Warning: No owner files found in {data_dir}")
        return 0

    failed = 0
    for filepath in owner_files:
        owner = filepath.stem
        counts, errors = check_owner_file(filepath)
        if errors:
            failed += 1
            print(f"FAIL: {owner} ({filepath.name})")
            for error in errors:
                print(f"  {error}")
        else:
            print(f"OK: {owner}: {describe_counts(counts)}")

    print()
    print(f"Checked {len(owner_files)} owner files, {failed} failed.")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
