"""Schema validation for record bodies and owner data files."""

from functools import lru_cache
from pathlib import Path
from typing import Any, Dict

import yaml
from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from .categories import RecordKind
from .dates import parse_iso_date
from .errors import ValidationError

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"

# Schema definition used for each record kind
_DEFINITIONS = {
    RecordKind.TRUCK: "truck",
    RecordKind.EXPENSE: "expense",
    RecordKind.PAY_ENTRY: "pay",
    RecordKind.MAINTENANCE_LOG: "maintenance",
}

# Date fields that must also be real calendar dates
_DATE_FIELDS = {
    RecordKind.TRUCK: (),
    RecordKind.EXPENSE: ("date",),
    RecordKind.PAY_ENTRY: ("startDate", "endDate"),
    RecordKind.MAINTENANCE_LOG: ("date", "nextServiceDate"),
}


@lru_cache(maxsize=None)
def load_schema() -> dict:
    """Load the JSON schema from schema.yaml."""
    with open(SCHEMA_PATH) as f:
        return yaml.safe_load(f)


def _record_validator(kind: RecordKind) -> Draft202012Validator:
    schema = load_schema()
    return Draft202012Validator(
        {"$ref": f"#/$defs/{_DEFINITIONS[kind]}", "$defs": schema["$defs"]}
    )


def validate_record(kind: RecordKind, data: Dict[str, Any]) -> None:
    """
    Validate a record body (camelCase keys, no id) for the given kind.

    Raises ValidationError naming the first offending field.
    """
    error = best_match(_record_validator(kind).iter_errors(data))
    if error is not None:
        field = ".".join(str(p) for p in error.path) or None
        message = f"{field}: {error.message}" if field else error.message
        raise ValidationError(message, field)

    for field in _DATE_FIELDS[kind]:
        if data.get(field) is not None:
            parse_iso_date(data[field], field)

    if kind is RecordKind.PAY_ENTRY and data["endDate"] < data["startDate"]:
        raise ValidationError("End date must be after or equal to start date", "endDate")


def validate_owner_data(data: Any) -> None:
    """Validate a whole owner file, record by record."""
    error = best_match(Draft202012Validator(load_schema()).iter_errors(data))
    if error is not None:
        field = ".".join(str(p) for p in error.path) or None
        message = f"{field}: {error.message}" if field else error.message
        raise ValidationError(message, field)

    for kind in RecordKind:
        for record_id, body in (data.get(kind.value) or {}).items():
            try:
                validate_record(kind, body)
            except ValidationError as e:
                raise ValidationError(f"{kind.value}.{record_id}: {e}", e.field)
