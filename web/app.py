"""Flask web application for trucking records and exports."""

import logging
from datetime import date
from pathlib import Path

from flask import Flask, Response, jsonify, request

# Add parent directory to path for model imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from config import Settings, setup_logging
from models import (
    RecordKind,
    RecordStore,
    TruckLedgerError,
    UnauthenticatedError,
    UpstreamStoreError,
    ValidationError,
    record_from_dict,
    record_to_dict,
    validate_record,
)
from models.dates import start_of_year
from reports import DataType, ExportFormat, Granularity, export_records, export_tax_report

logger = logging.getLogger(__name__)

settings = Settings()

app = Flask(__name__)
app.secret_key = settings.secret_key
app.config["DATA_DIR"] = settings.data_dir


def get_store() -> RecordStore:
    return RecordStore(app.config["DATA_DIR"])


def get_owner() -> str:
    """Owner id from the X-Owner-Id header or the owner query parameter."""
    owner = request.headers.get("X-Owner-Id") or request.args.get("owner")
    if not owner:
        raise UnauthenticatedError()
    return owner


def get_kind(kind_name: str) -> RecordKind:
    try:
        return RecordKind.from_name(kind_name)
    except ValueError as e:
        raise ValidationError(str(e), "kind")


def parse_choice(enum_cls, name: str, default: str):
    """Read an enum-valued query parameter."""
    value = request.args.get(name, default)
    try:
        return enum_cls(value)
    except ValueError:
        choices = ", ".join(e.value for e in enum_cls)
        raise ValidationError(f"{name} must be one of: {choices}", name)


def get_body(kind: RecordKind) -> dict:
    """Validated JSON record body from the request; any id in it is ignored."""
    body = request.get_json(silent=True)
    if not isinstance(body, dict):
        raise ValidationError("Request body must be a JSON object")
    body.pop("id", None)
    validate_record(kind, body)
    return body


def record_json(kind: RecordKind, record) -> dict:
    return {"id": record.id, **record_to_dict(kind, record)}


def artifact_response(artifact) -> Response:
    """CSV exports download as attachments; printable ones render inline."""
    response = Response(artifact.content, content_type=artifact.mime_type)
    if not artifact.is_printable:
        response.headers["Content-Disposition"] = (
            f'attachment; filename="{artifact.filename}"'
        )
    return response


@app.errorhandler(TruckLedgerError)
def handle_ledger_error(error: TruckLedgerError):
    """Report handled errors as JSON with the message shown verbatim."""
    if isinstance(error, UnauthenticatedError):
        status = 401
    elif isinstance(error, ValidationError):
        status = 400
    elif isinstance(error, UpstreamStoreError):
        status = 502
    else:
        status = 500
    logger.info("Request failed (%d): %s", status, error)
    return jsonify({"error": str(error)}), status


# =============================================================================
# Records API
# =============================================================================


@app.route("/api/<kind_name>", methods=["GET"])
def list_records(kind_name: str):
    kind = get_kind(kind_name)
    records = get_store().fetch(get_owner(), kind)
    return jsonify([record_json(kind, r) for r in records])


@app.route("/api/<kind_name>", methods=["POST"])
def add_record(kind_name: str):
    kind = get_kind(kind_name)
    owner = get_owner()
    body = get_body(kind)

    record = get_store().add(owner, kind, record_from_dict(kind, body))
    return jsonify(record_json(kind, record)), 201


@app.route("/api/<kind_name>/<record_id>", methods=["PUT"])
def update_record(kind_name: str, record_id: str):
    kind = get_kind(kind_name)
    owner = get_owner()
    body = get_body(kind)

    record = get_store().update(owner, kind, record_id, record_from_dict(kind, body))
    return jsonify(record_json(kind, record))


@app.route("/api/<kind_name>/<record_id>", methods=["DELETE"])
def delete_record(kind_name: str, record_id: str):
    kind = get_kind(kind_name)
    deleted = get_store().delete(get_owner(), kind, record_id)
    return jsonify({"id": deleted})


# =============================================================================
# Exports
# =============================================================================


@app.route("/export")
def export():
    """Raw record export: CSV download or printable page."""
    owner = get_owner()
    store = get_store()
    today = date.today()

    artifact = export_records(
        store.fetch_expenses(owner),
        store.fetch_pay_entries(owner),
        store.fetch_maintenance_logs(owner),
        parse_choice(DataType, "type", DataType.ALL.value),
        request.args.get("start") or start_of_year(today).isoformat(),
        request.args.get("end") or today.isoformat(),
        parse_choice(ExportFormat, "format", ExportFormat.CSV.value),
        trucks_map=store.trucks_map(owner),
        today=today,
        escape=request.args.get("escape", "").lower() == "true",
    )
    return artifact_response(artifact)


@app.route("/tax-report")
def tax_report():
    """Tax report: CSV download or printable page."""
    owner = get_owner()
    store = get_store()

    year_arg = request.args.get("year") or str(date.today().year)
    if not year_arg.isdigit() or not 1 <= int(year_arg) <= 9999:
        raise ValidationError("year must be a four digit number", "year")

    artifact = export_tax_report(
        store.fetch_expenses(owner),
        store.fetch_pay_entries(owner),
        store.fetch_maintenance_logs(owner),
        parse_choice(Granularity, "reportType", Granularity.ANNUAL.value),
        int(year_arg),
        parse_choice(ExportFormat, "format", ExportFormat.CSV.value),
        escape=request.args.get("escape", "").lower() == "true",
    )
    return artifact_response(artifact)


if __name__ == "__main__":
    setup_logging(settings.log_level)
    # Using 5001 to avoid conflict with macOS AirPlay Receiver on 5000
    app.run(debug=True, host="0.0.0.0", port=settings.web_port)
