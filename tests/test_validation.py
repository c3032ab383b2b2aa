#!/usr/bin/env python3
"""Tests for record and owner file validation."""
import pytest

from models import RecordKind, ValidationError, validate_owner_data, validate_record
from models.validation import load_schema


def expense_body(**overrides):
    body = {
        "date": "2024-03-15",
        "category": "Fuel",
        "amount": 120.5,
        "description": "Diesel",
    }
    body.update(overrides)
    return body


def pay_body(**overrides):
    body = {
        "startDate": "2024-03-01",
        "endDate": "2024-03-14",
        "amount": 2000,
        "client": "Acme Freight",
    }
    body.update(overrides)
    return body


def maintenance_body(**overrides):
    body = {
        "date": "2024-03-20",
        "truckId": "t1",
        "serviceType": "Oil Change",
        "mileage": 125000,
        "cost": 75,
        "description": "Oil and filter",
    }
    body.update(overrides)
    return body


class TestLoadSchema:
    """Tests for load_schema function."""

    def test_has_definitions_for_every_kind(self):
        schema = load_schema()
        assert set(schema["$defs"]) >= {"truck", "expense", "pay", "maintenance"}
        assert set(schema["properties"]) == {"trucks", "expenses", "pay", "maintenance"}


class TestValidateRecord:
    """Tests for validate_record."""

    def test_valid_records_pass(self):
        validate_record(RecordKind.EXPENSE, expense_body(truckId="t1"))
        validate_record(RecordKind.PAY_ENTRY, pay_body(notes="Two loads"))
        validate_record(
            RecordKind.MAINTENANCE_LOG,
            maintenance_body(nextServiceDate="2024-06-20", nextServiceMileage=140000),
        )
        validate_record(
            RecordKind.TRUCK,
            {"name": "Big Blue", "identifier": "T-101", "make": "Peterbilt", "model": "579", "year": 2019},
        )

    @pytest.mark.parametrize("amount", [0, -5, "12"])
    def test_amount_must_be_positive_number(self, amount):
        with pytest.raises(ValidationError) as exc:
            validate_record(RecordKind.EXPENSE, expense_body(amount=amount))
        assert exc.value.field == "amount"

    def test_description_required(self):
        with pytest.raises(ValidationError):
            validate_record(RecordKind.EXPENSE, expense_body(description=""))
        body = expense_body()
        del body["description"]
        with pytest.raises(ValidationError):
            validate_record(RecordKind.EXPENSE, body)

    def test_unknown_category_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_record(RecordKind.EXPENSE, expense_body(category="Coffee"))
        assert exc.value.field == "category"

    def test_unpadded_date_rejected(self):
        with pytest.raises(ValidationError):
            validate_record(RecordKind.EXPENSE, expense_body(date="2024-3-15"))

    def test_impossible_date_rejected(self):
        with pytest.raises(ValidationError):
            validate_record(RecordKind.MAINTENANCE_LOG, maintenance_body(nextServiceDate="2024-02-31"))

    def test_pay_end_before_start_rejected(self):
        with pytest.raises(ValidationError) as exc:
            validate_record(RecordKind.PAY_ENTRY, pay_body(endDate="2024-02-28"))
        assert exc.value.field == "endDate"

    def test_pay_single_day_allowed(self):
        validate_record(RecordKind.PAY_ENTRY, pay_body(endDate="2024-03-01"))

    def test_maintenance_requires_truck(self):
        body = maintenance_body()
        del body["truckId"]
        with pytest.raises(ValidationError):
            validate_record(RecordKind.MAINTENANCE_LOG, body)

    def test_truck_year_must_be_positive_integer(self):
        with pytest.raises(ValidationError):
            validate_record(
                RecordKind.TRUCK,
                {"name": "A", "identifier": "B", "make": "C", "model": "D", "year": 0},
            )


class TestValidateOwnerData:
    """Tests for validate_owner_data."""

    def test_valid_file_passes(self):
        validate_owner_data(
            {
                "expenses": {"e1": expense_body()},
                "pay": {"p1": pay_body()},
                "maintenance": None,
            }
        )

    def test_bad_record_names_collection_and_id(self):
        with pytest.raises(ValidationError) as exc:
            validate_owner_data({"pay": {"p1": pay_body(endDate="2024-01-01")}})
        assert "pay.p1" in str(exc.value)

    def test_unknown_collection_rejected(self):
        with pytest.raises(ValidationError):
            validate_owner_data({"invoices": {}})
