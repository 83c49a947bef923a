"""Unit tests for buyer payload validation."""

import pytest

from lead_intake.application.schemas import BuyerCreate, BuyerImportRow, BuyerUpdate, parse_model
from lead_intake.domain.entities import Bhk, BuyerStatus, City, PropertyType, Source, Timeline
from lead_intake.domain.exceptions import ValidationFailedError


def _messages(exc: ValidationFailedError) -> dict[str, str]:
    return {e.field: e.message for e in exc.errors}


def test_valid_payload(buyer_payload):
    data = parse_model(BuyerCreate, buyer_payload)
    assert data.full_name == "Ravi Kumar"
    assert data.city is City.MOHALI
    assert data.bhk is Bhk.TWO
    assert data.tags == ["hot", "nri"]


def test_defaults_apply_for_blank_values():
    data = parse_model(
        BuyerCreate,
        {
            "fullName": "Asha",
            "phone": "9876543210",
            "city": "",
            "propertyType": "",
            "bhk": "3",
            "timeline": None,
            "budgetMin": 0,
            "email": "",
        },
    )
    assert data.city is City.CHANDIGARH
    assert data.property_type is PropertyType.APARTMENT
    assert data.timeline is Timeline.ZERO_TO_THREE_MONTHS
    assert data.source is Source.WEBSITE
    assert data.budget_min is None
    assert data.email is None


def test_bhk_required_for_apartment_and_villa(buyer_payload):
    buyer_payload.pop("bhk")
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_model(BuyerCreate, buyer_payload)
    assert _messages(exc_info.value) == {"bhk": "BHK is required for Apartment and Villa"}

    buyer_payload["propertyType"] = "Plot"
    assert parse_model(BuyerCreate, buyer_payload).bhk is None


def test_budget_max_must_not_be_below_min(buyer_payload):
    buyer_payload["budgetMin"] = 8000000
    buyer_payload["budgetMax"] = 5000000
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_model(BuyerCreate, buyer_payload)
    assert _messages(exc_info.value)["budgetMax"] == (
        "Maximum budget must be greater than minimum budget"
    )


def test_equal_budgets_are_accepted(buyer_payload):
    buyer_payload["budgetMin"] = buyer_payload["budgetMax"] = 6000000
    data = parse_model(BuyerCreate, buyer_payload)
    assert data.budget_min == data.budget_max == 6000000


@pytest.mark.parametrize("phone", ["12", "98765-43210", "1234567890123456"])
def test_phone_must_be_10_to_15_digits(buyer_payload, phone):
    buyer_payload["phone"] = phone
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_model(BuyerCreate, buyer_payload)
    assert _messages(exc_info.value) == {"phone": "Phone must be 10-15 digits"}


def test_numeric_phone_is_accepted(buyer_payload):
    buyer_payload["phone"] = 9876543210
    assert parse_model(BuyerCreate, buyer_payload).phone == "9876543210"


def test_several_errors_are_reported_together(buyer_payload):
    buyer_payload.update(fullName="R", email="not-an-email", notes="x" * 1001)
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_model(BuyerCreate, buyer_payload)
    assert _messages(exc_info.value) == {
        "fullName": "Name must be at least 2 characters",
        "email": "Invalid email",
        "notes": "Notes must be less than 1000 characters",
    }


def test_unknown_enum_value_is_rejected(buyer_payload):
    buyer_payload["city"] = "Delhi"
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_model(BuyerCreate, buyer_payload)
    assert "city" in _messages(exc_info.value)


def test_non_list_tags_become_empty(buyer_payload):
    buyer_payload["tags"] = "hot"
    assert parse_model(BuyerCreate, buyer_payload).tags == []


def test_update_status_defaults_to_new(buyer_payload):
    assert parse_model(BuyerUpdate, buyer_payload).status is BuyerStatus.NEW
    buyer_payload["status"] = "Visited"
    assert parse_model(BuyerUpdate, buyer_payload).status is BuyerStatus.VISITED


def test_import_rows_default_source_is_import(buyer_payload):
    buyer_payload.pop("source")
    assert parse_model(BuyerImportRow, buyer_payload).source is Source.IMPORT


def test_non_object_body_is_rejected():
    with pytest.raises(ValidationFailedError) as exc_info:
        parse_model(BuyerCreate, ["not", "a", "dict"])
    assert exc_info.value.errors[0].field == "body"
