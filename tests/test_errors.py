import pytest
from sqlalchemy.exc import IntegrityError

from handyman.core.errors import conflict_message, error_body, flatten_validation_errors
from handyman.db.models.service import Service
from handyman.db.models.user import User


def test_error_body_shape():
    assert error_body("Nope") == {"error": "Nope"}
    assert error_body("Validation error", ["name: required"]) == {
        "error": "Validation error",
        "details": ["name: required"],
    }


def test_flatten_validation_errors_drops_location_prefix():
    errors = [
        {"loc": ("body", "email"), "msg": "value is not a valid email address"},
        {"loc": ("query", "page"), "msg": "Input should be greater than or equal to 1"},
        {"loc": ("body",), "msg": "Field required"},
    ]
    assert flatten_validation_errors(errors) == [
        "email: value is not a valid email address",
        "page: Input should be greater than or equal to 1",
        "Field required",
    ]


def test_duplicate_email_maps_to_conflict(Session):
    db = Session()
    db.add(User(name="A", email="a@example.com", password="x"))
    db.commit()
    db.add(User(name="B", email="A@EXAMPLE.com", password="y"))
    with pytest.raises(IntegrityError) as exc:
        db.commit()
    db.rollback()
    db.close()
    assert conflict_message(exc.value) == "User with this email already exists"


def test_duplicate_service_maps_to_conflict(Session):
    db = Session()
    db.add(Service(name="Pipe Repair", category="Plumbing", description="a"))
    db.commit()
    db.add(Service(name="Pipe Repair", category="Plumbing", description="b"))
    with pytest.raises(IntegrityError) as exc:
        db.commit()
    db.rollback()
    db.close()
    assert conflict_message(exc.value) == "Service with this name already exists in this category"
