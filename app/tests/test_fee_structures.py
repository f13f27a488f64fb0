from datetime import date, timedelta

import pytest
from pydantic import ValidationError as SchemaValidationError

from app.core.exceptions import ConflictError, NotFoundError, ValidationError
from app.models.fee_structure_models import FeeStructure, Semester
from app.schemas.fee_schemas import FeeStructureCreate, FeeStructureUpdate
from app.services.fee_structure_service import (
    MIN_DUE_DATE_LEAD_DAYS,
    create_fee_structure,
    delete_fee_structure,
    list_fee_structures,
    update_fee_structure,
)


def _payload(year=2025, semester=Semester.JUL_DEC, due_in_days=30, **overrides):
    data = {
        "year": year,
        "semester": semester,
        "single_room_fees": 15000,
        "double_room_fees": 12000,
        "triple_room_fees": 10000,
        "hostel_fees": 8000,
        "mess_fees": 6000,
        "due_date": date.today() + timedelta(days=due_in_days),
    }
    data.update(overrides)
    return FeeStructureCreate(**data)


def test_create_fee_structure(db):
    structure = create_fee_structure(db, _payload())

    assert structure.id
    assert structure.semester == Semester.JUL_DEC
    assert structure.hostel_fees == 8000


def test_duplicate_period_is_rejected_without_new_row(db):
    create_fee_structure(db, _payload())

    with pytest.raises(ConflictError) as exc:
        create_fee_structure(db, _payload(hostel_fees=9000))

    assert exc.value.detail == "A fee structure for 2025 (JUL-DEC) already exists"
    assert db.query(FeeStructure).count() == 1


def test_same_year_other_semester_is_allowed(db):
    create_fee_structure(db, _payload(semester=Semester.JUL_DEC))
    create_fee_structure(db, _payload(semester=Semester.JAN_MAY))

    assert db.query(FeeStructure).count() == 2


def test_due_date_must_be_far_enough_ahead(db):
    with pytest.raises(ValidationError):
        create_fee_structure(db, _payload(due_in_days=MIN_DUE_DATE_LEAD_DAYS - 1))

    structure = create_fee_structure(db, _payload(due_in_days=MIN_DUE_DATE_LEAD_DAYS))
    assert structure.due_date == date.today() + timedelta(days=MIN_DUE_DATE_LEAD_DAYS)


def test_due_date_format_is_checked():
    with pytest.raises(SchemaValidationError):
        FeeStructureCreate(
            year=2025,
            semester="JUL-DEC",
            single_room_fees=1,
            double_room_fees=1,
            triple_room_fees=1,
            hostel_fees=1,
            mess_fees=1,
            due_date="15/08/2025",
        )


def test_negative_fee_is_rejected():
    with pytest.raises(SchemaValidationError):
        _payload(mess_fees=-1)


def test_update_may_keep_its_own_period(db):
    structure = create_fee_structure(db, _payload())

    updated = update_fee_structure(db, structure.id, FeeStructureUpdate(
        **_payload(hostel_fees=9500).model_dump()
    ))

    assert updated.id == structure.id
    assert updated.hostel_fees == 9500


def test_update_into_taken_period_conflicts(db):
    create_fee_structure(db, _payload(year=2025))
    other = create_fee_structure(db, _payload(year=2026))

    with pytest.raises(ConflictError):
        update_fee_structure(db, other.id, _payload(year=2025))

    db.expire_all()
    assert db.query(FeeStructure).filter(FeeStructure.id == other.id).one().year == 2026


def test_update_checks_due_date(db):
    structure = create_fee_structure(db, _payload())

    with pytest.raises(ValidationError):
        update_fee_structure(db, structure.id, _payload(due_in_days=1))


def test_list_is_newest_year_first(db):
    create_fee_structure(db, _payload(year=2024))
    create_fee_structure(db, _payload(year=2026))
    create_fee_structure(db, _payload(year=2025))

    assert [s.year for s in list_fee_structures(db)] == [2026, 2025, 2024]


def test_delete_fee_structure(db):
    structure = create_fee_structure(db, _payload())

    delete_fee_structure(db, structure.id)
    assert db.query(FeeStructure).count() == 0

    with pytest.raises(NotFoundError):
        delete_fee_structure(db, structure.id)

    with pytest.raises(NotFoundError):
        update_fee_structure(db, structure.id, _payload())
