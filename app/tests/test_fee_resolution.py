from datetime import date, timedelta

import pytest

from app.core.exceptions import NotFoundError
from app.models.fee_structure_models import Semester
from app.models.payment_models import Payment, PaymentStatus, PaymentType, derive_payment_status
from app.schemas.fee_schemas import FeeStructureCreate
from app.services.fee_service import (
    DEFAULT_HOSTEL_FEE,
    DEFAULT_MESS_FEE,
    NOT_ASSIGNED,
    first_of_month,
    record_full_payment,
    resolve_fees,
)
from app.services.fee_structure_service import create_fee_structure

from conftest import make_course, make_fee_structure, make_room, make_student

AS_OF = date(2025, 8, 14)


@pytest.mark.parametrize(
    "amount, paid, expected",
    [
        (1000, 0, PaymentStatus.pending),
        (1000, 250, PaymentStatus.partial),
        (1000, 1000, PaymentStatus.paid),
        (1000, 1200, PaymentStatus.paid),
    ],
)
def test_derive_payment_status(amount, paid, expected):
    assert derive_payment_status(amount, paid) == expected


def test_first_of_month():
    assert first_of_month(date(2025, 2, 28)) == date(2025, 2, 1)


def test_double_room_total_from_published_structure(db):
    course = make_course(db)
    room = make_room(db, capacity=2)
    student = make_student(db, course, room=room)

    create_fee_structure(db, FeeStructureCreate(
        year=2025,
        semester=Semester.JUL_DEC,
        single_room_fees=18000,
        double_room_fees=15000,
        triple_room_fees=11000,
        hostel_fees=8000,
        mess_fees=6500,
        due_date=date.today() + timedelta(days=20),
    ))

    fees = resolve_fees(db, student.id, AS_OF)

    assert fees.room_type == "double"
    assert fees.hostel.base_hostel_fee == 8000
    assert fees.hostel.room_type_fee == 15000
    assert fees.hostel.total == 23000
    assert fees.mess.total == 6500
    assert fees.fees_configured is True


def test_single_room_round_trip_total(db):
    course = make_course(db)
    room = make_room(db, capacity=1)
    student = make_student(db, course, room=room)

    create_fee_structure(db, FeeStructureCreate(
        year=2025,
        semester="JUL-DEC",
        single_room_fees=15000,
        double_room_fees=12000,
        triple_room_fees=10000,
        hostel_fees=8000,
        mess_fees=6000,
        due_date=(date.today() + timedelta(days=15)).isoformat(),
    ))

    fees = resolve_fees(db, student.id, AS_OF)

    assert fees.room_type == "single"
    assert fees.hostel.total == 23000


def test_each_room_type_picks_its_own_fee(db):
    course = make_course(db)
    make_fee_structure(db, single_room_fees=20000, double_room_fees=14000, triple_room_fees=9000)
    totals = {}
    for capacity, roll_no in ((1, "AAA0000001"), (2, "AAA0000002"), (4, "AAA0000004")):
        room = make_room(db, f"R-{capacity}", capacity=capacity)
        student = make_student(db, course, roll_no=roll_no, room=room)
        totals[capacity] = resolve_fees(db, student.id, AS_OF).hostel.total

    assert totals == {1: 28000, 2: 22000, 4: 17000}


def test_student_without_room_pays_base_fee_only(db):
    course = make_course(db)
    student = make_student(db, course)
    make_fee_structure(db, hostel_fees=8000)

    fees = resolve_fees(db, student.id, AS_OF)

    assert fees.room_type == NOT_ASSIGNED
    assert fees.room_number is None
    assert fees.hostel.room_type_fee == 0
    assert fees.hostel.total == 8000


def test_latest_structure_by_year_wins(db):
    course = make_course(db)
    room = make_room(db, capacity=1)
    student = make_student(db, course, room=room)
    make_fee_structure(db, year=2024, hostel_fees=5000, single_room_fees=10000)
    latest = make_fee_structure(db, year=2026, semester=Semester.JAN_MAY, hostel_fees=9000, single_room_fees=16000)
    make_fee_structure(db, year=2025, hostel_fees=7000, single_room_fees=12000)

    fees = resolve_fees(db, student.id, AS_OF)

    assert fees.fee_structure_id == latest.id
    assert fees.hostel.total == 25000


def test_defaults_when_nothing_is_configured(db):
    course = make_course(db)
    room = make_room(db, capacity=2)
    student = make_student(db, course, room=room)

    fees = resolve_fees(db, student.id, AS_OF)

    assert fees.fees_configured is False
    assert fees.fee_structure_id is None
    assert fees.hostel.total == DEFAULT_HOSTEL_FEE + 12000
    assert fees.mess.total == DEFAULT_MESS_FEE
    assert fees.hostel.status == PaymentStatus.pending
    assert fees.hostel.paid_amount == 0
    assert fees.hostel.payment_id is None


def test_month_payment_status_is_reported(db):
    course = make_course(db)
    student = make_student(db, course)
    make_fee_structure(db)
    db.add(Payment(
        student_id=student.id,
        type=PaymentType.mess,
        amount=6000,
        paid_amount=2000,
        due_date=date(2025, 8, 1),
        status=PaymentStatus.partial,
    ))
    # previous month does not count
    db.add(Payment(
        student_id=student.id,
        type=PaymentType.hostel,
        amount=8000,
        paid_amount=8000,
        due_date=date(2025, 7, 1),
        status=PaymentStatus.paid,
    ))
    db.commit()

    fees = resolve_fees(db, student.id, AS_OF)

    assert fees.mess.status == PaymentStatus.partial
    assert fees.mess.paid_amount == 2000
    assert fees.mess.due_date == date(2025, 8, 1)
    assert fees.hostel.status == PaymentStatus.pending
    assert fees.hostel.payment_id is None


def test_resolve_unknown_student(db):
    with pytest.raises(NotFoundError):
        resolve_fees(db, "missing-student", AS_OF)


def test_record_full_payment_creates_month_row(db):
    course = make_course(db)
    room = make_room(db, capacity=2)
    student = make_student(db, course, room=room)
    make_fee_structure(db, hostel_fees=8000, double_room_fees=15000)

    payment = record_full_payment(db, student.id, PaymentType.hostel, AS_OF)

    assert payment.amount == 23000
    assert payment.paid_amount == 23000
    assert payment.status == PaymentStatus.paid
    assert payment.due_date == date(2025, 8, 1)

    fees = resolve_fees(db, student.id, AS_OF)
    assert fees.hostel.status == PaymentStatus.paid
    assert fees.hostel.payment_id == payment.id
    assert fees.mess.status == PaymentStatus.pending


def test_record_full_payment_completes_existing_row(db):
    course = make_course(db)
    student = make_student(db, course)
    existing = Payment(
        student_id=student.id,
        type=PaymentType.mess,
        amount=5500,
        paid_amount=1000,
        due_date=date(2025, 8, 1),
        status=PaymentStatus.partial,
    )
    db.add(existing)
    db.commit()

    payment = record_full_payment(db, student.id, PaymentType.mess, AS_OF)
    again = record_full_payment(db, student.id, PaymentType.mess, AS_OF)

    assert payment.id == existing.id == again.id
    assert again.amount == 5500
    assert again.paid_amount == 5500
    assert again.status == PaymentStatus.paid
    assert db.query(Payment).filter(Payment.student_id == student.id).count() == 1


def test_payment_alone_marks_fees_configured(db):
    course = make_course(db)
    student = make_student(db, course)

    record_full_payment(db, student.id, PaymentType.mess, AS_OF)
    fees = resolve_fees(db, student.id, AS_OF)

    assert fees.fees_configured is True
    assert fees.mess.total == DEFAULT_MESS_FEE
    assert fees.mess.status == PaymentStatus.paid
