from datetime import date
from decimal import Decimal

import pytest

from models.attendance import AttendanceRecord
from models.enrollments import Enrollment, EnrollmentStatus
from services import attendance_service, catalog_service
from services.exceptions import DuplicateAttendanceError, NotFoundError, ReferentialError, ValidationError


def _percentage(db, enrollment_id) -> Decimal:
    db.expire_all()
    return db.get(Enrollment, enrollment_id).attendance_percentage


def test_two_present_one_absent(db, school):
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), True)
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 5), True)
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 10), False)

    assert _percentage(db, school.enrollment_id) == Decimal("66.67")


def test_no_records_keeps_default(db, school):
    assert _percentage(db, school.enrollment_id) == Decimal("100.00")


def test_attendance_does_not_change_status(db, school):
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), False)

    db.expire_all()
    enrollment = db.get(Enrollment, school.enrollment_id)
    assert enrollment.attendance_percentage == Decimal("0.00")
    assert enrollment.status == EnrollmentStatus.IN_PROGRESS
    assert enrollment.final_average is None


def test_duplicate_attendance_same_day(db, school):
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), True)

    with pytest.raises(DuplicateAttendanceError):
        attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), False)

    assert db.query(AttendanceRecord).count() == 1
    assert _percentage(db, school.enrollment_id) == Decimal("100.00")


def test_attendance_for_missing_enrollment(db, school):
    with pytest.raises(ReferentialError):
        attendance_service.record_attendance(db, 31337, date(2025, 3, 3), True)


def test_attendance_rejects_non_date(db, school):
    with pytest.raises(ValidationError):
        attendance_service.record_attendance(db, school.enrollment_id, "2025-03-03", True)


def test_update_attendance_recomputes(db, school):
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), True)
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 5), False)
    assert _percentage(db, school.enrollment_id) == Decimal("50.00")

    attendance_service.update_attendance(db, school.enrollment_id, date(2025, 3, 5), True)

    assert _percentage(db, school.enrollment_id) == Decimal("100.00")


def test_delete_attendance_back_to_zero_records(db, school):
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), False)
    assert _percentage(db, school.enrollment_id) == Decimal("0.00")

    attendance_service.delete_attendance(db, school.enrollment_id, date(2025, 3, 3))

    assert _percentage(db, school.enrollment_id) == Decimal("100.00")


def test_update_missing_attendance(db, school):
    with pytest.raises(NotFoundError):
        attendance_service.update_attendance(db, school.enrollment_id, date(2025, 4, 1), True)


def test_closed_offering_rejects_attendance(db, school):
    catalog_service.close_offering(db, school.offering_id)

    with pytest.raises(ValidationError):
        attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), True)


def test_list_attendance_ordered_by_date(db, school):
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 10), True)
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), False)

    records = attendance_service.list_attendance(db, school.enrollment_id)
    assert [r.class_date for r in records] == [date(2025, 3, 3), date(2025, 3, 10)]
