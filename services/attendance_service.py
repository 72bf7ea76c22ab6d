"""
services/attendance_service.py

일별 출결 기록 + 출석률 재계산 호출.
"""

import logging
from datetime import date
from typing import List

from sqlalchemy.orm import Session

from models.attendance import AttendanceRecord
from models.enrollments import Enrollment
from services.exceptions import DuplicateAttendanceError, NotFoundError, ValidationError
from services.grade_service import ensure_offering_open
from services.locks import enrollment_lock
from services.lookups import check_id, get_or_404
from services.recompute_service import lock_enrollment, recompute_attendance
from services.transaction import transaction

logger = logging.getLogger(__name__)


def _check_date(class_date) -> date:
    if not isinstance(class_date, date):
        raise ValidationError(f"Invalid class date: {class_date!r}", code="INVALID_DATE")
    return class_date


def _find_record(db: Session, enrollment_id: int, class_date: date) -> AttendanceRecord:
    record = (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.enrollment_id == enrollment_id, AttendanceRecord.class_date == class_date)
        .first()
    )
    if record is None:
        raise NotFoundError(
            f"No attendance for enrollment {enrollment_id} on {class_date}", code="ATTENDANCE_NOT_FOUND"
        )
    return record


# ==========================================================
# [1단계] 출결 등록 (RecordAttendance)
# ==========================================================
def record_attendance(db: Session, enrollment_id: int, class_date: date, present: bool) -> AttendanceRecord:
    check_id(enrollment_id, "enrollment")
    _check_date(class_date)
    duplicate = DuplicateAttendanceError(
        f"Attendance already recorded for enrollment {enrollment_id} on {class_date}"
    )

    with enrollment_lock(enrollment_id):
        with transaction(db, integrity_error=duplicate):
            enrollment = lock_enrollment(db, enrollment_id, referenced=True)
            ensure_offering_open(enrollment.offering)

            exists = (
                db.query(AttendanceRecord.id)
                .filter(AttendanceRecord.enrollment_id == enrollment_id, AttendanceRecord.class_date == class_date)
                .first()
            )
            if exists:
                raise duplicate

            record = AttendanceRecord(enrollment_id=enrollment_id, class_date=class_date, present=bool(present))
            db.add(record)
            db.flush()
            recompute_attendance(db, enrollment_id)

    db.refresh(record)
    logger.info(f"출결 등록: enrollment_id={enrollment_id}, date={class_date}, present={present}")
    return record


# ==========================================================
# [2단계] 출결 수정 (enrollment_id + date 기준)
# ==========================================================
def update_attendance(db: Session, enrollment_id: int, class_date: date, present: bool) -> AttendanceRecord:
    _check_date(class_date)
    check_id(enrollment_id, "enrollment")

    with enrollment_lock(enrollment_id):
        with transaction(db):
            enrollment = lock_enrollment(db, enrollment_id)
            ensure_offering_open(enrollment.offering)
            record = _find_record(db, enrollment_id, class_date)
            record.present = bool(present)
            db.flush()
            recompute_attendance(db, enrollment_id)

    db.refresh(record)
    logger.info(f"출결 수정: enrollment_id={enrollment_id}, date={class_date}, present={present}")
    return record


# ==========================================================
# [3단계] 출결 삭제 (enrollment_id + date 기준)
# ==========================================================
def delete_attendance(db: Session, enrollment_id: int, class_date: date) -> Enrollment:
    _check_date(class_date)
    check_id(enrollment_id, "enrollment")

    with enrollment_lock(enrollment_id):
        with transaction(db):
            enrollment = lock_enrollment(db, enrollment_id)
            ensure_offering_open(enrollment.offering)
            db.delete(_find_record(db, enrollment_id, class_date))
            db.flush()
            enrollment = recompute_attendance(db, enrollment_id)

    logger.info(f"출결 삭제: enrollment_id={enrollment_id}, date={class_date}")
    return enrollment


# ==========================================================
# [조회]
# ==========================================================
def list_attendance(db: Session, enrollment_id: int) -> List[AttendanceRecord]:
    get_or_404(db, Enrollment, enrollment_id, "enrollment")
    return (
        db.query(AttendanceRecord)
        .filter(AttendanceRecord.enrollment_id == enrollment_id)
        .order_by(AttendanceRecord.class_date)
        .all()
    )
