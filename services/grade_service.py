"""
services/grade_service.py

점수 입력/수정/삭제 + 평균 재계산 호출.
모든 쓰기는 [수강 잠금(첫 쿼리) → 검증 → 저장 → recompute_average → commit] 순서로
하나의 트랜잭션 안에서 처리됨.
"""

import logging
from decimal import Decimal, InvalidOperation
from typing import List

from sqlalchemy.orm import Session

from models.assessments import AssessmentConfig
from models.enrollments import Enrollment
from models.grades import Grade
from models.offerings import Offering
from services.exceptions import DuplicateGradeError, NotFoundError, ValidationError
from services.locks import enrollment_lock, enrollment_locks
from services.lookups import check_id, get_or_404, require_ref
from services.recompute_service import lock_enrollment, recompute_average, recompute_attendance
from services.transaction import transaction

logger = logging.getLogger(__name__)

GRADE_MIN = Decimal("0")
GRADE_MAX = Decimal("10")
GRADE_PLACES = Decimal("0.01")


def validate_grade_value(value) -> Decimal:
    """0~10 사이, 소수점 둘째 자리까지의 숫자만 허용"""
    if value is None or isinstance(value, bool):
        raise ValidationError(f"Grade value {value!r} is not a number", code="INVALID_VALUE")
    try:
        parsed = Decimal(str(value))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Grade value {value!r} is not a number", code="INVALID_VALUE")

    if not parsed.is_finite() or parsed < GRADE_MIN or parsed > GRADE_MAX:
        raise ValidationError(f"Grade value {value} must be between 0 and 10", code="INVALID_VALUE")
    if parsed != parsed.quantize(GRADE_PLACES):
        raise ValidationError(f"Grade value {value} has more than two decimal places", code="INVALID_VALUE")
    return parsed.quantize(GRADE_PLACES)


def ensure_offering_open(offering: Offering):
    if offering.closed:
        raise ValidationError(f"Offering {offering.id} is closed", code="OFFERING_CLOSED")


# ==========================================================
# [1단계] 점수 입력 (RecordGrade)
# ==========================================================
def record_grade(db: Session, enrollment_id: int, assessment_id: int, value) -> Grade:
    value = validate_grade_value(value)
    check_id(enrollment_id, "enrollment")
    duplicate = DuplicateGradeError(
        f"Grade already recorded for enrollment {enrollment_id} / assessment {assessment_id}"
    )

    with enrollment_lock(enrollment_id):
        with transaction(db, integrity_error=duplicate):
            enrollment = lock_enrollment(db, enrollment_id, referenced=True)
            assessment = require_ref(db, AssessmentConfig, assessment_id, "assessment")
            if assessment.offering_id != enrollment.offering_id:
                raise ValidationError(
                    f"Assessment {assessment_id} does not belong to offering {enrollment.offering_id}",
                    code="ASSESSMENT_MISMATCH",
                )
            ensure_offering_open(enrollment.offering)

            exists = (
                db.query(Grade.id)
                .filter(Grade.enrollment_id == enrollment_id, Grade.assessment_id == assessment_id)
                .first()
            )
            if exists:
                raise duplicate

            grade = Grade(enrollment_id=enrollment_id, assessment_id=assessment_id, value=value)
            db.add(grade)
            db.flush()
            recompute_average(db, enrollment_id)

    db.refresh(grade)
    logger.info(f"점수 입력: grade_id={grade.id}, enrollment_id={enrollment_id}, value={value}")
    return grade


def _grade_enrollment_id(db: Session, grade_id: int) -> int:
    """점수가 속한 수강 ID만 먼저 확인하고 조회 트랜잭션은 닫음"""
    enrollment_id = get_or_404(db, Grade, grade_id, "grade").enrollment_id
    db.rollback()
    return enrollment_id


def _load_grade(db: Session, grade_id: int) -> Grade:
    grade = db.query(Grade).filter(Grade.id == grade_id).populate_existing().first()
    if grade is None:
        raise NotFoundError(f"Grade {grade_id} not found", code="GRADE_NOT_FOUND")
    return grade


# ==========================================================
# [2단계] 점수 수정 (UpdateGrade)
# ==========================================================
def update_grade(db: Session, grade_id: int, new_value) -> Grade:
    new_value = validate_grade_value(new_value)
    enrollment_id = _grade_enrollment_id(db, grade_id)

    with enrollment_lock(enrollment_id):
        with transaction(db):
            enrollment = lock_enrollment(db, enrollment_id)
            grade = _load_grade(db, grade_id)
            ensure_offering_open(enrollment.offering)
            grade.value = new_value
            db.flush()
            recompute_average(db, enrollment_id)

    db.refresh(grade)
    logger.info(f"점수 수정: grade_id={grade_id}, enrollment_id={enrollment_id}, value={new_value}")
    return grade


# ==========================================================
# [3단계] 점수 삭제
# ==========================================================
def delete_grade(db: Session, grade_id: int) -> Enrollment:
    enrollment_id = _grade_enrollment_id(db, grade_id)

    with enrollment_lock(enrollment_id):
        with transaction(db):
            enrollment = lock_enrollment(db, enrollment_id)
            grade = _load_grade(db, grade_id)
            ensure_offering_open(enrollment.offering)
            db.delete(grade)
            db.flush()
            enrollment = recompute_average(db, enrollment_id)

    logger.info(f"점수 삭제: grade_id={grade_id}, enrollment_id={enrollment_id}")
    return enrollment


# ==========================================================
# [4단계] 평가 항목 삭제 (점수 CASCADE + 관련 수강 전부 재계산)
# ==========================================================
def delete_assessment(db: Session, assessment_id: int) -> List[int]:
    """
    평가 항목을 지우면 그 항목의 점수도 CASCADE로 삭제되므로,
    같은 강좌에서 평균이 계산된 적 있는 수강을 삭제 이후 시점 기준으로 모두 재계산함.
    반환값: 재계산한 enrollment_id 목록 (오름차순)
    """
    offering_id = get_or_404(db, AssessmentConfig, assessment_id, "assessment").offering_id
    offering_enrollments = [
        row.id for row in db.query(Enrollment.id).filter(Enrollment.offering_id == offering_id)
    ]
    db.rollback()

    with enrollment_locks(offering_enrollments):
        with transaction(db):
            for enrollment_id in sorted(offering_enrollments):
                lock_enrollment(db, enrollment_id)
            assessment = (
                db.query(AssessmentConfig)
                .filter(AssessmentConfig.id == assessment_id)
                .with_for_update()
                .populate_existing()
                .first()
            )
            if assessment is None:
                raise NotFoundError(f"Assessment {assessment_id} not found", code="ASSESSMENT_NOT_FOUND")
            ensure_offering_open(assessment.offering)

            db.delete(assessment)
            db.flush()

            # 삭제 직전에 다른 요청이 남긴 점수까지 포함하도록 삭제 후에 대상 조회
            affected = [
                row.id
                for row in db.query(Enrollment.id)
                .filter(Enrollment.offering_id == offering_id, Enrollment.final_average.isnot(None))
                .order_by(Enrollment.id)
            ]
            for enrollment_id in affected:
                recompute_average(db, enrollment_id)

    logger.info(f"평가 항목 삭제: assessment_id={assessment_id}, 재계산 수강 수={len(affected)}")
    return affected


# ==========================================================
# [5단계] 수동 재계산 (RecomputeAverage)
# ==========================================================
def refresh_enrollment(db: Session, enrollment_id: int) -> Enrollment:
    check_id(enrollment_id, "enrollment")

    with enrollment_lock(enrollment_id):
        with transaction(db):
            recompute_average(db, enrollment_id)
            enrollment = recompute_attendance(db, enrollment_id)

    db.refresh(enrollment)
    logger.info(
        f"수강 재계산: enrollment_id={enrollment_id}, average={enrollment.final_average}, "
        f"status={enrollment.status.value}"
    )
    return enrollment


# ==========================================================
# [조회]
# ==========================================================
def list_grades(db: Session, enrollment_id: int) -> List[Grade]:
    get_or_404(db, Enrollment, enrollment_id, "enrollment")
    return (
        db.query(Grade)
        .filter(Grade.enrollment_id == enrollment_id)
        .order_by(Grade.assessment_id)
        .all()
    )
