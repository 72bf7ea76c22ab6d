"""
services/recompute_service.py

수강(Enrollment)의 파생 필드 재계산 엔진.
- recompute_average: 가중 평균(final_average) + 판정(status)
- recompute_attendance: 출석률(attendance_percentage)

두 함수 모두 호출자의 트랜잭션 안에서 flush만 하고 commit 하지 않음.
호출자는 enrollment_lock을 잡은 상태에서 호출해야 함.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP
from typing import Iterable, Tuple

from sqlalchemy import func, case
from sqlalchemy.orm import Session

from config.settings import settings
from models.assessments import AssessmentConfig
from models.attendance import AttendanceRecord
from models.enrollments import Enrollment, EnrollmentStatus
from models.grades import Grade
from services.exceptions import NotFoundError, ReferentialError

logger = logging.getLogger(__name__)

AVERAGE_PLACES = Decimal("0.001")
PERCENT_PLACES = Decimal("0.01")
DEFAULT_ATTENDANCE = Decimal("100.00")


# ==========================================================
# [1단계] 순수 계산 함수
# ==========================================================
def weighted_average(pairs: Iterable[Tuple[Decimal, Decimal]]) -> Decimal:
    """(점수, 가중치) 목록의 가중 평균. 가중치 합이 0이면 0을 반환"""
    weighted_sum = Decimal("0")
    total_weight = Decimal("0")
    for value, weight in pairs:
        weighted_sum += Decimal(value) * Decimal(weight)
        total_weight += Decimal(weight)

    if total_weight > 0:
        average = weighted_sum / total_weight
    else:
        average = Decimal("0")
    return average.quantize(AVERAGE_PLACES, rounding=ROUND_HALF_UP)


def classify_status(average: Decimal) -> EnrollmentStatus:
    """평균 점수 → 판정 (위에서부터 먼저 맞는 조건 적용)"""
    if average >= settings.PASSING_AVERAGE:
        return EnrollmentStatus.PASSED
    if average < settings.FAILING_AVERAGE:
        return EnrollmentStatus.FAILED
    return EnrollmentStatus.RECOVERY


def attendance_percentage(present_count: int, total: int) -> Decimal:
    """출석률(%) 계산. 기록이 하나도 없으면 기본값 100"""
    if total == 0:
        return DEFAULT_ATTENDANCE
    percentage = Decimal(present_count) * 100 / Decimal(total)
    return percentage.quantize(PERCENT_PLACES, rounding=ROUND_HALF_UP)


# ==========================================================
# [2단계] 수강 행 잠금 조회
# ==========================================================
def lock_enrollment(db: Session, enrollment_id: int, referenced: bool = False) -> Enrollment:
    """
    SELECT ... FOR UPDATE 로 수강 행을 다시 읽음 (SQLite에서는 일반 SELECT).
    쓰기 트랜잭션의 첫 번째 쿼리로 호출해야 이후 조회가 잠금 이후의 데이터를 봄.
    referenced=True 이면 없는 수강을 참조한 생성 요청으로 보고 ReferentialError.
    """
    enrollment = (
        db.query(Enrollment)
        .filter(Enrollment.id == enrollment_id)
        .with_for_update()
        .populate_existing()
        .first()
    )
    if enrollment is None:
        if referenced:
            raise ReferentialError(f"Referenced enrollment {enrollment_id} does not exist")
        raise NotFoundError(f"Enrollment {enrollment_id} not found", code="ENROLLMENT_NOT_FOUND")
    return enrollment


# ==========================================================
# [3단계] 재계산 (DB 반영)
# ==========================================================
def recompute_average(db: Session, enrollment_id: int) -> Enrollment:
    enrollment = lock_enrollment(db, enrollment_id)

    rows = (
        db.query(Grade.value, AssessmentConfig.weight)
        .join(AssessmentConfig, Grade.assessment_id == AssessmentConfig.id)
        .filter(Grade.enrollment_id == enrollment_id)
        .all()
    )
    average = weighted_average((r.value, r.weight) for r in rows)
    status = classify_status(average)

    enrollment.final_average = average
    enrollment.status = status
    db.flush()

    logger.debug(
        f"평균 재계산: enrollment_id={enrollment_id}, grades={len(rows)}, "
        f"average={average}, status={status.value}"
    )
    return enrollment


def recompute_attendance(db: Session, enrollment_id: int) -> Enrollment:
    enrollment = lock_enrollment(db, enrollment_id)

    total, present_count = (
        db.query(
            func.count(AttendanceRecord.id),
            func.coalesce(func.sum(case((AttendanceRecord.present.is_(True), 1), else_=0)), 0),
        )
        .filter(AttendanceRecord.enrollment_id == enrollment_id)
        .one()
    )
    percentage = attendance_percentage(int(present_count), int(total))

    enrollment.attendance_percentage = percentage
    db.flush()

    logger.debug(
        f"출석률 재계산: enrollment_id={enrollment_id}, present={present_count}/{total}, "
        f"percentage={percentage}"
    )
    return enrollment
