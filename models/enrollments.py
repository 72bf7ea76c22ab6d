import enum
from decimal import Decimal

from sqlalchemy import Column, Integer, Numeric, Enum, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.offerings import Offering
from models.people import Person


class EnrollmentStatus(str, enum.Enum):
    IN_PROGRESS = "InProgress"
    PASSED = "Passed"
    FAILED = "Failed"
    RECOVERY = "Recovery"
    WITHDRAWN = "Withdrawn"


class Enrollment(Base):
    __tablename__ = "enrollments"  # 수강 신청(학생-강좌 연결) 테이블
    __table_args__ = (
        UniqueConstraint("offering_id", "student_id", name="uq_enrollment_student"),
        CheckConstraint("final_average >= 0 AND final_average <= 10", name="ck_enrollment_average_range"),
        CheckConstraint(
            "attendance_percentage >= 0 AND attendance_percentage <= 100", name="ck_enrollment_attendance_range"
        ),
    )

    id = Column(Integer, primary_key=True, index=True)                        # 수강 고유 ID (PK)
    offering_id = Column(Integer, ForeignKey("offerings.id"), nullable=False)
    student_id = Column(Integer, ForeignKey("people.id"), nullable=False)

    # ✅ 아래 세 필드는 재계산 엔진만 갱신함 (직접 입력 금지)
    final_average = Column(Numeric(6, 3))                                     # 가중 평균 (0~10)
    attendance_percentage = Column(
        Numeric(5, 2), nullable=False, default=Decimal("100.00")
    )                                                                         # 출석률 (0~100)
    status = Column(
        Enum(EnrollmentStatus, name="enrollment_status", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
        default=EnrollmentStatus.IN_PROGRESS,
    )

    # ==========================================================
    # [관계 설정]
    # ==========================================================
    offering = relationship(Offering)
    student = relationship(Person, foreign_keys=[student_id])

    # ✅ 수강 삭제 시 점수/출결 기록도 함께 삭제
    grades = relationship("Grade", back_populates="enrollment", cascade="all, delete")
    attendance_records = relationship(
        "AttendanceRecord", back_populates="enrollment", cascade="all, delete"
    )
