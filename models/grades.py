from datetime import datetime

from sqlalchemy import Column, Integer, Numeric, DateTime, ForeignKey, UniqueConstraint, CheckConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.assessments import AssessmentConfig
from models.enrollments import Enrollment


class Grade(Base):
    __tablename__ = "grades"  # 평가 항목별 점수 테이블
    __table_args__ = (
        UniqueConstraint("enrollment_id", "assessment_id", name="uq_grade_per_assessment"),
        CheckConstraint("value >= 0 AND value <= 10", name="ck_grade_value_range"),
    )

    id = Column(Integer, primary_key=True, index=True)                  # 점수 고유 ID (PK)
    enrollment_id = Column(
        Integer, ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    assessment_id = Column(
        Integer, ForeignKey("assessment_configs.id", ondelete="CASCADE"), nullable=False
    )
    value = Column(Numeric(5, 2), nullable=False)                       # 점수 (0~10)
    recorded_at = Column(DateTime, nullable=False, default=datetime.utcnow)  # 입력 시각

    enrollment = relationship(Enrollment, back_populates="grades")
    assessment = relationship(AssessmentConfig, back_populates="grades")
