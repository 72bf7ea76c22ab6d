from decimal import Decimal

from sqlalchemy import Column, Integer, String, Date, Numeric, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database.db import Base


class AssessmentConfig(Base):
    __tablename__ = "assessment_configs"  # 강좌별 평가 항목 정의 (가중치 포함)
    __table_args__ = (
        CheckConstraint("weight > 0", name="ck_assessment_weight_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)                  # 평가 항목 고유 ID (PK)
    offering_id = Column(
        Integer, ForeignKey("offerings.id", ondelete="CASCADE"), nullable=False
    )                                                                   # 소속 강좌 ID
    name = Column(String(50), nullable=False)                           # 평가명 (예: P1, P2, 기말과제)
    weight = Column(Numeric(5, 2), nullable=False, default=Decimal("1.00"))  # 가중치
    scheduled_date = Column(Date)                                       # 예정일

    offering = relationship("Offering", back_populates="assessments")

    # ✅ 이 평가 항목에 입력된 점수들 - 평가 항목 삭제 시 함께 삭제
    grades = relationship("Grade", back_populates="assessment", cascade="all, delete")
