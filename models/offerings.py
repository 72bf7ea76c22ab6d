from sqlalchemy import Column, Integer, String, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.disciplines import Discipline
from models.people import Person
from models.terms import Term


class Offering(Base):
    __tablename__ = "offerings"  # 개설 강좌(분반) 테이블
    __table_args__ = (
        UniqueConstraint("discipline_id", "term_id", "section_code", name="uq_offering_section"),
    )

    id = Column(Integer, primary_key=True, index=True)                        # 강좌 고유 ID (PK)
    discipline_id = Column(Integer, ForeignKey("disciplines.id"), nullable=False)
    teacher_id = Column(Integer, ForeignKey("people.id"), nullable=False)
    term_id = Column(Integer, ForeignKey("terms.id"), nullable=False)
    section_code = Column(String(20), nullable=False)                         # 분반 코드 (예: MAT-2025-A)
    room = Column(String(20))                                                 # 강의실
    schedule = Column(String(50))                                             # 시간표 (예: 월/수 08:00)
    closed = Column(Boolean, nullable=False, default=False)                   # 마감 여부

    # ==========================================================
    # [관계 설정]
    # ==========================================================

    # ✅ 과목/교사/학기 (N:1) - 참조 중이면 삭제 차단
    discipline = relationship(Discipline)
    teacher = relationship(Person, foreign_keys=[teacher_id])
    term = relationship(Term)

    # ✅ 평가 항목 (1:N) - 강좌 삭제 시 함께 삭제
    assessments = relationship(
        "AssessmentConfig",
        back_populates="offering",
        cascade="all, delete",
        order_by="AssessmentConfig.id",
    )
