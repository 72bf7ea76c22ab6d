from sqlalchemy import Column, Integer, Date, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship
from database.db import Base
from models.enrollments import Enrollment


class AttendanceRecord(Base):
    __tablename__ = "attendance_records"  # 일별 출결 기록 테이블
    __table_args__ = (
        UniqueConstraint("enrollment_id", "class_date", name="uq_attendance_per_day"),
    )

    id = Column(Integer, primary_key=True, index=True)                  # 출결 고유 ID (PK)
    enrollment_id = Column(
        Integer, ForeignKey("enrollments.id", ondelete="CASCADE"), nullable=False, index=True
    )
    class_date = Column(Date, nullable=False, index=True)               # 수업 일자
    present = Column(Boolean, nullable=False, default=False)            # 출석 여부

    enrollment = relationship(Enrollment, back_populates="attendance_records")
