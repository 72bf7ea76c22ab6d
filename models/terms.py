from sqlalchemy import Column, Integer, String, Date, Boolean
from database.db import Base


class Term(Base):
    __tablename__ = "terms"  # 학기(학사 기간) 테이블

    id = Column(Integer, primary_key=True, index=True)         # 학기 고유 ID (PK)
    name = Column(String(20), nullable=False, unique=True)     # 학기명 (예: 2025-1, 2025-2)
    start_date = Column(Date, nullable=False)                  # 시작일
    end_date = Column(Date, nullable=False)                    # 종료일
    active = Column(Boolean, nullable=False, default=False)    # 현재 학기 여부 (한 번에 하나만)
