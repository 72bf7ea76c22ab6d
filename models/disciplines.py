from sqlalchemy import Column, Integer, String, Text
from database.db import Base


class Discipline(Base):
    __tablename__ = "disciplines"  # 교과목 정보 테이블

    id = Column(Integer, primary_key=True, index=True)         # 과목 고유 ID (PK)
    code = Column(String(20), unique=True)                     # 외부 과목 코드 (중복 불가)
    name = Column(String(100), nullable=False)                 # 과목 이름 (예: 수학, 영어)
    syllabus = Column(Text)                                    # 강의 요강
    credit_hours = Column(Integer, nullable=False)             # 이수 시간
