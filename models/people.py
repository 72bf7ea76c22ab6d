import enum
from datetime import datetime

from sqlalchemy import Column, Integer, String, Date, Boolean, DateTime, JSON, Enum, Index
from database.db import Base


class PersonRole(str, enum.Enum):
    STUDENT = "Student"
    TEACHER = "Teacher"
    ADMIN = "Admin"


class Person(Base):
    __tablename__ = "people"  # 학생/교사/관리자 공통 인적 정보 테이블
    __table_args__ = (
        Index("idx_people_search", "name", "email", "role"),
    )

    id = Column(Integer, primary_key=True, index=True)                  # 고유 ID (PK)
    role = Column(
        Enum(PersonRole, name="person_role", values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )                                                                   # 구분 (Student/Teacher/Admin)
    name = Column(String(100), nullable=False)                          # 이름
    email = Column(String(100), nullable=False, unique=True)            # 이메일 (중복 불가)
    national_id = Column(String(14), unique=True)                       # 주민/CPF 번호 (선택, 중복 불가)
    birth_date = Column(Date)                                           # 생년월일
    active = Column(Boolean, nullable=False, default=True)              # 활성 여부 (삭제 대신 비활성화)
    extra_data = Column(JSON)                                           # 추가 정보 (알레르기, 비상연락처 등)
    created_at = Column(DateTime, nullable=False, default=datetime.utcnow)
