from pydantic import BaseModel, EmailStr
from datetime import date, datetime
from typing import Optional

from models.people import PersonRole

# ✅ 입력용 (POST 요청)
class PersonCreate(BaseModel):
    role: PersonRole                         # 구분 (Student/Teacher/Admin)
    name: str                                # 이름
    email: EmailStr                          # 이메일 (중복 불가)
    national_id: Optional[str] = None        # 주민/CPF 번호 (선택)
    birth_date: Optional[date] = None        # 생년월일
    extra_data: Optional[dict] = None        # 추가 정보 (비상연락처 등)

# ✅ 출력용 (GET 응답)
class Person(PersonCreate):
    id: int
    active: bool                             # 활성 여부
    created_at: datetime

    class Config:
        from_attributes = True
