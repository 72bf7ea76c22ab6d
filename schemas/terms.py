from pydantic import BaseModel
from datetime import date

# ✅ 입력용
class TermCreate(BaseModel):
    name: str                                # 학기명 (예: 2025-1)
    start_date: date                         # 시작일
    end_date: date                           # 종료일
    active: bool = False                     # 현재 학기로 지정할지 여부

# ✅ 출력용
class Term(TermCreate):
    id: int

    class Config:
        from_attributes = True
