from pydantic import BaseModel
from typing import Optional

# ✅ 생성(Create) 요청용 스키마
class OfferingCreate(BaseModel):
    discipline_id: int                       # 과목 ID
    teacher_id: int                          # 담당 교사 ID
    term_id: int                             # 학기 ID
    section_code: str                        # 분반 코드 (예: MAT-2025-A)
    room: Optional[str] = None               # 강의실
    schedule: Optional[str] = None           # 시간표

# ✅ 응답(Response) / 조회(Read) 용 스키마
class Offering(OfferingCreate):
    id: int
    closed: bool                             # 마감 여부

    class Config:
        from_attributes = True
