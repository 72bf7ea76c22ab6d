from pydantic import BaseModel
from typing import Optional

# ✅ 입력용: POST 요청에서 사용할 스키마
class DisciplineCreate(BaseModel):
    code: Optional[str] = None               # 외부 과목 코드
    name: str                                # 과목 이름
    credit_hours: int                        # 이수 시간
    syllabus: Optional[str] = None           # 강의 요강

# ✅ 출력용: GET, POST 응답 등에서 사용할 스키마
class Discipline(DisciplineCreate):
    id: int

    class Config:
        from_attributes = True
