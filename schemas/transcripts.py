from pydantic import BaseModel
from decimal import Decimal
from typing import Optional

# ✅ 성적표 한 줄 (수강 1건)
class TranscriptLine(BaseModel):
    enrollment_id: int
    term: str                                # 학기명
    student: str                             # 학생 이름
    discipline: str                          # 과목 이름
    section_code: str                        # 분반 코드
    grades: Optional[str] = None             # 점수 요약 (예: "P1: 8.00 | P2: 7.00")
    final_average: Optional[Decimal] = None
    attendance_percentage: Decimal
    status: str
