from pydantic import BaseModel
from datetime import date
from decimal import Decimal
from typing import Optional

# ✅ 입력용
class AssessmentCreate(BaseModel):
    offering_id: int                         # 강좌 ID
    name: str                                # 평가명 (예: P1, 기말과제)
    weight: Decimal = Decimal("1.0")         # 가중치 (0보다 커야 함)
    scheduled_date: Optional[date] = None    # 예정일

# ✅ 출력용
class Assessment(AssessmentCreate):
    id: int

    class Config:
        from_attributes = True
