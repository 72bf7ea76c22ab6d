from pydantic import BaseModel
from datetime import datetime
from decimal import Decimal

# ✅ 점수 입력용 (범위 0~10 검증은 서비스에서 INVALID_VALUE로 처리)
class GradeCreate(BaseModel):
    enrollment_id: int                       # 수강 ID
    assessment_id: int                       # 평가 항목 ID
    value: Decimal                           # 점수

# ✅ 점수 수정용
class GradeUpdate(BaseModel):
    value: Decimal

# ✅ 출력용
class Grade(GradeCreate):
    id: int
    recorded_at: datetime                    # 입력 시각

    class Config:
        from_attributes = True
