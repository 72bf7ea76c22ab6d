from pydantic import BaseModel
from decimal import Decimal
from typing import Optional

from models.enrollments import EnrollmentStatus

# ✅ 입력용 - 평균/출석률/상태는 재계산 엔진만 바꾸므로 받지 않음
class EnrollmentCreate(BaseModel):
    offering_id: int                         # 강좌 ID
    student_id: int                          # 학생 ID

# ✅ 출력용
class Enrollment(EnrollmentCreate):
    id: int
    final_average: Optional[Decimal] = None  # 가중 평균 (점수 입력 전에는 None)
    attendance_percentage: Decimal           # 출석률
    status: EnrollmentStatus                 # 판정

    class Config:
        from_attributes = True
