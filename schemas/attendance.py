from pydantic import BaseModel
from datetime import date

# ✅ 출결 등록용 (POST 요청)
class AttendanceCreate(BaseModel):
    enrollment_id: int                       # 수강 ID
    class_date: date                         # 수업 일자
    present: bool                            # 출석 여부

# ✅ 출결 수정용 (PUT 요청)
class AttendanceUpdate(BaseModel):
    present: bool

# ✅ 출결 조회/응답용
class AttendanceRecord(AttendanceCreate):
    id: int

    class Config:
        from_attributes = True
