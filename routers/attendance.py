from datetime import date

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from schemas.attendance import AttendanceCreate, AttendanceRecord, AttendanceUpdate
from schemas.enrollments import Enrollment
from services import attendance_service

router = APIRouter(prefix="/attendance", tags=["출석 API"])


# ✅ [CREATE] 출결 등록 → 출석률 재계산
@router.post("/")
def create_attendance(attendance: AttendanceCreate, db: Session = Depends(get_db)):
    record = attendance_service.record_attendance(
        db, attendance.enrollment_id, attendance.class_date, attendance.present
    )
    return {
        "success": True,
        "data": {
            "record": AttendanceRecord.model_validate(record).model_dump(),
            "enrollment": Enrollment.model_validate(record.enrollment).model_dump(),
        },
        "message": "출결이 등록되었습니다"
    }


# ✅ [UPDATE] 출결 수정 (enrollment_id + date 기준)
@router.put("/{enrollment_id}/{query_date}")
def update_attendance(enrollment_id: int, query_date: date, updated: AttendanceUpdate, db: Session = Depends(get_db)):
    record = attendance_service.update_attendance(db, enrollment_id, query_date, updated.present)
    return {
        "success": True,
        "data": {
            "record": AttendanceRecord.model_validate(record).model_dump(),
            "enrollment": Enrollment.model_validate(record.enrollment).model_dump(),
        },
        "message": "출결 정보가 수정되었습니다"
    }


# ✅ [DELETE] 출결 삭제 (enrollment_id + date 기준)
@router.delete("/{enrollment_id}/{query_date}")
def delete_attendance(enrollment_id: int, query_date: date, db: Session = Depends(get_db)):
    enrollment = attendance_service.delete_attendance(db, enrollment_id, query_date)
    return {
        "success": True,
        "data": {"enrollment": Enrollment.model_validate(enrollment).model_dump()},
        "message": "출결 정보가 삭제되었습니다"
    }
