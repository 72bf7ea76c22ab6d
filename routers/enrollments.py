from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from schemas.attendance import AttendanceRecord
from schemas.enrollments import Enrollment, EnrollmentCreate
from schemas.grades import Grade
from services import attendance_service, catalog_service, grade_service

router = APIRouter(prefix="/enrollments", tags=["수강 정보"])


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 수강 등록
@router.post("/")
def create_enrollment(enrollment: EnrollmentCreate, db: Session = Depends(get_db)):
    db_enrollment = catalog_service.create_enrollment(db, **enrollment.model_dump())
    return {
        "success": True,
        "data": Enrollment.model_validate(db_enrollment).model_dump(),
        "message": "수강 등록이 완료되었습니다"
    }


# ✅ [READ] 수강 목록 (강좌/학생 필터)
@router.get("/")
def read_enrollments(offering_id: Optional[int] = None, student_id: Optional[int] = None, db: Session = Depends(get_db)):
    records = catalog_service.list_enrollments(db, offering_id=offering_id, student_id=student_id)
    return {"success": True, "data": [Enrollment.model_validate(r).model_dump() for r in records]}


# ✅ [READ] 특정 수강 조회
@router.get("/{enrollment_id}")
def read_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    enrollment = catalog_service.get_enrollment(db, enrollment_id)
    return {"success": True, "data": Enrollment.model_validate(enrollment).model_dump()}


# ✅ [DELETE] 수강 삭제 (점수/출결 기록 함께 삭제)
@router.delete("/{enrollment_id}")
def delete_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_enrollment(db, enrollment_id)
    return {"success": True, "data": {"enrollment_id": enrollment_id}, "message": "수강 정보가 삭제되었습니다"}


# ==========================================================
# [2단계] 수강 하위 자원 / 재계산
# ==========================================================

# ✅ [READ] 수강의 점수 목록
@router.get("/{enrollment_id}/grades")
def read_enrollment_grades(enrollment_id: int, db: Session = Depends(get_db)):
    records = grade_service.list_grades(db, enrollment_id)
    return {"success": True, "data": [Grade.model_validate(r).model_dump() for r in records]}


# ✅ [READ] 수강의 출결 목록
@router.get("/{enrollment_id}/attendance")
def read_enrollment_attendance(enrollment_id: int, db: Session = Depends(get_db)):
    records = attendance_service.list_attendance(db, enrollment_id)
    return {"success": True, "data": [AttendanceRecord.model_validate(r).model_dump() for r in records]}


# ✅ [UPDATE] 평균/판정/출석률 수동 재계산
@router.post("/{enrollment_id}/recompute")
def recompute_enrollment(enrollment_id: int, db: Session = Depends(get_db)):
    enrollment = grade_service.refresh_enrollment(db, enrollment_id)
    return {
        "success": True,
        "data": Enrollment.model_validate(enrollment).model_dump(),
        "message": "재계산이 완료되었습니다"
    }
