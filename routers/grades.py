from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from models.grades import Grade as GradeModel
from schemas.enrollments import Enrollment
from schemas.grades import Grade, GradeCreate, GradeUpdate
from services import grade_service
from services.lookups import get_or_404

router = APIRouter(prefix="/grades", tags=["grades"])


def _with_enrollment(grade: GradeModel) -> dict:
    """점수 + 재계산된 수강 정보를 함께 반환"""
    return {
        "grade": Grade.model_validate(grade).model_dump(),
        "enrollment": Enrollment.model_validate(grade.enrollment).model_dump(),
    }


# ✅ [CREATE] 점수 입력 → 평균/판정 재계산
@router.post("/")
def record_grade(grade: GradeCreate, db: Session = Depends(get_db)):
    db_grade = grade_service.record_grade(db, grade.enrollment_id, grade.assessment_id, grade.value)
    return {"success": True, "data": _with_enrollment(db_grade), "message": "Grade recorded successfully"}


# ✅ [READ] 특정 점수 조회
@router.get("/{grade_id}")
def read_grade(grade_id: int, db: Session = Depends(get_db)):
    grade = get_or_404(db, GradeModel, grade_id, "grade")
    return {"success": True, "data": Grade.model_validate(grade).model_dump()}


# ✅ [UPDATE] 점수 수정 → 평균/판정 재계산
@router.put("/{grade_id}")
def update_grade(grade_id: int, updated: GradeUpdate, db: Session = Depends(get_db)):
    db_grade = grade_service.update_grade(db, grade_id, updated.value)
    return {"success": True, "data": _with_enrollment(db_grade), "message": "Grade updated successfully"}


# ✅ [DELETE] 점수 삭제 → 평균/판정 재계산
@router.delete("/{grade_id}")
def delete_grade(grade_id: int, db: Session = Depends(get_db)):
    enrollment = grade_service.delete_grade(db, grade_id)
    return {
        "success": True,
        "data": {"grade_id": grade_id, "enrollment": Enrollment.model_validate(enrollment).model_dump()},
        "message": "Grade deleted successfully"
    }
