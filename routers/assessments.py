from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from schemas.assessments import Assessment, AssessmentCreate
from services import catalog_service, grade_service

router = APIRouter(prefix="/assessments", tags=["평가 항목"])


# ✅ [CREATE] 평가 항목 추가 (가중치 기본 1.0)
@router.post("/")
def create_assessment(assessment: AssessmentCreate, db: Session = Depends(get_db)):
    db_assessment = catalog_service.create_assessment(db, **assessment.model_dump())
    return {
        "success": True,
        "data": Assessment.model_validate(db_assessment).model_dump(),
        "message": "평가 항목이 추가되었습니다"
    }


# ✅ [DELETE] 평가 항목 삭제 → 해당 점수 삭제 + 관련 수강 평균 재계산
@router.delete("/{assessment_id}")
def delete_assessment(assessment_id: int, db: Session = Depends(get_db)):
    recomputed = grade_service.delete_assessment(db, assessment_id)
    return {
        "success": True,
        "data": {"assessment_id": assessment_id, "recomputed_enrollments": recomputed},
        "message": "평가 항목이 삭제되었습니다"
    }
