from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from models.offerings import Offering as OfferingModel
from schemas.assessments import Assessment
from schemas.enrollments import Enrollment
from schemas.offerings import Offering, OfferingCreate
from services import catalog_service
from services.lookups import get_or_404

router = APIRouter(prefix="/offerings", tags=["개설 강좌"])


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 강좌 개설
@router.post("/")
def create_offering(offering: OfferingCreate, db: Session = Depends(get_db)):
    db_offering = catalog_service.create_offering(db, **offering.model_dump())
    return {
        "success": True,
        "data": Offering.model_validate(db_offering).model_dump(),
        "message": "강좌가 개설되었습니다"
    }


# ✅ [READ] 강좌 목록 (학기 필터)
@router.get("/")
def read_offerings(term_id: Optional[int] = None, db: Session = Depends(get_db)):
    records = catalog_service.list_offerings(db, term_id=term_id)
    return {"success": True, "data": [Offering.model_validate(r).model_dump() for r in records]}


# ✅ [READ] 특정 강좌 조회
@router.get("/{offering_id}")
def read_offering(offering_id: int, db: Session = Depends(get_db)):
    offering = get_or_404(db, OfferingModel, offering_id, "offering")
    return {"success": True, "data": Offering.model_validate(offering).model_dump()}


# ==========================================================
# [2단계] 강좌 하위 자원
# ==========================================================

# ✅ [READ] 강좌의 평가 항목
@router.get("/{offering_id}/assessments")
def read_offering_assessments(offering_id: int, db: Session = Depends(get_db)):
    records = catalog_service.list_assessments(db, offering_id)
    return {"success": True, "data": [Assessment.model_validate(r).model_dump() for r in records]}


# ✅ [READ] 강좌의 수강생
@router.get("/{offering_id}/enrollments")
def read_offering_enrollments(offering_id: int, db: Session = Depends(get_db)):
    get_or_404(db, OfferingModel, offering_id, "offering")
    records = catalog_service.list_enrollments(db, offering_id=offering_id)
    return {"success": True, "data": [Enrollment.model_validate(r).model_dump() for r in records]}


# ==========================================================
# [3단계] 마감 / 삭제
# ==========================================================

# ✅ [UPDATE] 강좌 마감 (이후 점수/출결 입력 불가)
@router.post("/{offering_id}/close")
def close_offering(offering_id: int, db: Session = Depends(get_db)):
    offering = catalog_service.close_offering(db, offering_id)
    return {"success": True, "data": Offering.model_validate(offering).model_dump(), "message": "강좌가 마감되었습니다"}


# ✅ [DELETE] 강좌 삭제 (수강생이 있으면 차단, 평가 항목은 함께 삭제)
@router.delete("/{offering_id}")
def delete_offering(offering_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_offering(db, offering_id)
    return {"success": True, "data": {"offering_id": offering_id}, "message": "강좌가 삭제되었습니다"}
