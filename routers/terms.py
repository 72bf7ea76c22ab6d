from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from schemas.terms import Term, TermCreate
from services import catalog_service

router = APIRouter(prefix="/terms", tags=["학기"])


# ✅ [CREATE] 학기 등록 (active=True면 다른 학기는 자동 비활성화)
@router.post("/")
def create_term(term: TermCreate, db: Session = Depends(get_db)):
    db_term = catalog_service.create_term(db, **term.model_dump())
    return {"success": True, "data": Term.model_validate(db_term).model_dump(), "message": "학기가 등록되었습니다"}


# ✅ [READ] 전체 학기 조회 (시작일 순)
@router.get("/")
def read_terms(db: Session = Depends(get_db)):
    return {
        "success": True,
        "data": [Term.model_validate(t).model_dump() for t in catalog_service.list_terms(db)],
    }


# ✅ [READ] 현재 활성 학기
@router.get("/active")
def read_active_term(db: Session = Depends(get_db)):
    term = catalog_service.get_active_term(db)
    if term is None:
        return {"success": False, "data": None, "message": "활성 학기가 없습니다"}
    return {"success": True, "data": Term.model_validate(term).model_dump()}


# ✅ [UPDATE] 활성 학기 변경
@router.post("/{term_id}/activate")
def activate_term(term_id: int, db: Session = Depends(get_db)):
    term = catalog_service.activate_term(db, term_id)
    return {"success": True, "data": Term.model_validate(term).model_dump(), "message": "활성 학기가 변경되었습니다"}


# ✅ [DELETE] 학기 삭제 (개설 강좌가 있으면 차단)
@router.delete("/{term_id}")
def delete_term(term_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_term(db, term_id)
    return {"success": True, "data": {"term_id": term_id}, "message": "학기가 삭제되었습니다"}
