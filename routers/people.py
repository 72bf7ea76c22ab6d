from typing import Optional

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from models.people import Person as PersonModel, PersonRole
from schemas.people import Person, PersonCreate
from services import catalog_service
from services.lookups import get_or_404

router = APIRouter(prefix="/people", tags=["인원 정보"])


# ==========================================================
# [1단계] CRUD 기본 라우터
# ==========================================================

# ✅ [CREATE] 학생/교사/관리자 등록
@router.post("/")
def create_person(person: PersonCreate, db: Session = Depends(get_db)):
    db_person = catalog_service.create_person(db, **person.model_dump())
    return {
        "success": True,
        "data": Person.model_validate(db_person).model_dump(),
        "message": "인원 정보가 등록되었습니다"
    }


# ✅ [READ] 전체 조회 (역할/활성 여부 필터)
@router.get("/")
def read_people(role: Optional[PersonRole] = None, active: Optional[bool] = None, db: Session = Depends(get_db)):
    records = catalog_service.list_people(db, role=role, active=active)
    return {
        "success": True,
        "data": [Person.model_validate(r).model_dump() for r in records],
        "message": "인원 목록 조회 완료"
    }


# ✅ [READ] 단건 조회
@router.get("/{person_id}")
def read_person(person_id: int, db: Session = Depends(get_db)):
    person = get_or_404(db, PersonModel, person_id, "person")
    return {"success": True, "data": Person.model_validate(person).model_dump()}


# ==========================================================
# [2단계] 비활성화 / 삭제
# ==========================================================

# ✅ [UPDATE] 비활성화 (참조 기록이 있으면 삭제 대신 사용)
@router.post("/{person_id}/deactivate")
def deactivate_person(person_id: int, db: Session = Depends(get_db)):
    person = catalog_service.deactivate_person(db, person_id)
    return {
        "success": True,
        "data": Person.model_validate(person).model_dump(),
        "message": "인원이 비활성화되었습니다"
    }


# ✅ [DELETE] 삭제 (강좌/수강에서 참조 중이면 차단)
@router.delete("/{person_id}")
def delete_person(person_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_person(db, person_id)
    return {"success": True, "data": {"person_id": person_id}, "message": "인원 정보가 삭제되었습니다"}
