from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from dependencies.db import get_db
from models.disciplines import Discipline as DisciplineModel
from schemas.disciplines import Discipline, DisciplineCreate
from services import catalog_service
from services.lookups import get_or_404

router = APIRouter(prefix="/disciplines", tags=["과목 정보"])


# ✅ [CREATE] 과목 추가
@router.post("/")
def create_discipline(discipline: DisciplineCreate, db: Session = Depends(get_db)):
    db_discipline = catalog_service.create_discipline(db, **discipline.model_dump())
    return {
        "success": True,
        "data": Discipline.model_validate(db_discipline).model_dump(),
        "message": "과목이 추가되었습니다"
    }


# ✅ [READ] 전체 과목 조회
@router.get("/")
def read_disciplines(db: Session = Depends(get_db)):
    return {
        "success": True,
        "data": [Discipline.model_validate(d).model_dump() for d in catalog_service.list_disciplines(db)],
    }


# ✅ [READ] 특정 과목 조회
@router.get("/{discipline_id}")
def read_discipline(discipline_id: int, db: Session = Depends(get_db)):
    discipline = get_or_404(db, DisciplineModel, discipline_id, "discipline")
    return {"success": True, "data": Discipline.model_validate(discipline).model_dump()}


# ✅ [DELETE] 과목 삭제 (개설 강좌에서 참조 중이면 차단)
@router.delete("/{discipline_id}")
def delete_discipline(discipline_id: int, db: Session = Depends(get_db)):
    catalog_service.delete_discipline(db, discipline_id)
    return {"success": True, "data": {"discipline_id": discipline_id}, "message": "과목이 삭제되었습니다"}
