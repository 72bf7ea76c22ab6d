from typing import Type, TypeVar

from sqlalchemy.orm import Session

from services.exceptions import NotFoundError, ReferentialError, ValidationError

T = TypeVar("T")


def check_id(value, label: str) -> int:
    """식별자는 1 이상의 정수여야 함"""
    if isinstance(value, bool) or not isinstance(value, int) or value < 1:
        raise ValidationError(f"Malformed {label} id: {value!r}", code="INVALID_ID")
    return value


def get_or_404(db: Session, model: Type[T], obj_id: int, label: str) -> T:
    """대상 자체에 대한 작업 (조회/수정/삭제) → 없으면 NotFoundError"""
    obj = db.get(model, check_id(obj_id, label))
    if obj is None:
        raise NotFoundError(f"{label.capitalize()} {obj_id} not found", code=f"{label.upper()}_NOT_FOUND")
    return obj


def require_ref(db: Session, model: Type[T], obj_id: int, label: str) -> T:
    """생성 시 참조하는 대상 → 없으면 ReferentialError"""
    obj = db.get(model, check_id(obj_id, label))
    if obj is None:
        raise ReferentialError(f"Referenced {label} {obj_id} does not exist")
    return obj
