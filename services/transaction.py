import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from services.exceptions import AcademicError, ReferentialError

logger = logging.getLogger(__name__)


@contextmanager
def transaction(db: Session, integrity_error: Optional[AcademicError] = None) -> Iterator[Session]:
    """
    한 번의 쓰기 작업(검증 → 저장 → 재계산)을 하나의 트랜잭션으로 묶음.
    - 정상 종료: commit
    - 예외 발생: rollback 후 다시 raise (부분 반영 없음)
    - DB 제약 위반(IntegrityError)은 integrity_error(없으면 ReferentialError)로 변환
    """
    try:
        yield db
        db.commit()
    except IntegrityError as e:
        db.rollback()
        logger.warning(f"DB 제약 위반으로 롤백: {e.orig}")
        if integrity_error is None:
            raise ReferentialError(f"Integrity constraint violated: {e.orig}") from e
        raise integrity_error from e
    except Exception:
        db.rollback()
        raise
