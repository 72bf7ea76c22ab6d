import csv
import logging
from typing import Tuple

from sqlalchemy.orm import Session
from database.db import SessionLocal
from services.exceptions import AcademicError
from services.grade_service import record_grade  # ✅ 재계산까지 포함된 입력 경로 사용

CSV_PATH = "data/grades.csv"  # ✅ 파일 경로 (컬럼: enrollment_id, assessment_id, value)

logger = logging.getLogger(__name__)


def migrate_grades(db: Session, csv_path: str = CSV_PATH) -> Tuple[int, int]:
    """CSV 한 줄씩 record_grade 호출 → 줄마다 평균/판정 재계산"""
    imported, failed = 0, 0

    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for line_no, row in enumerate(reader, start=2):
            try:
                record_grade(
                    db,
                    enrollment_id=int(row["enrollment_id"]),      # 수강 ID
                    assessment_id=int(row["assessment_id"]),      # 평가 항목 ID
                    value=row["value"],                           # 점수 (0~10)
                )
                imported += 1
            except (AcademicError, ValueError, KeyError) as e:
                failed += 1
                logger.warning(f"{csv_path}:{line_no} 점수 입력 실패: {e}")

    return imported, failed


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        ok, ng = migrate_grades(db)
    finally:
        db.close()
    print(f"✅ 점수 CSV → DB 입력 완료 (성공 {ok}건, 실패 {ng}건)")
