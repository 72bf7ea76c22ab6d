import csv
import logging
from datetime import date
from typing import Tuple

from sqlalchemy.orm import Session
from database.db import SessionLocal
from services.attendance_service import record_attendance  # ✅ 출석률 재계산 포함
from services.exceptions import AcademicError

CSV_PATH = "data/attendance.csv"  # ✅ 파일 경로 (컬럼: enrollment_id, class_date, present)

TRUE_VALUES = {"1", "true", "yes", "y", "present", "출석"}

logger = logging.getLogger(__name__)


def migrate_attendance(db: Session, csv_path: str = CSV_PATH) -> Tuple[int, int]:
    imported, failed = 0, 0

    with open(csv_path, newline="", encoding="utf-8-sig") as csvfile:
        reader = csv.DictReader(csvfile)
        for line_no, row in enumerate(reader, start=2):
            try:
                record_attendance(
                    db,
                    enrollment_id=int(row["enrollment_id"]),                    # 수강 ID
                    class_date=date.fromisoformat(row["class_date"]),           # 수업 일자
                    present=row["present"].strip().lower() in TRUE_VALUES,      # 출석 여부
                )
                imported += 1
            except (AcademicError, ValueError, KeyError) as e:
                failed += 1
                logger.warning(f"{csv_path}:{line_no} 출결 입력 실패: {e}")

    return imported, failed


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    db = SessionLocal()
    try:
        ok, ng = migrate_attendance(db)
    finally:
        db.close()
    print(f"✅ 출결 CSV → DB 입력 완료 (성공 {ok}건, 실패 {ng}건)")
