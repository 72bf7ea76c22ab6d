from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from dependencies.db import get_db
from schemas.transcripts import TranscriptLine
from services import transcript_service

router = APIRouter(prefix="/transcripts", tags=["성적표"])


# ✅ [READ] 학생의 학기별 성적표 (읽기 전용)
@router.get("/{student_id}")
def get_transcript(student_id: int, term_id: int = Query(..., description="학기 ID"), db: Session = Depends(get_db)):
    lines = transcript_service.get_transcript(db, student_id, term_id)
    if not lines:
        return {"success": True, "data": [], "message": "해당 학기 수강 기록 없음"}
    return {
        "success": True,
        "data": [TranscriptLine.model_validate(line).model_dump() for line in lines],
        "message": "성적표 조회 성공"
    }
