"""
services/transcript_service.py

학생 성적표(Transcript) 조회 - 읽기 전용, 부수효과 없음.
수강 + 강좌 + 과목 + 학기 + 학생을 조인하고, 수강별 점수를
"P1: 8.00 | P2: 7.00" 형태로 이어 붙여 한 줄로 보여줌.
"""

from collections import defaultdict
from typing import Dict, List

from sqlalchemy.orm import Session

from models.assessments import AssessmentConfig
from models.disciplines import Discipline
from models.enrollments import Enrollment
from models.grades import Grade
from models.offerings import Offering
from models.people import Person
from models.terms import Term
from services.lookups import get_or_404

SUMMARY_SEPARATOR = " | "


def grade_summaries(db: Session, enrollment_ids: List[int]) -> Dict[int, str]:
    """수강 id → 점수 요약 문자열 (평가 항목 id 순)"""
    if not enrollment_ids:
        return {}

    rows = (
        db.query(Grade.enrollment_id, AssessmentConfig.name, Grade.value)
        .join(AssessmentConfig, Grade.assessment_id == AssessmentConfig.id)
        .filter(Grade.enrollment_id.in_(enrollment_ids))
        .order_by(Grade.enrollment_id, AssessmentConfig.id)
        .all()
    )
    parts = defaultdict(list)
    for enrollment_id, name, value in rows:
        parts[enrollment_id].append(f"{name}: {value:.2f}")
    return {k: SUMMARY_SEPARATOR.join(v) for k, v in parts.items()}


def get_transcript(db: Session, student_id: int, term_id: int) -> List[dict]:
    student = get_or_404(db, Person, student_id, "student")
    term = get_or_404(db, Term, term_id, "term")

    rows = (
        db.query(Enrollment, Offering, Discipline)
        .join(Offering, Enrollment.offering_id == Offering.id)
        .join(Discipline, Offering.discipline_id == Discipline.id)
        .filter(Enrollment.student_id == student_id, Offering.term_id == term_id)
        .order_by(Discipline.name, Offering.section_code)
        .all()
    )
    summaries = grade_summaries(db, [enrollment.id for enrollment, _, _ in rows])

    return [
        {
            "enrollment_id": enrollment.id,
            "term": term.name,
            "student": student.name,
            "discipline": discipline.name,
            "section_code": offering.section_code,
            "grades": summaries.get(enrollment.id),
            "final_average": enrollment.final_average,
            "attendance_percentage": enrollment.attendance_percentage,
            "status": enrollment.status.value,
        }
        for enrollment, offering, discipline in rows
    ]
