"""
services/catalog_service.py

기본 엔티티 등록/삭제 (인원, 학기, 과목, 강좌, 평가 항목, 수강).
- 유니크 제약은 DB에 걸려 있고, 여기서는 먼저 조회해서 타입이 있는 예외로 알려줌
- 참조 중인 행 삭제는 ReferentialError로 차단, 하위 행은 모델에 선언된 대로 CASCADE
"""

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import List, Optional

from sqlalchemy.orm import Session

from models.assessments import AssessmentConfig
from models.disciplines import Discipline
from models.enrollments import Enrollment
from models.offerings import Offering
from models.people import Person, PersonRole
from models.terms import Term
from services.exceptions import (
    DuplicateEnrollmentError, DuplicateError, DuplicateOfferingError,
    ReferentialError, ValidationError,
)
from services.locks import discard_enrollment_lock, enrollment_lock
from services.lookups import check_id, get_or_404, require_ref
from services.recompute_service import lock_enrollment
from services.transaction import transaction

logger = logging.getLogger(__name__)


def _parse_role(role) -> PersonRole:
    try:
        return PersonRole(role)
    except ValueError:
        raise ValidationError(f"Unknown role: {role!r}", code="INVALID_ROLE")


# ==========================================================
# [1단계] 인원 (Person)
# ==========================================================
def create_person(
    db: Session,
    role,
    name: str,
    email: str,
    national_id: Optional[str] = None,
    birth_date: Optional[date] = None,
    extra_data: Optional[dict] = None,
) -> Person:
    role = _parse_role(role)
    if not name or not name.strip():
        raise ValidationError("Person name is required")

    with transaction(db, integrity_error=DuplicateError(f"Person {email} already exists")):
        if db.query(Person.id).filter(Person.email == email).first():
            raise DuplicateError(f"Email {email} already registered", code="DUPLICATE_EMAIL")
        if national_id and db.query(Person.id).filter(Person.national_id == national_id).first():
            raise DuplicateError(f"National id {national_id} already registered", code="DUPLICATE_NATIONAL_ID")

        person = Person(
            role=role, name=name.strip(), email=email, national_id=national_id,
            birth_date=birth_date, extra_data=extra_data, active=True,
        )
        db.add(person)

    db.refresh(person)
    logger.info(f"인원 등록: person_id={person.id}, role={role.value}")
    return person


def list_people(db: Session, role=None, active: Optional[bool] = None) -> List[Person]:
    query = db.query(Person)
    if role is not None:
        query = query.filter(Person.role == _parse_role(role))
    if active is not None:
        query = query.filter(Person.active.is_(active))
    return query.order_by(Person.id).all()


def deactivate_person(db: Session, person_id: int) -> Person:
    """삭제 대신 비활성화 (참조 기록 보존)"""
    person = get_or_404(db, Person, person_id, "person")
    with transaction(db):
        person.active = False
    db.refresh(person)
    logger.info(f"인원 비활성화: person_id={person_id}")
    return person


def delete_person(db: Session, person_id: int):
    person = get_or_404(db, Person, person_id, "person")
    teaches = db.query(Offering.id).filter(Offering.teacher_id == person_id).first()
    enrolled = db.query(Enrollment.id).filter(Enrollment.student_id == person_id).first()
    if teaches or enrolled:
        raise ReferentialError(f"Person {person_id} is referenced by offerings or enrollments; deactivate instead")

    with transaction(db):
        db.delete(person)
    logger.info(f"인원 삭제: person_id={person_id}")


# ==========================================================
# [2단계] 학기 (Term) - 활성 학기는 항상 하나
# ==========================================================
def _deactivate_other_terms(db: Session, term_id: int):
    db.query(Term).filter(Term.id != term_id, Term.active.is_(True)).update(
        {Term.active: False}, synchronize_session="fetch"
    )


def create_term(db: Session, name: str, start_date: date, end_date: date, active: bool = False) -> Term:
    if start_date > end_date:
        raise ValidationError(f"Term {name} starts after it ends", code="INVALID_TERM_DATES")

    with transaction(db, integrity_error=DuplicateError(f"Term {name} already exists")):
        if db.query(Term.id).filter(Term.name == name).first():
            raise DuplicateError(f"Term {name} already exists", code="DUPLICATE_TERM")
        term = Term(name=name, start_date=start_date, end_date=end_date, active=active)
        db.add(term)
        db.flush()
        if active:
            _deactivate_other_terms(db, term.id)

    db.refresh(term)
    logger.info(f"학기 등록: term_id={term.id}, name={name}, active={active}")
    return term


def activate_term(db: Session, term_id: int) -> Term:
    term = get_or_404(db, Term, term_id, "term")
    with transaction(db):
        term.active = True
        db.flush()
        _deactivate_other_terms(db, term_id)
    db.refresh(term)
    logger.info(f"활성 학기 변경: term_id={term_id}")
    return term


def get_active_term(db: Session) -> Optional[Term]:
    return db.query(Term).filter(Term.active.is_(True)).first()


def list_terms(db: Session) -> List[Term]:
    return db.query(Term).order_by(Term.start_date).all()


def delete_term(db: Session, term_id: int):
    term = get_or_404(db, Term, term_id, "term")
    if db.query(Offering.id).filter(Offering.term_id == term_id).first():
        raise ReferentialError(f"Term {term_id} has offerings and cannot be deleted")
    with transaction(db):
        db.delete(term)
    logger.info(f"학기 삭제: term_id={term_id}")


# ==========================================================
# [3단계] 과목 (Discipline)
# ==========================================================
def create_discipline(
    db: Session, code: Optional[str], name: str, credit_hours: int, syllabus: Optional[str] = None
) -> Discipline:
    if credit_hours is None or credit_hours <= 0:
        raise ValidationError("Credit hours must be positive", code="INVALID_CREDIT_HOURS")

    with transaction(db, integrity_error=DuplicateError(f"Discipline {code} already exists")):
        if code and db.query(Discipline.id).filter(Discipline.code == code).first():
            raise DuplicateError(f"Discipline code {code} already exists", code="DUPLICATE_DISCIPLINE")
        discipline = Discipline(code=code, name=name, syllabus=syllabus, credit_hours=credit_hours)
        db.add(discipline)

    db.refresh(discipline)
    logger.info(f"과목 등록: discipline_id={discipline.id}, code={code}")
    return discipline


def list_disciplines(db: Session) -> List[Discipline]:
    return db.query(Discipline).order_by(Discipline.name).all()


def delete_discipline(db: Session, discipline_id: int):
    discipline = get_or_404(db, Discipline, discipline_id, "discipline")
    if db.query(Offering.id).filter(Offering.discipline_id == discipline_id).first():
        raise ReferentialError(f"Discipline {discipline_id} is referenced by offerings")
    with transaction(db):
        db.delete(discipline)
    logger.info(f"과목 삭제: discipline_id={discipline_id}")


# ==========================================================
# [4단계] 강좌 (Offering)
# ==========================================================
def create_offering(
    db: Session,
    discipline_id: int,
    teacher_id: int,
    term_id: int,
    section_code: str,
    room: Optional[str] = None,
    schedule: Optional[str] = None,
) -> Offering:
    duplicate = DuplicateOfferingError(
        f"Section {section_code} already offered for discipline {discipline_id} in term {term_id}"
    )

    with transaction(db, integrity_error=duplicate):
        require_ref(db, Discipline, discipline_id, "discipline")
        require_ref(db, Term, term_id, "term")
        teacher = require_ref(db, Person, teacher_id, "teacher")
        if teacher.role != PersonRole.TEACHER:
            raise ValidationError(f"Person {teacher_id} is not a teacher", code="INVALID_ROLE")

        exists = (
            db.query(Offering.id)
            .filter(
                Offering.discipline_id == discipline_id,
                Offering.term_id == term_id,
                Offering.section_code == section_code,
            )
            .first()
        )
        if exists:
            raise duplicate

        offering = Offering(
            discipline_id=discipline_id, teacher_id=teacher_id, term_id=term_id,
            section_code=section_code, room=room, schedule=schedule, closed=False,
        )
        db.add(offering)

    db.refresh(offering)
    logger.info(f"강좌 개설: offering_id={offering.id}, section={section_code}")
    return offering


def list_offerings(db: Session, term_id: Optional[int] = None) -> List[Offering]:
    query = db.query(Offering)
    if term_id is not None:
        query = query.filter(Offering.term_id == term_id)
    return query.order_by(Offering.id).all()


def close_offering(db: Session, offering_id: int) -> Offering:
    """마감 처리: 이후 점수/출결 입력 불가"""
    offering = get_or_404(db, Offering, offering_id, "offering")
    with transaction(db):
        offering.closed = True
    db.refresh(offering)
    logger.info(f"강좌 마감: offering_id={offering_id}")
    return offering


def delete_offering(db: Session, offering_id: int):
    offering = get_or_404(db, Offering, offering_id, "offering")
    if db.query(Enrollment.id).filter(Enrollment.offering_id == offering_id).first():
        raise ReferentialError(f"Offering {offering_id} has enrollments and cannot be deleted")
    with transaction(db):
        db.delete(offering)  # 평가 항목은 CASCADE
    logger.info(f"강좌 삭제: offering_id={offering_id}")


# ==========================================================
# [5단계] 평가 항목 (AssessmentConfig)
# ==========================================================
def create_assessment(
    db: Session, offering_id: int, name: str, weight=Decimal("1.0"), scheduled_date: Optional[date] = None
) -> AssessmentConfig:
    try:
        weight = Decimal(str(weight))
    except (InvalidOperation, ValueError):
        raise ValidationError(f"Weight {weight!r} is not a number", code="INVALID_WEIGHT")
    if not weight.is_finite() or weight <= 0:
        raise ValidationError(f"Weight must be positive, got {weight}", code="INVALID_WEIGHT")

    with transaction(db):
        require_ref(db, Offering, offering_id, "offering")
        assessment = AssessmentConfig(
            offering_id=offering_id, name=name, weight=weight, scheduled_date=scheduled_date
        )
        db.add(assessment)

    db.refresh(assessment)
    logger.info(f"평가 항목 등록: assessment_id={assessment.id}, offering_id={offering_id}, weight={weight}")
    return assessment


def list_assessments(db: Session, offering_id: int) -> List[AssessmentConfig]:
    get_or_404(db, Offering, offering_id, "offering")
    return (
        db.query(AssessmentConfig)
        .filter(AssessmentConfig.offering_id == offering_id)
        .order_by(AssessmentConfig.id)
        .all()
    )


# ==========================================================
# [6단계] 수강 (Enrollment)
# ==========================================================
def create_enrollment(db: Session, offering_id: int, student_id: int) -> Enrollment:
    duplicate = DuplicateEnrollmentError(
        f"Student {student_id} is already enrolled in offering {offering_id}"
    )

    with transaction(db, integrity_error=duplicate):
        offering = require_ref(db, Offering, offering_id, "offering")
        student = require_ref(db, Person, student_id, "student")
        if student.role != PersonRole.STUDENT:
            raise ValidationError(f"Person {student_id} is not a student", code="INVALID_ROLE")
        if offering.closed:
            raise ValidationError(f"Offering {offering_id} is closed", code="OFFERING_CLOSED")

        exists = (
            db.query(Enrollment.id)
            .filter(Enrollment.offering_id == offering_id, Enrollment.student_id == student_id)
            .first()
        )
        if exists:
            raise duplicate

        # 파생 필드(평균/출석률/상태)는 모델 기본값으로만 시작
        enrollment = Enrollment(offering_id=offering_id, student_id=student_id)
        db.add(enrollment)

    db.refresh(enrollment)
    logger.info(f"수강 등록: enrollment_id={enrollment.id}, offering_id={offering_id}, student_id={student_id}")
    return enrollment


def get_enrollment(db: Session, enrollment_id: int) -> Enrollment:
    return get_or_404(db, Enrollment, enrollment_id, "enrollment")


def list_enrollments(
    db: Session, offering_id: Optional[int] = None, student_id: Optional[int] = None
) -> List[Enrollment]:
    query = db.query(Enrollment)
    if offering_id is not None:
        query = query.filter(Enrollment.offering_id == offering_id)
    if student_id is not None:
        query = query.filter(Enrollment.student_id == student_id)
    return query.order_by(Enrollment.id).all()


def delete_enrollment(db: Session, enrollment_id: int):
    """수강 삭제 → 점수/출결 기록 CASCADE"""
    check_id(enrollment_id, "enrollment")
    with enrollment_lock(enrollment_id):
        with transaction(db):
            db.delete(lock_enrollment(db, enrollment_id))
    discard_enrollment_lock(enrollment_id)
    logger.info(f"수강 삭제: enrollment_id={enrollment_id}")
