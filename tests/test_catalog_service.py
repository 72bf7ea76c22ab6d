from datetime import date
from decimal import Decimal

import pytest

from models.assessments import AssessmentConfig
from models.attendance import AttendanceRecord
from models.enrollments import Enrollment
from models.grades import Grade
from models.people import Person, PersonRole
from models.terms import Term
from services import attendance_service, catalog_service, grade_service, locks
from services.exceptions import (
    DuplicateEnrollmentError, DuplicateError, DuplicateOfferingError,
    NotFoundError, ReferentialError, ValidationError,
)


# ==========================================================
# [1단계] 인원
# ==========================================================
def test_duplicate_email_rejected(db, school):
    with pytest.raises(DuplicateError) as exc:
        catalog_service.create_person(db, role="Student", name="Outro", email="bruno@escola.edu")
    assert exc.value.code == "DUPLICATE_EMAIL"


def test_duplicate_national_id_rejected(db):
    catalog_service.create_person(db, role="Admin", name="Rita", email="rita@escola.edu", national_id="123.456.789-00")
    with pytest.raises(DuplicateError):
        catalog_service.create_person(db, role="Admin", name="Rui", email="rui@escola.edu", national_id="123.456.789-00")


def test_unknown_role_rejected(db):
    with pytest.raises(ValidationError):
        catalog_service.create_person(db, role="Janitor", name="Zé", email="ze@escola.edu")


def test_referenced_person_cannot_be_deleted_but_can_be_deactivated(db, school):
    with pytest.raises(ReferentialError):
        catalog_service.delete_person(db, school.student_id)

    person = catalog_service.deactivate_person(db, school.student_id)
    assert person.active is False
    assert [p.id for p in catalog_service.list_people(db, role=PersonRole.STUDENT, active=True)] == []


def test_unreferenced_person_can_be_deleted(db):
    person = catalog_service.create_person(db, role="Admin", name="Rita", email="rita@escola.edu")
    catalog_service.delete_person(db, person.id)
    assert db.get(Person, person.id) is None


# ==========================================================
# [2단계] 학기 - 활성 학기는 하나
# ==========================================================
def test_only_one_active_term(db, school):
    second = catalog_service.create_term(db, "2025-2", date(2025, 8, 1), date(2025, 12, 15), active=True)

    db.expire_all()
    active = db.query(Term).filter(Term.active.is_(True)).all()
    assert [t.id for t in active] == [second.id]

    catalog_service.activate_term(db, school.term_id)
    assert catalog_service.get_active_term(db).id == school.term_id
    assert db.query(Term).filter(Term.active.is_(True)).count() == 1


def test_term_dates_validated(db):
    with pytest.raises(ValidationError):
        catalog_service.create_term(db, "2026-1", date(2026, 6, 1), date(2026, 2, 1))


def test_term_with_offerings_cannot_be_deleted(db, school):
    with pytest.raises(ReferentialError):
        catalog_service.delete_term(db, school.term_id)


# ==========================================================
# [3단계] 과목 / 강좌
# ==========================================================
def test_delete_discipline_referenced_by_offering_fails(db, school):
    with pytest.raises(ReferentialError):
        catalog_service.delete_discipline(db, school.discipline_id)


def test_delete_unreferenced_discipline(db):
    discipline = catalog_service.create_discipline(db, code="HIS200", name="História", credit_hours=40)
    catalog_service.delete_discipline(db, discipline.id)
    with pytest.raises(NotFoundError):
        catalog_service.delete_discipline(db, discipline.id)


def test_duplicate_discipline_code(db, school):
    with pytest.raises(DuplicateError):
        catalog_service.create_discipline(db, code="MAT101", name="Outra", credit_hours=30)


def test_duplicate_offering_section(db, school):
    with pytest.raises(DuplicateOfferingError):
        catalog_service.create_offering(db, school.discipline_id, school.teacher_id, school.term_id, "MAT-2025-A")


def test_offering_teacher_must_be_teacher(db, school):
    with pytest.raises(ValidationError):
        catalog_service.create_offering(db, school.discipline_id, school.student_id, school.term_id, "MAT-2025-C")


def test_offering_with_missing_discipline(db, school):
    with pytest.raises(ReferentialError):
        catalog_service.create_offering(db, 999, school.teacher_id, school.term_id, "X")


def test_offering_with_enrollments_cannot_be_deleted(db, school):
    with pytest.raises(ReferentialError):
        catalog_service.delete_offering(db, school.offering_id)


def test_delete_offering_cascades_assessments(db, school):
    other = catalog_service.create_offering(db, school.discipline_id, school.teacher_id, school.term_id, "MAT-2025-B")
    catalog_service.create_assessment(db, other.id, "P1")

    catalog_service.delete_offering(db, other.id)

    assert db.query(AssessmentConfig).filter(AssessmentConfig.offering_id == other.id).count() == 0


def test_assessment_weight_must_be_positive(db, school):
    with pytest.raises(ValidationError):
        catalog_service.create_assessment(db, school.offering_id, "Zero", weight=Decimal("0"))


# ==========================================================
# [4단계] 수강
# ==========================================================
def test_duplicate_enrollment(db, school):
    with pytest.raises(DuplicateEnrollmentError):
        catalog_service.create_enrollment(db, school.offering_id, school.student_id)


def test_enrollment_student_must_be_student(db, school):
    with pytest.raises(ValidationError):
        catalog_service.create_enrollment(db, school.offering_id, school.teacher_id)


def test_enrollment_with_missing_offering(db, school):
    with pytest.raises(ReferentialError):
        catalog_service.create_enrollment(db, 404, school.student_id)


def test_delete_enrollment_cascades_grades_and_attendance(db, school):
    grade_service.record_grade(db, school.enrollment_id, school.p1_id, Decimal("7.5"))
    attendance_service.record_attendance(db, school.enrollment_id, date(2025, 3, 3), True)

    catalog_service.delete_enrollment(db, school.enrollment_id)

    db.expire_all()
    assert db.get(Enrollment, school.enrollment_id) is None
    assert db.query(Grade).filter(Grade.enrollment_id == school.enrollment_id).count() == 0
    assert db.query(AttendanceRecord).filter(AttendanceRecord.enrollment_id == school.enrollment_id).count() == 0
    # 평가 항목 자체는 남아 있어야 함
    assert db.get(AssessmentConfig, school.p1_id) is not None
    # 삭제된 수강의 잠금은 레지스트리에 남지 않음
    assert school.enrollment_id not in locks._locks


def test_malformed_identifier(db, school):
    with pytest.raises(ValidationError):
        catalog_service.get_enrollment(db, 0)
