import os

# 테스트에서는 시작 시 기본 DB 파일을 만들지 않음
os.environ.setdefault("AUTO_CREATE_TABLES", "false")

from datetime import date
from decimal import Decimal
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import sessionmaker

from database.db import init_db, make_engine
from dependencies.db import get_db
from services import catalog_service


# ==========================================================
# [공통] 테스트마다 새 SQLite 파일 DB
# ==========================================================
@pytest.fixture
def engine(tmp_path):
    engine = make_engine(f"sqlite:///{tmp_path / 'academic_test.db'}")
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture
def client(session_factory):
    from main import app

    def _get_test_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = _get_test_db
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()


# ==========================================================
# [샘플 데이터] 학기 1 + 과목 1 + 교사 1 + 학생 1 + 강좌 1
#   평가 항목: P1(가중치 1.0), P2(가중치 2.0)
# ==========================================================
@pytest.fixture
def school(db):
    term = catalog_service.create_term(db, "2025-1", date(2025, 2, 1), date(2025, 6, 30), active=True)
    discipline = catalog_service.create_discipline(db, code="MAT101", name="Matemática", credit_hours=60)
    teacher = catalog_service.create_person(db, role="Teacher", name="Ana Souza", email="ana@escola.edu")
    student = catalog_service.create_person(db, role="Student", name="Bruno Lima", email="bruno@escola.edu")
    offering = catalog_service.create_offering(
        db, discipline.id, teacher.id, term.id, "MAT-2025-A", room="101", schedule="Seg/Qua 08:00"
    )
    p1 = catalog_service.create_assessment(db, offering.id, "P1", weight=Decimal("1.0"))
    p2 = catalog_service.create_assessment(db, offering.id, "P2", weight=Decimal("2.0"))
    enrollment = catalog_service.create_enrollment(db, offering.id, student.id)

    return SimpleNamespace(
        term_id=term.id,
        discipline_id=discipline.id,
        teacher_id=teacher.id,
        student_id=student.id,
        offering_id=offering.id,
        p1_id=p1.id,
        p2_id=p2.id,
        enrollment_id=enrollment.id,
    )


def enroll_new_student(db, school, name: str) -> int:
    """같은 강좌에 학생을 한 명 더 등록하고 enrollment_id 반환"""
    email = name.lower().replace(" ", ".") + "@escola.edu"
    student = catalog_service.create_person(db, role="Student", name=name, email=email)
    return catalog_service.create_enrollment(db, school.offering_id, student.id).id
