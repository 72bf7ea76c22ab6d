import sqlite3

from sqlalchemy import create_engine, event               # SQLAlchemy 엔진 생성 도구
from sqlalchemy.engine import Engine
from sqlalchemy.ext.declarative import declarative_base  # 모델의 Base 클래스
from sqlalchemy.orm import sessionmaker                  # 세션 팩토리 함수

from config.settings import settings                     # ✅ 환경변수 설정 파일 불러오기


def engine_options(url: str) -> dict:
    """URL별 create_engine 옵션 (SQLite는 스레드 공유 + 잠금 대기 시간 설정)"""
    if url.startswith("sqlite"):
        return {"connect_args": {"check_same_thread": False, "timeout": 30}}
    # ✅ 재계산 SELECT는 잠금을 잡은 시점에 커밋된 최신 점수/출결을 읽어야 함
    #    (MySQL 기본값 REPEATABLE READ는 첫 SELECT 시점의 스냅샷을 계속 읽음)
    return {"pool_pre_ping": True, "isolation_level": "READ COMMITTED"}


def make_engine(url: str) -> Engine:
    """URL에 맞는 엔진 생성"""
    return create_engine(url, **engine_options(url))


# ✅ SQLite는 연결마다 외래키 검사를 켜야 CASCADE/차단이 동작함
@event.listens_for(Engine, "connect")
def _enable_sqlite_foreign_keys(dbapi_connection, connection_record):
    if isinstance(dbapi_connection, sqlite3.Connection):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


# ✅ 환경변수에서 DB 연결 URL을 불러와 엔진 생성
engine = make_engine(settings.DATABASE_URL)

# ✅ 세션 팩토리: DB 연결에 사용할 세션 생성기 정의
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)

# ✅ 모델 정의 시 상속할 Base 클래스 (Declarative 방식 사용)
Base = declarative_base()


def init_db(bind: Engine = engine):
    """모든 모델을 등록한 뒤 테이블 생성 (마이그레이션 도구 없음)"""
    # 모델 모듈을 import 해야 Base.metadata에 테이블이 등록됨
    from models import (  # noqa: F401
        people, terms, disciplines, offerings, enrollments,
        assessments, grades, attendance,
    )

    Base.metadata.create_all(bind=bind)
