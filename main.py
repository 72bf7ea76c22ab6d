from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from config.settings import settings
from database.db import init_db

# ✅ 로그 설정 (LOG_LEVEL 환경변수 기준)
logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)

# HTTP 라이브러리 디버그 로그 비활성화
logging.getLogger("httpcore").setLevel(logging.WARNING)
logging.getLogger("httpx").setLevel(logging.WARNING)

logger = logging.getLogger(__name__)


# ✅ 미들웨어 임포트
from middlewares.timing import TimingMiddleware
from middlewares.error_handler import add_error_handlers

# ✅ 라우터 임포트
from routers import (
    people, terms, disciplines, offerings, assessments,
    enrollments, grades, attendance, transcripts,
)

app = FastAPI(
    title=settings.APP_TITLE,
    description=settings.APP_DESCRIPTION,
    version=settings.APP_VERSION,
)

# ✅ CORS 설정 (프론트엔드 연동 대비)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ✅ 요청 지연 측정 미들웨어 (응답 헤더 X-Latency-Ms 추가)
app.add_middleware(TimingMiddleware)

# ✅ 전역 에러 핸들러 등록 (일관된 JSON 에러 포맷)
add_error_handlers(app)

# ✅ /v1 프리픽스 라우터 등록
app.include_router(people.router,       prefix="/v1")
app.include_router(terms.router,        prefix="/v1")
app.include_router(disciplines.router,  prefix="/v1")
app.include_router(offerings.router,    prefix="/v1")
app.include_router(assessments.router,  prefix="/v1")
app.include_router(enrollments.router,  prefix="/v1")
app.include_router(grades.router,       prefix="/v1")   # ✅ 점수 입력 → 평균 재계산
app.include_router(attendance.router,   prefix="/v1")   # ✅ 출결 입력 → 출석률 재계산
app.include_router(transcripts.router,  prefix="/v1")


# ✅ 헬스체크 엔드포인트
@app.get("/health")
def health_check():
    return {"status": "ok", "message": "API is running"}


@app.on_event("startup")
def _create_tables():
    if settings.AUTO_CREATE_TABLES:
        init_db()
        logger.info("테이블 생성 확인 완료")


# ✅ 루트 엔드포인트
@app.get("/")
def root():
    return {"message": f"{settings.APP_TITLE} - 학사 관리 API"}
