import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from schemas.common import ErrorDetail, ErrorResponse
from services.exceptions import AcademicError

logger = logging.getLogger(__name__)


def _error_response(status_code: int, code: str, message: str) -> JSONResponse:
    body = ErrorResponse(error=ErrorDetail(code=code, message=message))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


def add_error_handlers(app: FastAPI):
    # ✅ 도메인 예외 (검증/중복/참조/미존재) → 일관된 JSON 에러 포맷
    @app.exception_handler(AcademicError)
    async def academic_error_handler(request: Request, exc: AcademicError):
        logger.warning(f"{request.method} {request.url.path} → {exc.code}: {exc.message}")
        return _error_response(exc.status_code, exc.code, exc.message)

    # ✅ 요청 본문/경로 파라미터 검증 실패 → 422 (점수 값 오류는 INVALID_VALUE)
    @app.exception_handler(RequestValidationError)
    async def request_validation_handler(request: Request, exc: RequestValidationError):
        errors = exc.errors()
        code = "VALIDATION_ERROR"
        if any(tuple(err.get("loc", ()))[:2] == ("body", "value") for err in errors):
            code = "INVALID_VALUE"
        message = "; ".join(
            f"{'.'.join(str(part) for part in err.get('loc', ()))}: {err.get('msg')}" for err in errors
        )
        logger.warning(f"{request.method} {request.url.path} → {code}: {message}")
        return _error_response(422, code, message)

    # ✅ 그 밖의 예외는 500
    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception):
        logger.exception(f"처리되지 않은 예외: {request.method} {request.url.path}")
        return _error_response(500, "INTERNAL_ERROR", str(exc))
