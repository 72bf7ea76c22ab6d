"""
services/exceptions.py

서비스 계층에서 발생하는 도메인 예외 모음.
- 모든 예외는 AcademicError를 상속하며 code(에러 식별 코드)와 status_code(HTTP 상태)를 가짐
- middlewares/error_handler.py에서 공통 JSON 에러 포맷으로 변환됨
"""


class AcademicError(Exception):
    code = "ACADEMIC_ERROR"
    status_code = 400

    def __init__(self, message: str, code: str | None = None):
        super().__init__(message)
        self.message = message
        if code:
            self.code = code


# ==========================================================
# [검증 오류] 점수 범위, 잘못된 식별자, 역할 불일치 등
# ==========================================================
class ValidationError(AcademicError):
    code = "VALIDATION_ERROR"
    status_code = 422


# ==========================================================
# [중복 오류] 유니크 제약 위반
# ==========================================================
class DuplicateError(AcademicError):
    code = "DUPLICATE"
    status_code = 409


class DuplicateGradeError(DuplicateError):
    code = "DUPLICATE_GRADE"


class DuplicateEnrollmentError(DuplicateError):
    code = "DUPLICATE_ENROLLMENT"


class DuplicateOfferingError(DuplicateError):
    code = "DUPLICATE_OFFERING"


class DuplicateAttendanceError(DuplicateError):
    code = "DUPLICATE_ATTENDANCE"


# ==========================================================
# [참조 오류] 없는 대상을 참조하거나, 참조 중인 행을 삭제하려는 경우
# ==========================================================
class ReferentialError(AcademicError):
    code = "REFERENTIAL_ERROR"
    status_code = 409


# ==========================================================
# [조회 실패] 존재하지 않는 대상에 대한 작업
# ==========================================================
class NotFoundError(AcademicError):
    code = "NOT_FOUND"
    status_code = 404
