"""
지원서 제출/결제 흐름에서 사용하는 예외 정의

라우터와 서비스는 이 예외를 raise만 하고, 응답 변환은 main.py의
exception handler가 담당합니다.

    ValidationError  -> 400 (메시지 그대로 반환)
    GatewayError     -> 500 (일반 메시지만 반환, 상세 내용은 로그)
    StorageError     -> 500 (작업별 일반 메시지 반환)
"""
from typing import Optional


class ApplicationError(Exception):
    """클라이언트에 노출 가능한 message를 가진 기본 예외"""

    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ApplicationError):
    default_message = "Invalid request"


class MissingResumeError(ValidationError):
    default_message = "Resume upload required"


class InvalidResumeTypeError(ValidationError):
    default_message = "Only PDF/DOC/DOCX files are allowed"


class ResumeTooLargeError(ValidationError):
    default_message = "File too large"


class GatewayError(ApplicationError):
    """결제 게이트웨이 호출 실패 (네트워크/인증/검증 오류)"""

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None, detail: Optional[str] = None):
        self.status_code = status_code
        self.detail = detail
        super().__init__(message)


class StorageError(ApplicationError):
    """DB 읽기/쓰기 실패"""
