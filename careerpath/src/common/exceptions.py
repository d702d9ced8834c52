"""
서비스 계층 공통 예외.

조회 실패(EntityNotFound)와 중복(DuplicateEntity)은 Repository 계층의 예외를 그대로 사용하고,
인증/권한/입력 검증 실패는 이 모듈의 예외로 표현한다.
HTTP 상태 코드 변환은 main.py의 exception handler에서 한 곳에서 처리한다.
"""


class ServiceException(Exception):
    """서비스 계층 예외의 최상위 클래스."""

    pass


class Unauthenticated(ServiceException):
    """호출자 식별 정보가 없거나 확인할 수 없는 경우."""

    pass


class Unauthorized(ServiceException):
    """호출자는 확인되었으나 관리자 권한이 없는 경우."""

    pass


class InvalidRequest(ServiceException):
    """빈 이름, 허용되지 않는 계층 조합 등 입력 검증 실패."""

    pass


__all__ = ["ServiceException", "Unauthenticated", "Unauthorized", "InvalidRequest"]
