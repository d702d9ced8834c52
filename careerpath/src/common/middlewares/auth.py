"""
인증 및 권한 검증 미들웨어.

호출자 식별(subject) 추출과 관리자 권한 검증을 한 곳에서 제공한다.
관리자 권한은 캐싱하지 않고 호출마다 users 테이블에서 다시 확인한다.
"""

import logging
from dataclasses import dataclass

from fastapi import Header
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.exceptions import Unauthenticated, Unauthorized
from careerpath.src.user.repositories import UserRepository


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AdminIdentity:
    """관리자 권한 검증을 통과한 호출자."""

    user_id: int
    subject: str


async def get_caller_subject(x_user_subject: str | None = Header(default=None)) -> str | None:
    """
    FastAPI Depends용: X-User-Subject 헤더에서 호출자 subject를 추출한다.

    TODO: Identity Provider JWT 검증으로 교체 (현재는 게이트웨이가 검증한 subject를 헤더로 전달받는다).
    """
    if x_user_subject is None:
        return None
    subject = x_user_subject.strip()
    return subject or None


async def require_admin(subject: str | None, session: AsyncSession) -> AdminIdentity:
    """
    호출자가 관리자인지 확인한다.

    모든 관리자 전용 조회/변경 작업의 첫 단계에서 호출한다.

    Args:
        subject: Identity Provider subject (없으면 미인증)
        session: 데이터베이스 세션

    Returns:
        AdminIdentity

    Raises:
        Unauthenticated: subject가 없거나 등록된 사용자가 아닌 경우
        Unauthorized: 사용자가 관리자가 아닌 경우
    """
    if not subject:
        raise Unauthenticated("Unauthenticated: Please log in")

    user = await UserRepository(session).get_by_external_id(subject)
    if not user:
        logger.warning(f"Unknown caller subject: {subject}")
        raise Unauthenticated("User not found in database")

    if not user.is_admin:
        logger.warning(f"Unauthorized admin access attempt by user {user.id}")
        raise Unauthorized("Forbidden: Admin access required")

    return AdminIdentity(user_id=user.id, subject=subject)
