"""
User 도메인 API 라우터

사용자 계정 조회/생성 엔드포인트.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.database.connection import AsyncDatabaseEngine
from careerpath.src.common.exceptions import Unauthenticated
from careerpath.src.common.middlewares.auth import get_caller_subject
from careerpath.src.user.schemas import UserCreate, UserResponse
from careerpath.src.user.services import UserService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/user", tags=["user"])


# ============================================================
# Dependencies
# ============================================================
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI Depends용 세션 제공."""
    db_engine = AsyncDatabaseEngine()
    async with db_engine.get_session() as session:
        yield session


async def get_user_service(session: AsyncSession = Depends(get_session)) -> UserService:
    """UserService 팩토리."""
    return UserService.from_session(session)


# ============================================================
# Endpoints
# ============================================================
@router.get("/me", response_model=UserResponse, summary="현재 사용자 정보 조회")
async def get_me(
    subject: str | None = Depends(get_caller_subject), service: UserService = Depends(get_user_service)
) -> UserResponse:
    """X-User-Subject 헤더의 사용자 정보를 반환한다."""
    if not subject:
        raise Unauthenticated("Unauthenticated: Please log in")

    user = await service.get_by_subject(subject)
    return UserResponse.model_validate(user)


@router.post("/register", response_model=UserResponse, status_code=201, summary="사용자 생성 (개발/테스트용)")
async def register_user(
    body: UserCreate, service: UserService = Depends(get_user_service), session: AsyncSession = Depends(get_session)
) -> UserResponse:
    """
    사용자를 생성한다.

    개발/테스트용 엔드포인트. 운영 환경의 가입은 Identity Provider 연동이 담당한다.
    """
    user = await service.create_user(
        external_id=body.external_id,
        email=body.email,
        username=body.username,
        fullname=body.fullname,
        is_admin=body.is_admin,
    )
    await session.commit()
    return UserResponse.model_validate(user)
