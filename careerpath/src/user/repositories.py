"""
User 도메인 Repositories

사용자 계정 데이터 접근 계층.
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.repositories.base_repository import BaseRepository
from careerpath.src.user.models import User


logger = logging.getLogger(__name__)


# ============================================================
# User Repository
# ============================================================
class UserRepository(BaseRepository[User]):
    """통합 사용자 계정 Repository."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(User, session)

    async def get_by_external_id(self, external_id: str) -> User | None:
        """
        Identity Provider subject로 사용자를 조회한다.

        Args:
            external_id: 외부 인증 서비스의 subject

        Returns:
            User 인스턴스 또는 None
        """
        stmt = select(self.model).where(self.model.external_id == external_id)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()

    async def get_by_email(self, email: str) -> User | None:
        """이메일로 사용자를 조회한다."""
        stmt = select(self.model).where(self.model.email == email)
        result = await self.session.execute(stmt)
        return result.scalar_one_or_none()
