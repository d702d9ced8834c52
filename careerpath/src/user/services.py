"""
User 도메인 Service

사용자 계정 조회/생성 로직.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.repositories.base_repository import DuplicateEntity, EntityNotFound
from careerpath.src.user.models import User
from careerpath.src.user.repositories import UserRepository


logger = logging.getLogger(__name__)


class UserService:
    """
    사용자 서비스.

    계정 조회, 생성 등 User 도메인의 핵심 비즈니스 로직.
    """

    def __init__(self, user_repo: UserRepository) -> None:
        self.user_repo = user_repo

    @classmethod
    def from_session(cls, session: AsyncSession) -> "UserService":
        """AsyncSession으로부터 서비스 인스턴스를 생성한다."""
        return cls(user_repo=UserRepository(session))

    async def get_user(self, user_id: int) -> User:
        """
        사용자를 PK로 조회한다.

        Raises:
            EntityNotFound: 사용자가 존재하지 않는 경우
        """
        user = await self.user_repo.get(user_id)
        if not user:
            raise EntityNotFound(f"User(id={user_id}) 이(가) 존재하지 않습니다.")
        return user

    async def get_by_subject(self, subject: str) -> User:
        """
        Identity Provider subject로 사용자를 조회한다.

        Raises:
            EntityNotFound: 해당 subject의 사용자가 없는 경우
        """
        user = await self.user_repo.get_by_external_id(subject)
        if not user:
            raise EntityNotFound(f"User(subject={subject}) 이(가) 존재하지 않습니다.")
        return user

    async def create_user(
        self, external_id: str, email: str, username: str, fullname: str | None = None, is_admin: bool = False
    ) -> User:
        """
        사용자를 생성한다 (개발/테스트용).

        Raises:
            DuplicateEntity: 같은 subject 또는 이메일의 사용자가 이미 있는 경우
        """
        if await self.user_repo.get_by_external_id(external_id) or await self.user_repo.get_by_email(email):
            raise DuplicateEntity(f"User(subject={external_id}, email={email}) 이(가) 이미 존재합니다.")

        user = await self.user_repo.create(
            {
                "external_id": external_id,
                "email": email,
                "username": username,
                "fullname": fullname,
                "is_admin": is_admin,
            }
        )
        logger.info(f" 사용자 생성: {email} (admin={is_admin})")
        return user
