"""
Post Repository
"""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.repositories.base_repository import BaseRepository
from careerpath.src.post.models import Post


class PostRepository(BaseRepository[Post]):
    """커리어 게시글 Repository."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(Post, session)

    async def list_active_recent(self) -> Sequence[Post]:
        """
        활성 게시글을 최신순으로 조회한다.

        filter_option_ids는 JSON 배열이라 DB 방언별 포함 연산이 다르므로
        노드 매칭은 서비스 계층에서 수행한다.
        """
        stmt = (
            select(self.model)
            .where(self.model.is_active.is_(True))
            .order_by(self.model.created_at.desc(), self.model.id.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().all()
