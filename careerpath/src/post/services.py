"""
Post 도메인 Service

분류 노드 선택에 따른 게시글 매칭과 관리자 게시글 관리.
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.config import TAXONOMY_CONFIG
from careerpath.src.common.exceptions import InvalidRequest
from careerpath.src.common.middlewares.auth import require_admin
from careerpath.src.common.repositories.base_repository import EntityNotFound
from careerpath.src.post.models import Post
from careerpath.src.post.repositories import PostRepository
from careerpath.src.taxonomy.repositories import FilterOptionRepository
from careerpath.src.taxonomy.services.descendant_resolver import DescendantResolver


logger = logging.getLogger(__name__)


class PostService:
    """
    게시글 서비스.

    - 커리어 패스 피드: 선택 노드와 그 활성 하위 노드에 연결된 게시글 (OR)
    - 필터 검색: 선택한 모든 노드에 연결된 게시글 (AND)
    """

    def __init__(
        self,
        post_repo: PostRepository,
        filter_repo: FilterOptionRepository,
        resolver: DescendantResolver,
        session: AsyncSession,
    ) -> None:
        self.post_repo = post_repo
        self.filter_repo = filter_repo
        self.resolver = resolver
        self.session = session

    @classmethod
    def from_session(cls, session: AsyncSession) -> "PostService":
        """AsyncSession으로부터 서비스 인스턴스를 생성한다."""
        filter_repo = FilterOptionRepository(session)
        return cls(PostRepository(session), filter_repo, DescendantResolver(filter_repo), session)

    # ============================================================
    # 조회
    # ============================================================

    async def get_posts_for_career_path(self, node_id: int, limit: int | None = None) -> list[Post]:
        """
        선택한 커리어 패스 노드의 게시글 피드.

        노드 자신과 모든 활성 하위 노드 중 하나라도 연결된 활성 게시글을 최신순으로 반환한다.

        Raises:
            EntityNotFound: 노드가 없는 경우
        """
        if not await self.filter_repo.get(node_id):
            raise EntityNotFound("Filter node not found")

        limit = limit if limit is not None else TAXONOMY_CONFIG["feed_limit"]
        path_ids = await self.resolver.career_path_ids(node_id)

        matched = [post for post in await self.post_repo.list_active_recent() if post.is_linked_to(path_ids)]
        logger.debug(f"Career path feed for node {node_id}: {len(path_ids)} nodes, {len(matched)} posts")
        return matched[:limit] if limit > 0 else matched

    async def get_filtered_posts(self, selected_ids: Sequence[int]) -> list[Post]:
        """
        선택한 모든 노드에 연결된 활성 게시글을 최신순으로 반환한다.
        선택이 비어 있으면 활성 게시글 전체.
        """
        posts = list(await self.post_repo.list_active_recent())
        required = set(selected_ids)
        if not required:
            return posts
        return [post for post in posts if required.issubset(post.filter_option_ids or [])]

    # ============================================================
    # 관리자
    # ============================================================

    async def create_post(self, subject: str | None, **data) -> Post:
        """
        게시글을 생성한다 (관리자 전용).

        Raises:
            InvalidRequest: 연결 노드 수가 max_post_filters를 넘는 경우
            EntityNotFound: 존재하지 않는 분류 노드 ID가 포함된 경우
        """
        admin = await require_admin(subject, self.session)

        filter_ids = list(dict.fromkeys(data.get("filter_option_ids") or []))
        max_filters = TAXONOMY_CONFIG["max_post_filters"]
        if len(filter_ids) > max_filters:
            raise InvalidRequest(f"A post can be linked to at most {max_filters} filters")

        found = {node.id for node in await self.filter_repo.get_many(filter_ids)}
        missing = [node_id for node_id in filter_ids if node_id not in found]
        if missing:
            raise EntityNotFound(f"Filter nodes not found: {', '.join(map(str, missing))}")

        post = await self.post_repo.create(
            {
                **data,
                "filter_option_ids": filter_ids,
                "likes": 0,
                "comments": 0,
                "is_active": True,
                "created_by": admin.user_id,
            }
        )
        logger.info(f"Post created: {post.id} ('{post.title}', filters={filter_ids})")
        return post

    async def delete_post(self, subject: str | None, post_id: int) -> None:
        """
        게시글을 삭제한다 (관리자 전용, hard delete).

        Raises:
            EntityNotFound: 게시글이 없는 경우
        """
        await require_admin(subject, self.session)

        if not await self.post_repo.delete(post_id):
            raise EntityNotFound("Post not found")
        logger.info(f"Post deleted: {post_id}")
