"""
Taxonomy Read Service

분류 트리 조회 (자식 목록, 전체 목록, ID 목록 조회, 관리자 통계/트리).
"""

import logging
from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.middlewares.auth import require_admin
from careerpath.src.common.repositories.base_repository import EntityNotFound
from careerpath.src.taxonomy.models import FilterOption
from careerpath.src.taxonomy.repositories import FilterOptionRepository
from careerpath.src.taxonomy.tree import TreeNode, TreeViewState, build_tree, name_sort_key, prune_tree


logger = logging.getLogger(__name__)


def sort_by_name(nodes: Sequence[FilterOption]) -> list[FilterOption]:
    """이름 오름차순 (대소문자 무시, 대소문자만 다르면 소문자 우선)."""
    return sorted(nodes, key=lambda n: name_sort_key(n.name))


class TaxonomyQueryService:
    """
    분류 노드 조회 서비스.

    일반 사용자는 활성 노드만 볼 수 있고, 비활성 노드를 포함한 조회는 관리자 전용이다.
    """

    def __init__(self, repository: FilterOptionRepository, session: AsyncSession) -> None:
        self.repository = repository
        self.session = session

    @classmethod
    def from_session(cls, session: AsyncSession) -> "TaxonomyQueryService":
        """AsyncSession으로부터 서비스 인스턴스를 생성한다."""
        return cls(FilterOptionRepository(session), session)

    # ============================================================
    # 공개 조회
    # ============================================================

    async def children_of(
        self,
        parent_id: int | None = None,
        limit: int | None = None,
        include_inactive: bool = False,
        subject: str | None = None,
    ) -> list[FilterOption]:
        """
        직속 자식 노드를 이름순으로 조회한다.

        Args:
            parent_id: 부모 노드 PK (None이면 루트)
            limit: 최대 반환 개수 (None 또는 0 이하면 전체)
            include_inactive: 비활성 노드 포함 여부 (관리자 전용)
            subject: 호출자 식별자 (include_inactive일 때 관리자 권한을 재확인)

        Raises:
            Unauthenticated / Unauthorized: include_inactive인데 관리자가 아닌 경우
        """
        if include_inactive:
            await require_admin(subject, self.session)
        children = sort_by_name(await self.repository.get_children(parent_id, active_only=not include_inactive))
        if limit and limit > 0:
            return children[:limit]
        return children

    async def all_active(self) -> list[FilterOption]:
        """활성 노드 전체를 평면 목록으로 조회한다."""
        return list(await self.repository.list_nodes(active_only=True))

    async def get_by_id(self, node_id: int) -> FilterOption:
        """
        단일 노드를 조회한다 (비활성 포함).

        Raises:
            EntityNotFound: 노드가 없는 경우
        """
        node = await self.repository.get(node_id)
        if not node:
            raise EntityNotFound("Filter node not found")
        return node

    async def get_by_ids(self, node_ids: Sequence[int]) -> list[FilterOption]:
        """
        ID 목록에 해당하는 노드를 입력 순서대로 반환한다 (breadcrumb 표시용).
        존재하지 않는 ID는 건너뛴다.
        """
        if not node_ids:
            return []
        found = {node.id: node for node in await self.repository.get_many(node_ids)}
        return [found[node_id] for node_id in node_ids if node_id in found]

    # ============================================================
    # 관리자 조회
    # ============================================================

    async def all_including_inactive(self, subject: str | None) -> list[FilterOption]:
        """관리자 전용: 비활성 노드를 포함한 전체 노드."""
        await require_admin(subject, self.session)
        return list(await self.repository.list_nodes(active_only=False))

    async def stats(self, subject: str | None) -> dict[str, int]:
        """관리자 전용: 전체/활성/비활성 노드 수."""
        await require_admin(subject, self.session)
        counts = await self.repository.count_by_active()
        return {"total": counts[True] + counts[False], "active": counts[True], "inactive": counts[False]}

    async def admin_tree(self, subject: str | None, search: str | None = None) -> tuple[list[TreeNode], set[int]]:
        """
        관리자 전용: 비활성 노드를 포함한 전체 트리를 만들고 검색어로 가지치기한다.

        Returns:
            (루트 노드 목록, 펼쳐야 할 노드 ID 집합. 검색 중이면 전체)
        """
        nodes = await self.all_including_inactive(subject)
        state = TreeViewState()
        state.set_search(search or "", nodes)
        return prune_tree(build_tree(nodes), search), set(state.expanded)
