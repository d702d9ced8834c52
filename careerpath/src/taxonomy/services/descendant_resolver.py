"""
Descendant Resolver (하위 노드 해석)

특정 노드 아래의 모든 하위 노드를 parent_id 인덱스로 재귀 탐색한다.
- 게시글 매칭: "IT & Software"를 선택하면 3단계 아래 "React Developer"에 연결된 게시글까지 포함
- 비활성화 cascade: 비활성화 대상 노드의 전체 하위 노드 수집

트리는 구조적으로 비순환이지만, 검증을 우회한 데이터에 대비해
방문 집합(visited)과 최대 깊이(TAXONOMY_CONFIG["max_depth"])로 탐색을 제한한다.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.config import TAXONOMY_CONFIG
from careerpath.src.taxonomy.repositories import FilterOptionRepository


logger = logging.getLogger(__name__)


class DescendantResolver:
    """parent_id 기반 재귀 하위 노드 탐색기."""

    def __init__(self, repository: FilterOptionRepository, max_depth: int | None = None) -> None:
        self.repository = repository
        self.max_depth = max_depth if max_depth is not None else TAXONOMY_CONFIG["max_depth"]

    @classmethod
    def from_session(cls, session: AsyncSession) -> "DescendantResolver":
        """AsyncSession으로부터 인스턴스를 생성한다."""
        return cls(FilterOptionRepository(session))

    async def all_active_descendant_ids(self, node_id: int) -> set[int]:
        """
        활성 하위 노드 전체의 PK 집합을 반환한다 (node_id 자신은 제외).

        비활성 자식은 그 아래 노드와 함께 제외된다.
        리프이거나 활성 자식이 없으면 빈 집합.
        """
        return await self._collect(node_id, active_only=True)

    async def all_descendant_ids(self, node_id: int) -> set[int]:
        """활성 여부와 무관하게 하위 노드 전체의 PK 집합을 반환한다."""
        return await self._collect(node_id, active_only=False)

    async def career_path_ids(self, node_id: int) -> set[int]:
        """선택한 노드와 그 활성 하위 노드 전체 ({node_id} ∪ descendants)."""
        return {node_id} | await self.all_active_descendant_ids(node_id)

    async def _collect(self, node_id: int, active_only: bool) -> set[int]:
        found: set[int] = set()
        visited: set[int] = {node_id}
        await self._walk(node_id, depth=1, active_only=active_only, found=found, visited=visited)
        return found

    async def _walk(self, parent_id: int, depth: int, active_only: bool, found: set[int], visited: set[int]) -> None:
        if depth > self.max_depth:
            logger.warning(f"Taxonomy depth limit ({self.max_depth}) reached below node {parent_id}; stopping descent")
            return

        child_ids = await self.repository.get_child_ids(parent_id, active_only=active_only)
        for child_id in child_ids:
            if child_id in visited:
                logger.warning(f"Cycle detected in taxonomy: node {child_id} revisited under {parent_id}")
                continue
            visited.add(child_id)
            found.add(child_id)
            await self._walk(child_id, depth + 1, active_only, found, visited)
