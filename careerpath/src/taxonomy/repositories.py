"""
FilterOption Repository

커리어 패스 분류 노드의 저장소(Taxonomy Store) 접근 계층.
parent_id 인덱스를 이용한 자식 조회, 형제 이름 조회, 전체 스캔을 제공한다.
"""

import logging
from collections.abc import Sequence

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.repositories.base_repository import BaseRepository
from careerpath.src.taxonomy.models import FilterOption


logger = logging.getLogger(__name__)


class FilterOptionRepository(BaseRepository[FilterOption]):
    """커리어 패스 분류 노드 Repository."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(FilterOption, session)

    def _parent_clause(self, parent_id: int | None):
        # parent_id = NULL 비교는 IS NULL로 변환해야 루트가 조회된다
        if parent_id is None:
            return self.model.parent_id.is_(None)
        return self.model.parent_id == parent_id

    async def get_children(self, parent_id: int | None, active_only: bool = True) -> Sequence[FilterOption]:
        """
        직속 자식 노드를 조회한다.

        Args:
            parent_id: 부모 노드 PK (None이면 루트 노드 목록)
            active_only: True면 활성 노드만 반환

        Returns:
            자식 노드 목록 (정렬되지 않음, 이름 정렬은 서비스 계층에서 수행)
        """
        stmt = select(self.model).where(self._parent_clause(parent_id))
        if active_only:
            stmt = stmt.where(self.model.is_active.is_(True))

        result = await self.session.execute(stmt)
        return result.scalars().all()

    async def get_child_ids(self, parent_id: int, active_only: bool = False) -> list[int]:
        """직속 자식 노드의 PK 목록만 조회한다 (재귀 탐색용)."""
        stmt = select(self.model.id).where(self.model.parent_id == parent_id)
        if active_only:
            stmt = stmt.where(self.model.is_active.is_(True))

        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_sibling_by_name(
        self, parent_id: int | None, name: str, exclude_id: int | None = None
    ) -> FilterOption | None:
        """
        같은 부모 아래에서 이름이 정확히 일치하는 노드를 찾는다 (대소문자 구분).

        Args:
            parent_id: 부모 노드 PK (None이면 루트 간 비교)
            name: 비교할 이름 (trim 완료된 값)
            exclude_id: 비교에서 제외할 노드 PK (수정 시 자기 자신)
        """
        stmt = select(self.model).where(self._parent_clause(parent_id), self.model.name == name)
        if exclude_id is not None:
            stmt = stmt.where(self.model.id != exclude_id)

        result = await self.session.execute(stmt.limit(1))
        return result.scalars().first()

    async def list_nodes(self, active_only: bool = True) -> Sequence[FilterOption]:
        """전체 노드를 평면 목록으로 조회한다."""
        stmt = select(self.model)
        if active_only:
            stmt = stmt.where(self.model.is_active.is_(True))

        result = await self.session.execute(stmt.order_by(self.model.id))
        return result.scalars().all()

    async def set_active(self, node_ids: Sequence[int], is_active: bool) -> int:
        """
        여러 노드의 is_active를 한 번에 갱신한다.

        Returns:
            갱신 대상 노드 수
        """
        if not node_ids:
            return 0

        stmt = (
            update(self.model)
            .where(self.model.id.in_(list(node_ids)))
            .values(is_active=is_active)
            .execution_options(synchronize_session="fetch")
        )
        await self.session.execute(stmt)
        await self.session.flush()
        return len(node_ids)

    async def count_by_active(self) -> dict[bool, int]:
        """is_active 값별 노드 수를 집계한다."""
        stmt = select(self.model.is_active, func.count(self.model.id)).group_by(self.model.is_active)
        result = await self.session.execute(stmt)
        counts = {True: 0, False: 0}
        for is_active, count in result.all():
            counts[bool(is_active)] = count
        return counts
