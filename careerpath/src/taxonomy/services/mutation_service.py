"""
Taxonomy Mutation Service

관리자 전용 분류 노드 생성/수정/활성 전환.

모든 검증(권한 → 입력 → 계층 규칙 → 형제 이름 중복)은 단일 insert/patch 이전에 수행되므로
검증 실패 시 부분 반영이 발생하지 않는다.
"""

import logging
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.enums import FilterType
from careerpath.src.common.exceptions import InvalidRequest
from careerpath.src.common.middlewares.auth import require_admin
from careerpath.src.common.repositories.base_repository import DuplicateEntity, EntityNotFound
from careerpath.src.taxonomy.hierarchy import TYPE_ORDER, is_valid_root_type, legal_child_types
from careerpath.src.taxonomy.repositories import FilterOptionRepository
from careerpath.src.taxonomy.services.descendant_resolver import DescendantResolver


logger = logging.getLogger(__name__)

DESCRIPTIVE_FIELDS = ("description", "requirements", "avg_salary", "relevant_exams", "image")


def _clean_optional(value: str | None) -> str | None:
    """앞뒤 공백 제거 후 빈 문자열은 None으로 정규화."""
    if value is None:
        return None
    return value.strip() or None


class TaxonomyMutationService:
    """
    분류 노드 변경 서비스.

    호출마다 require_admin으로 관리자 권한을 다시 확인한다.
    """

    def __init__(self, repository: FilterOptionRepository, resolver: DescendantResolver, session: AsyncSession) -> None:
        self.repository = repository
        self.resolver = resolver
        self.session = session

    @classmethod
    def from_session(cls, session: AsyncSession) -> "TaxonomyMutationService":
        """AsyncSession으로부터 서비스 인스턴스를 생성한다."""
        repository = FilterOptionRepository(session)
        return cls(repository, DescendantResolver(repository), session)

    # ============================================================
    # 생성
    # ============================================================

    async def create_node(
        self,
        subject: str | None,
        name: str,
        type: FilterType | str,
        parent_id: int | None = None,
        **fields: str | None,
    ) -> int:
        """
        분류 노드를 생성한다.

        Args:
            subject: 호출자 subject
            name: 노드 이름 (trim 후 비어 있으면 안 됨)
            type: 분류 단계
            parent_id: 상위 노드 PK (없으면 루트, qualification만 허용)
            **fields: description, requirements, avg_salary, relevant_exams, image

        Returns:
            생성된 노드 PK

        Raises:
            Unauthenticated / Unauthorized: 관리자 권한 없음
            InvalidRequest: 빈 이름, 허용되지 않는 타입 조합, 루트 타입 위반
            EntityNotFound: 상위 노드 없음
            DuplicateEntity: 같은 레벨에 같은 이름 존재
        """
        await require_admin(subject, self.session)

        try:
            node_type = FilterType(type)
        except ValueError:
            raise InvalidRequest(f"Unknown filter type '{type}'") from None

        clean_name = name.strip()
        if not clean_name:
            raise InvalidRequest("Name cannot be empty")

        unknown = set(fields) - set(DESCRIPTIVE_FIELDS)
        if unknown:
            raise InvalidRequest(f"Unknown fields: {', '.join(sorted(unknown))}")

        if parent_id is not None:
            parent = await self.repository.get(parent_id)
            if not parent:
                raise EntityNotFound("Parent filter not found")

            valid_types = legal_child_types(parent.type)
            if node_type not in valid_types:
                valid_list = ", ".join(t.value for t in TYPE_ORDER if t in valid_types) or "none"
                raise InvalidRequest(
                    f"Invalid child type '{node_type.value}' for parent type '{FilterType(parent.type).value}'. "
                    f"Valid types: {valid_list}"
                )
        elif not is_valid_root_type(node_type):
            raise InvalidRequest("Only 'qualification' nodes can be root-level")

        if await self.repository.find_sibling_by_name(parent_id, clean_name):
            raise DuplicateEntity(f"A filter named '{clean_name}' already exists at this level")

        node = await self.repository.create(
            {
                "name": clean_name,
                "type": node_type,
                "parent_id": parent_id,
                **{key: _clean_optional(fields.get(key)) for key in DESCRIPTIVE_FIELDS},
                "likes": 0,
                "comments": 0,
                "is_active": True,
            }
        )
        logger.info(f"Filter node created: {node.id} ({node_type.value} '{clean_name}', parent={parent_id})")
        return node.id

    # ============================================================
    # 수정
    # ============================================================

    async def update_node(self, subject: str | None, node_id: int, **changes: Any) -> None:
        """
        명시적으로 전달된 필드만 수정한다.

        type, parent_id는 변경할 수 없다.

        Args:
            subject: 호출자 subject
            node_id: 수정할 노드 PK
            **changes: name 및 설명 필드 중 변경할 항목만

        Raises:
            EntityNotFound: 노드 없음
            InvalidRequest: 빈 이름 또는 변경 불가 필드 포함
            DuplicateEntity: 같은 레벨의 다른 노드와 이름 충돌
        """
        await require_admin(subject, self.session)

        node = await self.repository.get(node_id)
        if not node:
            raise EntityNotFound("Filter node not found")

        unknown = set(changes) - {"name", *DESCRIPTIVE_FIELDS}
        if unknown:
            raise InvalidRequest(f"Fields cannot be updated: {', '.join(sorted(unknown))}")

        updates: dict[str, Any] = {}
        if "name" in changes and changes["name"] is not None:
            clean_name = changes["name"].strip()
            if not clean_name:
                raise InvalidRequest("Name cannot be empty")
            if clean_name != node.name and await self.repository.find_sibling_by_name(
                node.parent_id, clean_name, exclude_id=node.id
            ):
                raise DuplicateEntity(f"A filter named '{clean_name}' already exists at this level")
            updates["name"] = clean_name

        for key in DESCRIPTIVE_FIELDS:
            if key in changes:
                updates[key] = _clean_optional(changes[key])

        if updates:
            await self.repository.update(node_id, updates)
            logger.info(f"Filter node updated: {node_id} ({', '.join(updates)})")

    # ============================================================
    # 활성 전환 (soft delete)
    # ============================================================

    async def toggle_active(self, subject: str | None, node_id: int, is_active: bool) -> int:
        """
        노드의 활성 상태를 변경한다.

        비활성화는 모든 하위 노드에 즉시 전파된다 (이전 상태와 무관하게 False로 설정).
        재활성화는 전파하지 않으며 해당 노드만 변경된다.

        Returns:
            함께 비활성화된 하위 노드 수 (재활성화 시 0)

        Raises:
            EntityNotFound: 노드 없음
        """
        await require_admin(subject, self.session)

        node = await self.repository.get(node_id)
        if not node:
            raise EntityNotFound("Filter node not found")

        await self.repository.update(node_id, {"is_active": is_active})

        if is_active:
            logger.info(f"Filter node reactivated: {node_id} (descendants unchanged)")
            return 0

        descendant_ids = await self.resolver.all_descendant_ids(node_id)
        deactivated = await self.repository.set_active(sorted(descendant_ids), False)
        logger.info(f"Filter node deactivated: {node_id} (+{deactivated} descendants)")
        return deactivated
