"""
Taxonomy 도메인 API 라우터

커리어 패스 분류 트리의 공개 조회 엔드포인트와
관리자 전용 조회/생성/수정/활성 전환 엔드포인트를 관리한다.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.database.connection import AsyncDatabaseEngine
from careerpath.src.common.middlewares.auth import get_caller_subject
from careerpath.src.common.schemas.base import SuccessResponse
from careerpath.src.taxonomy.schemas import (
    DescendantIdsResponse,
    FilterOptionCreate,
    FilterOptionCreated,
    FilterOptionResponse,
    FilterOptionUpdate,
    FilterStatsResponse,
    FilterTreeNodeResponse,
    FilterTreeResponse,
    ToggleActiveRequest,
    ToggleActiveResponse,
)
from careerpath.src.taxonomy.services.descendant_resolver import DescendantResolver
from careerpath.src.taxonomy.services.mutation_service import TaxonomyMutationService
from careerpath.src.taxonomy.services.query_service import TaxonomyQueryService
from careerpath.src.taxonomy.tree import TreeNode


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["taxonomy"])


# ============================================================
# Dependencies
# ============================================================
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI Depends용 세션 제공."""
    db_engine = AsyncDatabaseEngine()
    async with db_engine.get_session() as session:
        yield session


async def get_query_service(session: AsyncSession = Depends(get_session)) -> TaxonomyQueryService:
    """TaxonomyQueryService 팩토리."""
    return TaxonomyQueryService.from_session(session)


async def get_mutation_service(session: AsyncSession = Depends(get_session)) -> TaxonomyMutationService:
    """TaxonomyMutationService 팩토리."""
    return TaxonomyMutationService.from_session(session)


async def get_descendant_resolver(session: AsyncSession = Depends(get_session)) -> DescendantResolver:
    """DescendantResolver 팩토리."""
    return DescendantResolver.from_session(session)


def _to_tree_response(node: TreeNode) -> FilterTreeNodeResponse:
    item = node.item
    return FilterTreeNodeResponse(
        id=item.id,
        name=item.name,
        type=item.type,
        parent_id=item.parent_id,
        is_active=item.is_active,
        children=[_to_tree_response(child) for child in node.children],
    )


# ============================================================
# Public Endpoints
# ============================================================
@router.get("/filters", response_model=list[FilterOptionResponse], summary="활성 분류 노드 전체 조회")
async def get_all_filter_options(
    service: TaxonomyQueryService = Depends(get_query_service),
) -> list[FilterOptionResponse]:
    """활성 노드 전체를 평면 목록으로 반환한다."""
    nodes = await service.all_active()
    return [FilterOptionResponse.model_validate(n) for n in nodes]


@router.get("/filters/children", response_model=list[FilterOptionResponse], summary="자식 노드 조회")
async def get_filter_children(
    parent_id: int | None = None,
    limit: int | None = Query(None, ge=0),
    service: TaxonomyQueryService = Depends(get_query_service),
) -> list[FilterOptionResponse]:
    """
    직속 활성 자식 노드를 이름순으로 반환한다.

    Args:
        parent_id: 부모 노드 ID (생략 시 루트 노드)
        limit: 최대 반환 개수
    """
    nodes = await service.children_of(parent_id, limit=limit)
    return [FilterOptionResponse.model_validate(n) for n in nodes]


@router.get("/filters/by-ids", response_model=list[FilterOptionResponse], summary="ID 목록으로 노드 조회")
async def get_filters_by_ids(
    ids: list[int] | None = Query(None),
    service: TaxonomyQueryService = Depends(get_query_service),
) -> list[FilterOptionResponse]:
    """선택 경로(breadcrumb) 표시용. 존재하지 않는 ID는 제외된다."""
    nodes = await service.get_by_ids(ids or [])
    return [FilterOptionResponse.model_validate(n) for n in nodes]


@router.get("/filters/{node_id}", response_model=FilterOptionResponse, summary="단일 노드 조회")
async def get_filter_option(
    node_id: int, service: TaxonomyQueryService = Depends(get_query_service)
) -> FilterOptionResponse:
    """노드 상세(설명, 연봉, 관련 시험 등)를 반환한다."""
    node = await service.get_by_id(node_id)
    return FilterOptionResponse.model_validate(node)


@router.get("/filters/{node_id}/descendants", response_model=DescendantIdsResponse, summary="활성 하위 노드 ID")
async def get_active_descendants(
    node_id: int,
    query_service: TaxonomyQueryService = Depends(get_query_service),
    resolver: DescendantResolver = Depends(get_descendant_resolver),
) -> DescendantIdsResponse:
    """선택한 노드 아래의 모든 활성 하위 노드 ID를 반환한다."""
    await query_service.get_by_id(node_id)
    descendant_ids = await resolver.all_active_descendant_ids(node_id)
    return DescendantIdsResponse(node_id=node_id, descendant_ids=sorted(descendant_ids))


# ============================================================
# Admin Endpoints
# ============================================================
@router.get("/admin/filters", response_model=list[FilterOptionResponse], summary="[관리자] 전체 노드 조회")
async def get_all_filters(
    subject: str | None = Depends(get_caller_subject),
    service: TaxonomyQueryService = Depends(get_query_service),
) -> list[FilterOptionResponse]:
    """비활성 노드를 포함한 전체 노드를 반환한다."""
    nodes = await service.all_including_inactive(subject)
    return [FilterOptionResponse.model_validate(n) for n in nodes]


@router.get("/admin/filters/stats", response_model=FilterStatsResponse, summary="[관리자] 노드 통계")
async def get_filter_stats(
    subject: str | None = Depends(get_caller_subject),
    service: TaxonomyQueryService = Depends(get_query_service),
) -> FilterStatsResponse:
    """전체/활성/비활성 노드 수를 반환한다."""
    return FilterStatsResponse(**await service.stats(subject))


@router.get("/admin/filters/tree", response_model=FilterTreeResponse, summary="[관리자] 중첩 트리 조회")
async def get_filter_tree(
    search: str | None = None,
    subject: str | None = Depends(get_caller_subject),
    service: TaxonomyQueryService = Depends(get_query_service),
) -> FilterTreeResponse:
    """
    비활성 노드를 포함한 중첩 트리를 반환한다.

    search가 있으면 일치 노드와 그 조상만 남기고, 모든 노드를 펼친 상태로 표시한다.
    """
    roots, expanded = await service.admin_tree(subject, search)
    return FilterTreeResponse(
        search=search, roots=[_to_tree_response(r) for r in roots], expanded_ids=sorted(expanded)
    )


@router.post(
    "/admin/filters", response_model=FilterOptionCreated, status_code=201, summary="[관리자] 분류 노드 생성"
)
async def create_filter_node(
    body: FilterOptionCreate,
    subject: str | None = Depends(get_caller_subject),
    service: TaxonomyMutationService = Depends(get_mutation_service),
    session: AsyncSession = Depends(get_session),
) -> FilterOptionCreated:
    """계층 규칙과 형제 이름 중복을 검증한 뒤 노드를 생성한다."""
    node_id = await service.create_node(
        subject,
        name=body.name,
        type=body.type,
        parent_id=body.parent_id,
        **body.model_dump(include={"description", "requirements", "avg_salary", "relevant_exams", "image"}),
    )
    await session.commit()
    return FilterOptionCreated(id=node_id)


@router.patch("/admin/filters/{node_id}", response_model=SuccessResponse, summary="[관리자] 분류 노드 수정")
async def update_filter_node(
    node_id: int,
    body: FilterOptionUpdate,
    subject: str | None = Depends(get_caller_subject),
    service: TaxonomyMutationService = Depends(get_mutation_service),
    session: AsyncSession = Depends(get_session),
) -> SuccessResponse:
    """요청 본문에 포함된 필드만 수정한다."""
    await service.update_node(subject, node_id, **body.model_dump(exclude_unset=True))
    await session.commit()
    return SuccessResponse()


@router.put(
    "/admin/filters/{node_id}/active", response_model=ToggleActiveResponse, summary="[관리자] 활성 상태 변경"
)
async def toggle_filter_active(
    node_id: int,
    body: ToggleActiveRequest,
    subject: str | None = Depends(get_caller_subject),
    service: TaxonomyMutationService = Depends(get_mutation_service),
    session: AsyncSession = Depends(get_session),
) -> ToggleActiveResponse:
    """비활성화 시 모든 하위 노드가 함께 비활성화된다. 재활성화는 해당 노드만 변경한다."""
    deactivated = await service.toggle_active(subject, node_id, body.is_active)
    await session.commit()
    return ToggleActiveResponse(deactivated_descendants=deactivated)
