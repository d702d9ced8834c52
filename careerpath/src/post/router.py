"""
Post 도메인 API 라우터

커리어 패스 피드, 필터 검색, 관리자 게시글 생성/삭제 엔드포인트.
"""

import logging
from collections.abc import AsyncGenerator

from fastapi import APIRouter, Depends, Query, Response
from sqlalchemy.ext.asyncio import AsyncSession

from careerpath.src.common.database.connection import AsyncDatabaseEngine
from careerpath.src.common.middlewares.auth import get_caller_subject
from careerpath.src.post.schemas import PostCreate, PostResponse
from careerpath.src.post.services import PostService


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["post"])


# ============================================================
# Dependencies
# ============================================================
async def get_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI Depends용 세션 제공."""
    db_engine = AsyncDatabaseEngine()
    async with db_engine.get_session() as session:
        yield session


async def get_post_service(session: AsyncSession = Depends(get_session)) -> PostService:
    """PostService 팩토리."""
    return PostService.from_session(session)


# ============================================================
# Endpoints
# ============================================================
@router.get("/posts/career-path/{node_id}", response_model=list[PostResponse], summary="커리어 패스 게시글 피드")
async def get_career_path_posts(
    node_id: int,
    limit: int | None = Query(None, ge=0),
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """선택 노드와 그 활성 하위 노드에 연결된 게시글을 최신순으로 반환한다."""
    posts = await service.get_posts_for_career_path(node_id, limit=limit)
    return [PostResponse.model_validate(p) for p in posts]


@router.get("/posts", response_model=list[PostResponse], summary="필터 선택 게시글 조회")
async def get_filtered_posts(
    filter_ids: list[int] | None = Query(None),
    service: PostService = Depends(get_post_service),
) -> list[PostResponse]:
    """선택한 모든 노드에 연결된 게시글을 반환한다 (AND)."""
    posts = await service.get_filtered_posts(filter_ids or [])
    return [PostResponse.model_validate(p) for p in posts]


@router.post("/admin/posts", response_model=PostResponse, status_code=201, summary="[관리자] 게시글 생성")
async def create_post(
    body: PostCreate,
    subject: str | None = Depends(get_caller_subject),
    service: PostService = Depends(get_post_service),
    session: AsyncSession = Depends(get_session),
) -> PostResponse:
    post = await service.create_post(subject, **body.model_dump())
    await session.commit()
    return PostResponse.model_validate(post)


@router.delete("/admin/posts/{post_id}", status_code=204, summary="[관리자] 게시글 삭제")
async def delete_post(
    post_id: int,
    subject: str | None = Depends(get_caller_subject),
    service: PostService = Depends(get_post_service),
    session: AsyncSession = Depends(get_session),
) -> Response:
    await service.delete_post(subject, post_id)
    await session.commit()
    return Response(status_code=204)
