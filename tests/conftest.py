"""
pytest 공용 픽스처 모음

테스트 전략:
- 테스트마다 새 인메모리 SQLite(aiosqlite) 엔진을 만들고 모델 기반으로 스키마 생성
- 테스트 종료 시 엔진을 폐기하므로 테스트 간 데이터가 공유되지 않음
- DATABASE_URL을 앱 임포트 전에 설정해 운영 DB(PostgreSQL)에 접속하지 않음
"""

import os


os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite://")

from collections.abc import AsyncGenerator  # noqa: E402
from typing import Any  # noqa: E402

import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

from careerpath.main import app  # noqa: E402
from careerpath.src.common.database.connection import register_models  # noqa: E402
from careerpath.src.common.models.base import Base  # noqa: E402


TEST_DATABASE_URL = "sqlite+aiosqlite://"

ADMIN_SUBJECT = "admin-subject"
MEMBER_SUBJECT = "member-subject"


# ============================================================
# 1. 엔진 & 세션 픽스처
# ============================================================
@pytest_asyncio.fixture
async def engine():
    """테스트 전용 비동기 엔진 (함수 스코프, 각 테스트마다 독립 생성)."""
    register_models()
    _engine = create_async_engine(
        TEST_DATABASE_URL, echo=False, poolclass=StaticPool, connect_args={"check_same_thread": False}
    )
    async with _engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield _engine
    await _engine.dispose()


@pytest_asyncio.fixture
async def session(engine) -> AsyncGenerator[AsyncSession, None]:
    """각 테스트 함수마다 새로운 AsyncSession 제공."""
    session_factory = async_sessionmaker(
        bind=engine, class_=AsyncSession, expire_on_commit=False, autoflush=False, autocommit=False
    )
    async with session_factory() as async_session:
        yield async_session


# ============================================================
# 2. FastAPI AsyncClient (세션 오버라이드 포함)
# ============================================================
@pytest_asyncio.fixture
async def client(session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """
    FastAPI 앱의 AsyncClient.

    모든 라우터의 get_session 의존성을 테스트 세션으로 교체.
    """
    from careerpath.src.post.router import get_session as post_get_session
    from careerpath.src.taxonomy.router import get_session as taxonomy_get_session
    from careerpath.src.user.router import get_session as user_get_session

    async def override_get_session():
        yield session

    app.dependency_overrides[post_get_session] = override_get_session
    app.dependency_overrides[taxonomy_get_session] = override_get_session
    app.dependency_overrides[user_get_session] = override_get_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


# ============================================================
# 3. 공통 테스트 데이터 픽스처
# ============================================================
@pytest_asyncio.fixture
async def admin_user(session: AsyncSession) -> Any:
    """관리자 사용자 픽스처."""
    from careerpath.src.user.models import User

    user = User(external_id=ADMIN_SUBJECT, email="admin_test@careerpath.dev", username="admin", is_admin=True)
    session.add(user)
    await session.flush()
    return user


@pytest_asyncio.fixture
async def member_user(session: AsyncSession) -> Any:
    """일반 사용자 픽스처 (관리자 권한 없음)."""
    from careerpath.src.user.models import User

    user = User(external_id=MEMBER_SUBJECT, email="member_test@careerpath.dev", username="member", is_admin=False)
    session.add(user)
    await session.flush()
    return user


@pytest_asyncio.fixture
async def career_tree(session: AsyncSession, admin_user) -> dict[str, int]:
    """
    샘플 분류 트리 픽스처 (서비스를 통해 생성).

        Graduation
        ├── Government Jobs → Civil Services
        └── IT & Software → Software Development → Web Development → Frontend → React Developer

    Returns:
        이름 → 노드 PK
    """
    from careerpath.src.taxonomy.services.mutation_service import TaxonomyMutationService

    service = TaxonomyMutationService.from_session(session)
    ids: dict[str, int] = {}
    nodes = [
        ("Graduation", "qualification", None),
        ("Government Jobs", "category", "Graduation"),
        ("Civil Services", "sector", "Government Jobs"),
        ("IT & Software", "category", "Graduation"),
        ("Software Development", "sector", "IT & Software"),
        ("Web Development", "subSector", "Software Development"),
        ("Frontend", "branch", "Web Development"),
        ("React Developer", "role", "Frontend"),
    ]
    for name, node_type, parent in nodes:
        ids[name] = await service.create_node(ADMIN_SUBJECT, name, node_type, ids[parent] if parent else None)
    return ids
