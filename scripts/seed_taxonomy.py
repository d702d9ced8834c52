"""
샘플 분류 트리 시드 스크립트

관리자 계정 1개와 샘플 커리어 패스 트리를 삽입한다.
이미 존재하는 사용자/노드는 건너뛰므로 여러 번 실행해도 안전하다.

    Graduation (qualification)
    ├── Government Jobs (category) → Civil Services (sector) → UPSC (subSector)
    │       → Administrative (branch) → IAS Officer (role)
    └── IT & Software (category) → Software Development (sector) → Web Development (subSector)
            → Frontend (branch) → React Developer (role)

Usage:
    python scripts/seed_taxonomy.py
"""

import asyncio
import logging
import os
import sys


current_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(current_dir)
sys.path.append(root_dir)

from careerpath.src.common.database.connection import AsyncDatabaseEngine  # noqa: E402
from careerpath.src.taxonomy.repositories import FilterOptionRepository  # noqa: E402
from careerpath.src.taxonomy.services.mutation_service import TaxonomyMutationService  # noqa: E402
from careerpath.src.user.repositories import UserRepository  # noqa: E402
from careerpath.src.user.services import UserService  # noqa: E402


logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger("SEED")

ADMIN = {"external_id": "seed-admin", "email": "admin@careerpath.dev", "username": "admin", "is_admin": True}

# (이름, 타입, 상위 노드 이름, 설명 필드). 상위 노드가 먼저 나와야 한다
SAMPLE_NODES = [
    ("Graduation", "qualification", None, {"description": "학사 학위 취득 후 진로"}),
    ("Government Jobs", "category", "Graduation", {}),
    ("Civil Services", "sector", "Government Jobs", {}),
    ("UPSC", "subSector", "Civil Services", {}),
    ("Administrative", "branch", "UPSC", {}),
    ("IAS Officer", "role", "Administrative", {"avg_salary": "10-20 LPA", "relevant_exams": "UPSC CSE"}),
    ("IT & Software", "category", "Graduation", {}),
    ("Software Development", "sector", "IT & Software", {}),
    ("Web Development", "subSector", "Software Development", {}),
    ("Frontend", "branch", "Web Development", {}),
    ("React Developer", "role", "Frontend", {"avg_salary": "6-10 LPA", "requirements": "JavaScript, React"}),
]


async def _seed_nodes(service: TaxonomyMutationService, repo: FilterOptionRepository) -> None:
    ids: dict[str, int] = {}
    for name, node_type, parent_name, fields in SAMPLE_NODES:
        parent_id = ids[parent_name] if parent_name else None

        existing = await repo.find_sibling_by_name(parent_id, name)
        if existing:
            logger.info(f"[SKIP] {node_type} '{name}' already exists (id={existing.id})")
            ids[name] = existing.id
            continue

        ids[name] = await service.create_node(ADMIN["external_id"], name, node_type, parent_id, **fields)
        logger.info(f"[INSERT] {node_type} '{name}' (id={ids[name]})")


async def seed_taxonomy() -> None:
    db = AsyncDatabaseEngine()
    await db.initialize()

    async with db.get_session() as session:
        if not await UserRepository(session).get_by_external_id(ADMIN["external_id"]):
            await UserService.from_session(session).create_user(**ADMIN)
            logger.info(f"[INSERT] Admin user {ADMIN['email']}")

        service = TaxonomyMutationService.from_session(session)
        await _seed_nodes(service, service.repository)

    logger.info("Taxonomy seeding completed.")
    await db.dispose()


if __name__ == "__main__":
    asyncio.run(seed_taxonomy())
