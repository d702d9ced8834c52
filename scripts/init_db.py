"""
데이터베이스 테이블 초기화 스크립트 (개발 환경용)

운영 환경 스키마는 Alembic 마이그레이션(alembic upgrade head)으로 관리한다.

Usage:
    python scripts/init_db.py [--reset]
"""

import argparse
import asyncio
import logging
import os
import sys


# [1] 프로젝트 루트 경로 설정 (careerpath 패키지 인식을 위해 필수)
current_dir = os.path.dirname(os.path.abspath(__file__))
root_dir = os.path.dirname(current_dir)
sys.path.append(root_dir)

from careerpath.src.common.database.connection import AsyncDatabaseEngine, register_models  # noqa: E402
from careerpath.src.common.models.base import Base  # noqa: E402


# 로깅 설정
logging.basicConfig(level=logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")
logger = logging.getLogger("DB_INIT")


async def init_db(reset: bool = False):
    """
    데이터베이스 테이블 초기화 함수
    Args:
        reset (bool): True일 경우 기존 테이블을 모두 삭제(Drop)하고 재생성
    """
    logger.info("🚀 Starting Database Initialization...")

    # [2] 모델 등록 (Base.metadata에 users, filter_options, posts 테이블 등록)
    register_models()

    db = AsyncDatabaseEngine()

    try:
        async with db.engine.begin() as conn:
            # [3] 리셋 옵션 처리 (주의: 데이터가 모두 날아감)
            if reset:
                logger.warning("⚠️  '--reset' flag detected. Dropping all existing tables...")
                await conn.run_sync(Base.metadata.drop_all)
                logger.info("🗑️  All tables dropped.")

            logger.info("🛠️  Creating tables...")
            await conn.run_sync(Base.metadata.create_all)

            logger.info(f"📋 Registered Tables: {list(Base.metadata.tables.keys())}")

        logger.info("✅ Database initialization completed successfully!")

    except Exception as e:
        logger.error(f"❌ Database initialization failed: {e}")
        raise
    finally:
        await db.dispose()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Initialize the database tables.")
    parser.add_argument(
        "--reset", action="store_true", help="CAUTION: Drop all tables before creation. Data will be lost."
    )
    args = parser.parse_args()

    try:
        asyncio.run(init_db(reset=args.reset))
    except KeyboardInterrupt:
        logger.info("🛑 Initialization stopped by user.")
