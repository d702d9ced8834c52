import os
from pathlib import Path
from typing import Any

from dotenv import load_dotenv


# =============================================================================
# 1. Environment Loading (최상위 .env 자동 탐색)
# =============================================================================
def get_project_root() -> Path:
    """
    현재 파일의 위치를 기준으로 .env 파일이 있는 프로젝트 루트를 찾습니다.
    확실한 탐색을 위해 상위로 이동하며 .env나 .git을 찾습니다.
    """
    current_path = Path(__file__).resolve()
    for parent in current_path.parents:
        if (parent / ".env").exists() or (parent / ".git").exists():
            return parent
    return current_path.parents[3]  # Fallback


PROJECT_ROOT = get_project_root()
ENV_PATH = PROJECT_ROOT / ".env"

if ENV_PATH.exists():
    load_dotenv(ENV_PATH)
else:
    load_dotenv()  # 시스템 환경변수 사용


# =============================================================================
# 2. Helper Functions
# =============================================================================
def get_env(key: str, default: Any = None, cast_to: type = str) -> Any:
    """환경변수를 가져오고 원하는 타입으로 안전하게 변환합니다."""
    value = os.getenv(key)
    if value is None:
        return default

    if cast_to is bool:
        return value.lower() in ("true", "1", "yes", "on")
    if cast_to is list:
        return [x.strip() for x in value.split(",") if x.strip()]
    try:
        return cast_to(value)
    except (ValueError, TypeError):
        return default


# =============================================================================
# 3. Database Configuration
# =============================================================================
DB_CONFIG = {
    "host": get_env("PG_HOST", get_env("DB_HOST", "localhost")),
    "port": get_env("PG_PORT", get_env("DB_PORT", "5432")),
    "user": get_env("PG_USER", get_env("DB_USER", "postgres")),
    "password": get_env("PG_PASSWORD", get_env("DB_PASSWORD", "")),
    "database": get_env("PG_DATABASE", get_env("DB_NAME", "careerpath")),
}


def build_database_url() -> str:
    """
    비동기 연결 URL을 생성합니다.

    DATABASE_URL 환경변수가 있으면 그대로 사용합니다 (e.g., 테스트용 sqlite+aiosqlite).
    """
    override = get_env("DATABASE_URL")
    if override:
        return override

    user = DB_CONFIG["user"]
    password = DB_CONFIG["password"]
    host = DB_CONFIG["host"]
    port = DB_CONFIG["port"]
    database = DB_CONFIG["database"]
    return f"postgresql+asyncpg://{user}:{password}@{host}:{port}/{database}"


# =============================================================================
# 4. API Configuration
# =============================================================================
API_CONFIG = {
    "title": "CareerPath API",
    "description": "Career-path taxonomy and career post API",
    "version": "1.0.0",
    "cors_origins": get_env("CORS_ORIGINS", ["*"], list),
}

# =============================================================================
# 5. Taxonomy Configuration
# =============================================================================
TAXONOMY_CONFIG = {
    # 재귀 탐색(하위 노드 비활성화, 하위 노드 해석) 시 허용하는 최대 깊이.
    # 정상 트리는 6단계를 넘지 않는다.
    "max_depth": get_env("TAXONOMY_MAX_DEPTH", 32, int),
    # 커리어 패스별 게시글 피드 최대 건수
    "feed_limit": get_env("TAXONOMY_FEED_LIMIT", 20, int),
    # 게시글 하나에 연결할 수 있는 필터 노드 최대 개수
    "max_post_filters": get_env("TAXONOMY_MAX_POST_FILTERS", 10, int),
}
