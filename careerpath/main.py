"""
CareerPath API (FastAPI)

역할:
    - 모바일 앱/관리자 대시보드와 통신하는 HTTP API 계층
    - 도메인별 APIRouter(user, taxonomy, post)를 조립
    - 서비스/저장소 예외를 ErrorResponse 형식의 HTTP 응답으로 변환

구조:
    main.py → src/<domain>/router.py (Controller) → services (Service) → repositories (Repository)
"""

import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from careerpath.src.common.config import API_CONFIG
from careerpath.src.common.database.connection import AsyncDatabaseEngine
from careerpath.src.common.exceptions import InvalidRequest, Unauthenticated, Unauthorized
from careerpath.src.common.repositories.base_repository import DuplicateEntity, EntityNotFound, RepositoryError
from careerpath.src.common.schemas.base import ErrorResponse
from careerpath.src.post.router import router as post_router
from careerpath.src.taxonomy.router import router as taxonomy_router
from careerpath.src.user.router import router as user_router


# ============================================================
# Setup
# ============================================================
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

app = FastAPI(
    title=API_CONFIG["title"],
    description=API_CONFIG["description"],
    version=API_CONFIG["version"],
    docs_url="/docs",
    redoc_url="/redoc",
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=API_CONFIG["cors_origins"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(user_router)
app.include_router(taxonomy_router)
app.include_router(post_router)


# ============================================================
# Lifecycle
# ============================================================
@app.on_event("startup")
async def startup_event():
    logger.info(f"🚀 Starting {API_CONFIG['title']} v{API_CONFIG['version']}...")
    await AsyncDatabaseEngine().initialize()
    logger.info("✓ Database ready")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info("🛑 Shutting down API...")
    await AsyncDatabaseEngine().dispose()
    logger.info("✓ Database connections closed")


# ============================================================
# Health
# ============================================================
@app.get("/")
async def root():
    return {"status": "operational", "version": API_CONFIG["version"]}


# ============================================================
# Error Handler
# ============================================================
def _error_response(status_code: int, exc: Exception) -> JSONResponse:
    body = ErrorResponse(error=type(exc).__name__, message=str(exc), status_code=status_code)
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


@app.exception_handler(Unauthenticated)
async def unauthenticated_handler(request: Request, exc: Unauthenticated):
    return _error_response(401, exc)


@app.exception_handler(Unauthorized)
async def unauthorized_handler(request: Request, exc: Unauthorized):
    return _error_response(403, exc)


@app.exception_handler(InvalidRequest)
async def invalid_request_handler(request: Request, exc: InvalidRequest):
    return _error_response(400, exc)


@app.exception_handler(EntityNotFound)
async def not_found_handler(request: Request, exc: EntityNotFound):
    return _error_response(404, exc)


@app.exception_handler(DuplicateEntity)
async def duplicate_handler(request: Request, exc: DuplicateEntity):
    return _error_response(409, exc)


@app.exception_handler(RepositoryError)
async def repository_error_handler(request: Request, exc: RepositoryError):
    logger.error(f"Repository error on {request.method} {request.url.path}: {exc}")
    body = ErrorResponse(
        error="Internal Server Error",
        message="서버 내부 오류가 발생했습니다. 관리자에게 문의하세요.",
        status_code=500,
    )
    return JSONResponse(status_code=500, content=body.model_dump(mode="json"))


# ============================================================
# 서버 실행 가이드
# ============================================================
"""
[실행 방법]
1. 프로젝트 루트 디렉토리에서 실행:

   # 개발 모드
   python -m uvicorn careerpath.main:app --reload --port 8000 --reload-dir careerpath

   # 프로덕션 모드
   python -m uvicorn careerpath.main:app --host 0.0.0.0 --port 8000 --workers 4

[검증 명령어]
1. Health Check:
   curl http://localhost:8000/

2. 루트 분류 노드 조회:
   curl http://localhost:8000/api/filters/children

3. 분류 노드 생성 (관리자):
   curl -X POST http://localhost:8000/api/admin/filters \
     -H "Content-Type: application/json" -H "X-User-Subject: admin-subject" \
     -d '{"name": "Graduation", "type": "qualification"}'

4. 커리어 패스 게시글 피드:
   curl http://localhost:8000/api/posts/career-path/2

[브라우저 API 문서]
- Swagger UI: http://localhost:8000/docs
- ReDoc: http://localhost:8000/redoc
"""
