# main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.admin import auth_router as admin_auth_router
from api.admin import login_router as admin_login_router
from api.admin import router as admin_router
from api.assistant import router as assistant_router
from api.solution import router as solution_router
from core.config import CORS_ORIGINS
from core.container import get_solution_repository
from core.errors import AIServiceError, AuthError, ConfigError, StoreError, SubmissionValidationError
from core.logger import setup_logging
from core.repository import MongoSolutionRepository

setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """시작 시 MongoDB 인덱스(id unique) 확인."""
    try:
        repo = get_solution_repository()
        if isinstance(repo, MongoSolutionRepository):
            await repo.ensure_indexes()
    except StoreError as e:
        logger.error("Solution store unavailable at startup: %s", e)
    yield


app = FastAPI(
    title="CSES Solver Blogs",
    description="CSES 풀이 블로그: 제출, 관리자 승인, 목록/검색, AI 요약",
    lifespan=lifespan,
)

#라우터 등록
app.include_router(solution_router)
app.include_router(assistant_router)
app.include_router(admin_auth_router)
# 로그인 페이지가 게이트된 /admin 라우터보다 먼저 매칭되어야 함
app.include_router(admin_login_router)
app.include_router(admin_router)

#프론트엔드 통신
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


# =================================================================
# 예외 -> 응답 변환 (내부 정보는 클라이언트에 노출하지 않음)
# =================================================================
@app.exception_handler(SubmissionValidationError)
async def validation_error_handler(request: Request, exc: SubmissionValidationError):
    logger.info("Rejected submission: %s", exc)
    return JSONResponse(status_code=400, content={"message": str(exc), "errors": exc.errors})


@app.exception_handler(AuthError)
async def auth_error_handler(request: Request, exc: AuthError):
    logger.warning("Failed admin login attempt")
    return JSONResponse(status_code=401, content={"message": "Invalid credentials"})


@app.exception_handler(ConfigError)
async def config_error_handler(request: Request, exc: ConfigError):
    logger.error("Configuration error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=500, content={"message": "Server configuration error"})


@app.exception_handler(StoreError)
async def store_error_handler(request: Request, exc: StoreError):
    logger.error("Store error on %s: %s", request.url.path, exc, exc_info=exc)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


@app.exception_handler(AIServiceError)
async def ai_error_handler(request: Request, exc: AIServiceError):
    status_code = 502 if exc.upstream else 400
    return JSONResponse(status_code=status_code, content={"error": str(exc)})
