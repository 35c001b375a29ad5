import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response

from core import config
from core.auth_utils import authenticate_admin
from core.cache import ADMIN_VIEW, ViewCache
from core.container import get_solution_repository, get_view_cache
from core.repository import SolutionRepository
from core.security import get_current_admin
from schemas.admin import LoginSchema
from schemas.solutionInfo import SectionContentUpdate, SectionReplace

logger = logging.getLogger(__name__)

# 로그인/로그아웃과 로그인 페이지는 게이트 밖, 나머지 /admin 하위는 전부 게이트 안
auth_router = APIRouter(prefix="/api/admin", tags=["Admin Auth"])
login_router = APIRouter(prefix="/admin", tags=["Admin"])
router = APIRouter(prefix="/admin", tags=["Admin"], dependencies=[Depends(get_current_admin)])


# =================================================================
# 1. 로그인 / 로그아웃
# =================================================================
@auth_router.post("/login")
async def login(body: LoginSchema, response: Response):
    # 실패 시 AuthError -> 401, 설정 누락 시 ConfigError -> 500
    token = authenticate_admin(body.username, body.password)

    response.set_cookie(
        key=config.ADMIN_COOKIE_NAME,
        value=token,
        httponly=True,
        max_age=config.ACCESS_TOKEN_EXPIRE_MINUTES * 60,
        path=config.ADMIN_COOKIE_PATH,
        samesite="lax",
    )
    logger.info("Admin logged in")
    return {"message": "Login successful", "token": token}


@auth_router.post("/logout")
async def logout(response: Response):
    response.delete_cookie(key=config.ADMIN_COOKIE_NAME, path=config.ADMIN_COOKIE_PATH)
    return {"message": "Logged out successfully"}


@login_router.get("/login")
async def login_page():
    return {
        "message": "Admin login required",
        "loginEndpoint": f"{auth_router.prefix}/login",
    }


# =================================================================
# 2. 대시보드: 전체 목록 / 상세
# =================================================================
@router.get("")
async def list_all_solutions(
    repo: SolutionRepository = Depends(get_solution_repository),
    cache: ViewCache = Depends(get_view_cache),
):
    documents = cache.load(ADMIN_VIEW)
    if documents is None:
        generation = cache.generation
        documents = [s.to_document() for s in await repo.get_all()]
        cache.save(ADMIN_VIEW, documents, generation)
    return documents


@router.get("/solutions/{solution_id}")
async def get_solution_for_admin(
    solution_id: str,
    repo: SolutionRepository = Depends(get_solution_repository),
):
    solution = await repo.get_by_id(solution_id)
    if not solution:
        raise HTTPException(status_code=404, detail="Solution not found.")
    return solution.to_document()


# =================================================================
# 3. 승인 토글
# =================================================================
@router.post("/solutions/{solution_id}/approval")
async def toggle_approval(
    solution_id: str,
    repo: SolutionRepository = Depends(get_solution_repository),
    cache: ViewCache = Depends(get_view_cache),
):
    solution = await repo.toggle_approval(solution_id)
    if not solution:
        raise HTTPException(status_code=404, detail="Solution not found.")

    cache.invalidate_solution(solution_id)
    state = "approved" if solution.is_approved else "unapproved"
    return {
        "success": True,
        "message": f"Solution {state} successfully.",
        "newStatus": solution.is_approved,
        "solution": solution.to_document(),
    }


# =================================================================
# 4. 섹션 편집
# =================================================================
@router.patch("/solutions/{solution_id}/sections/{section_id}")
async def update_section(
    solution_id: str,
    section_id: str,
    body: SectionContentUpdate,
    repo: SolutionRepository = Depends(get_solution_repository),
    cache: ViewCache = Depends(get_view_cache),
):
    if not body.content.strip():
        raise HTTPException(status_code=400, detail="Section content cannot be empty.")

    solution = await repo.get_by_id(solution_id)
    if not solution:
        raise HTTPException(status_code=404, detail="Solution not found.")
    if not any(s.id == section_id for s in solution.sections):
        raise HTTPException(status_code=404, detail="Section not found.")

    sections = [
        s.model_copy(update={"content": body.content}) if s.id == section_id else s
        for s in solution.sections
    ]
    updated = await repo.replace_sections(solution_id, sections)
    if not updated:
        raise HTTPException(status_code=404, detail="Solution not found.")

    cache.invalidate_solution(solution_id)
    return updated.to_document()


@router.put("/solutions/{solution_id}/sections")
async def replace_sections(
    solution_id: str,
    body: List[SectionReplace],
    repo: SolutionRepository = Depends(get_solution_repository),
    cache: ViewCache = Depends(get_view_cache),
):
    if not body:
        raise HTTPException(status_code=400, detail="At least one section is required.")
    if any(not s.content.strip() for s in body):
        raise HTTPException(status_code=400, detail="Section content cannot be empty.")

    updated = await repo.replace_sections(solution_id, body)
    if not updated:
        raise HTTPException(status_code=404, detail="Solution not found.")

    cache.invalidate_solution(solution_id)
    return updated.to_document()


# =================================================================
# 5. 그 밖의 /admin 경로 (세션 없으면 게이트가 먼저 로그인으로 보냄)
# =================================================================
@router.api_route("/{path:path}", methods=["GET", "POST", "PUT", "PATCH", "DELETE"], include_in_schema=False)
async def unknown_admin_path(path: str):
    raise HTTPException(status_code=404, detail="Not found")
