import logging
from typing import Any, List

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from fastapi.responses import RedirectResponse

from core.assistant import SolutionAssistant
from core.cache import HOME_VIEW, ViewCache, detail_view
from core.container import get_assistant, get_solution_repository, get_view_cache
from core.repository import SolutionRepository
from core.search import filter_solutions
from core.validator import validate_submission
from schemas.assistant import SummaryResponse
from schemas.solutionInfo import Solution

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Solution"])

PENDING_TITLE = "Solution Awaiting Approval"
PENDING_DESCRIPTION = "This solution is currently under review and not yet publicly visible."
SUMMARIZABLE_TYPES = ("paragraph", "hint")


def pending_placeholder(solution: Solution) -> dict:
    # 승인 전에는 본문(sections) 대신 안내 문구만 보여준다
    return {
        "id": solution.id,
        "title": solution.title,
        "problemId": solution.problem_id,
        "isApproved": False,
        "message": PENDING_TITLE,
        "description": PENDING_DESCRIPTION,
    }


# =================================================================
# 1. 승인된 솔루션 목록 + 검색
# =================================================================
@router.get("/")
async def list_solutions(
    q: str = Query("", description="제목 / 문제 ID / 카테고리 / 태그 검색어"),
    repo: SolutionRepository = Depends(get_solution_repository),
    cache: ViewCache = Depends(get_view_cache),
) -> List[dict]:
    solutions = cache.load(HOME_VIEW)
    if solutions is None:
        generation = cache.generation
        solutions = await repo.get_approved()
        cache.save(HOME_VIEW, solutions, generation)
    return [s.to_document() for s in filter_solutions(solutions, q)]


# =================================================================
# 2. 상세 조회 (승인 여부와 무관하게 id로 조회)
# =================================================================
@router.get("/problems/{solution_id}")
async def get_solution(
    solution_id: str,
    repo: SolutionRepository = Depends(get_solution_repository),
    cache: ViewCache = Depends(get_view_cache),
):
    view = cache.load(detail_view(solution_id))
    if view is not None:
        return view

    generation = cache.generation
    solution = await repo.get_by_id(solution_id)
    if not solution:
        raise HTTPException(status_code=404, detail="Solution not found.")

    view = solution.to_document() if solution.is_approved else pending_placeholder(solution)
    cache.save(detail_view(solution_id), view, generation)
    return view


# =================================================================
# 3. 제출
# =================================================================
@router.post("/submit")
async def submit_solution(
    payload: Any = Body(..., description="제출 데이터 (title, problemId, sections, tags, category)"),
    repo: SolutionRepository = Depends(get_solution_repository),
    cache: ViewCache = Depends(get_view_cache),
):
    # 검증 실패 시 SubmissionValidationError -> 400 (main.py 핸들러)
    submission = validate_submission(payload)
    solution = await repo.create(submission)
    cache.invalidate_solution(solution.id)

    return RedirectResponse(url=f"/problems/{solution.id}", status_code=303)


# =================================================================
# 4. 섹션 AI 요약 (paragraph / hint)
# =================================================================
@router.post("/problems/{solution_id}/sections/{section_id}/summary", response_model=SummaryResponse)
async def summarize_section(
    solution_id: str,
    section_id: str,
    repo: SolutionRepository = Depends(get_solution_repository),
    assistant: SolutionAssistant = Depends(get_assistant),
):
    solution = await repo.get_by_id(solution_id)
    if not solution:
        raise HTTPException(status_code=404, detail="Solution not found.")
    if not solution.is_approved:
        raise HTTPException(status_code=403, detail=PENDING_DESCRIPTION)

    section = next((s for s in solution.sections if s.id == section_id), None)
    if section is None:
        raise HTTPException(status_code=404, detail="Section not found.")
    if section.type not in SUMMARIZABLE_TYPES:
        raise HTTPException(status_code=400, detail="Only paragraph and hint sections can be summarized.")

    summary = await assistant.summarize(section.content)
    return {"summary": summary}
