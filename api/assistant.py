from fastapi import APIRouter, Depends

from core.assistant import SolutionAssistant
from core.container import get_assistant
from schemas.assistant import SuggestRequest, SummarizeRequest, SummaryResponse, TagSuggestion

router = APIRouter(prefix="/api/ai", tags=["AI"])


@router.post("/summarize", response_model=SummaryResponse)
async def summarize_text(
    request: SummarizeRequest,
    assistant: SolutionAssistant = Depends(get_assistant),
):
    summary = await assistant.summarize(request.text)
    return {"summary": summary}


@router.post("/suggest", response_model=TagSuggestion)
async def suggest_tags(
    request: SuggestRequest,
    assistant: SolutionAssistant = Depends(get_assistant),
):
    """초안의 제목/문제/본문으로 태그와 카테고리를 추천받는다."""
    parts = []
    if request.title:
        parts.append(f"Title: {request.title}")
    if request.problem_id:
        parts.append(f"CSES Problem: {request.problem_id}")
    if request.content.strip():
        parts.append(request.content)
    # 본문이 비어 있으면 assistant가 AIServiceError(400)를 던진다
    text = "\n\n".join(parts) if request.content.strip() else ""
    return await assistant.suggest_tags_and_categories(text)
