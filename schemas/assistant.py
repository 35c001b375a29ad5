from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional


class SummarizeRequest(BaseModel):
    text: str = Field(..., description="요약할 본문")


class SummaryResponse(BaseModel):
    summary: str


class SuggestRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = Field(None, description="초안 제목")
    problem_id: Optional[str] = Field(None, alias="problemId", description="CSES 문제 ID")
    content: str = Field(..., description="섹션 본문을 이어붙인 텍스트")


class TagSuggestion(BaseModel):
    tags: List[str] = Field(default_factory=list, description="추천 태그")
    categories: List[str] = Field(default_factory=list, description="추천 카테고리")
