"""AI 도우미: 섹션 요약, 태그/카테고리 추천 (Gemini)."""
import asyncio
import json
import logging
from abc import ABC, abstractmethod
from typing import List, Optional

import google.generativeai as genai
from pydantic import ValidationError

from core.config import GEMINI_API_KEY, GEMINI_MODEL
from core.errors import AIServiceError
from schemas.assistant import TagSuggestion

logger = logging.getLogger(__name__)

SYSTEM_INSTRUCTION = (
    "You are an expert competitive programmer who writes and categorizes "
    "solutions for CSES problems."
)

SUMMARY_PROMPT = "Summarize the following solution section in a concise manner:\n\n{text}"

SUGGEST_PROMPT = """
Given the content of a solution, suggest relevant tags and categories that would help users find the solution.
Return only a JSON object without a Markdown code block:
{{"tags": ["tag1", "tag2"], "categories": ["category1"]}}

Solution Content:
{text}
"""


class SolutionAssistant(ABC):

    @abstractmethod
    async def summarize(self, text: str) -> str:
        ...

    @abstractmethod
    async def suggest_tags_and_categories(self, text: str) -> TagSuggestion:
        ...


def _clean_list(values: List[str]) -> List[str]:
    result = []
    for value in values:
        value = str(value).strip()
        if value and value.lower() not in (v.lower() for v in result):
            result.append(value)
    return result


def parse_suggestion(raw_text: str) -> TagSuggestion:
    cleaned_text = raw_text.replace("```json", "").replace("```", "").strip()
    try:
        data = json.loads(cleaned_text)
        suggestion = TagSuggestion.model_validate(data)
    except (json.JSONDecodeError, ValidationError) as e:
        logger.error("Could not parse tag suggestion: %s\n원본: %s", e, raw_text)
        raise AIServiceError("Failed to suggest tags and categories with AI.") from e
    return TagSuggestion(
        tags=_clean_list(suggestion.tags),
        categories=_clean_list(suggestion.categories),
    )


class GeminiAssistant(SolutionAssistant):
    def __init__(self, api_key: Optional[str] = GEMINI_API_KEY, model_name: str = GEMINI_MODEL, model=None):
        self.api_key = api_key
        self.model_name = model_name
        self._model = model

    def _get_model(self):
        if self._model is None:
            # 1. API 키 확인
            if not self.api_key:
                logger.error("GEMINI_API_KEY가 설정되지 않았습니다.")
                raise AIServiceError("AI service is not configured.")
            genai.configure(api_key=self.api_key)
            self._model = genai.GenerativeModel(
                model_name=self.model_name,
                system_instruction=SYSTEM_INSTRUCTION,
            )
        return self._model

    async def _generate(self, prompt: str, **kwargs) -> str:
        model = self._get_model()
        try:
            # SDK 호출이 동기라서 스레드로 넘긴다
            response = await asyncio.to_thread(model.generate_content, prompt, **kwargs)
            return response.text
        except Exception as e:
            logger.exception("Gemini request failed")
            raise AIServiceError("AI service request failed.") from e

    async def summarize(self, text: str) -> str:
        if not text or not text.strip():
            raise AIServiceError("Cannot summarize empty text.", upstream=False)
        try:
            summary = await self._generate(SUMMARY_PROMPT.format(text=text))
        except AIServiceError as e:
            raise AIServiceError("Failed to summarize text with AI.") from e
        summary = summary.strip()
        if not summary:
            raise AIServiceError("Failed to summarize text with AI.")
        return summary

    async def suggest_tags_and_categories(self, text: str) -> TagSuggestion:
        if not text or not text.strip():
            raise AIServiceError("Cannot suggest tags for empty content.", upstream=False)
        try:
            raw = await self._generate(
                SUGGEST_PROMPT.format(text=text),
                generation_config={"response_mime_type": "application/json"},
            )
        except AIServiceError as e:
            raise AIServiceError("Failed to suggest tags and categories with AI.") from e
        return parse_suggestion(raw)
