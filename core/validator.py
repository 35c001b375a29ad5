from typing import Any, Dict, List

from pydantic import ValidationError

from core.errors import SubmissionValidationError
from schemas.solutionInfo import SECTION_TYPES, SolutionSubmission

# 필드별 사용자용 메시지
FIELD_MESSAGES = {
    "title": "Title must be at least 3 characters long.",
    "problemId": "Problem ID/Name is required.",
    "problemStatementLink": "Invalid URL for problem statement link.",
    "sections": "At least one section is required.",
    "tags": "Tags must be a comma-separated string.",
    "category": "Category is required.",
    "type": f"Section type must be one of: {', '.join(SECTION_TYPES)}.",
    "content": "Section content cannot be empty.",
    "language": "Language must be a string.",
}


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "body"


def _message_for(loc: tuple, default: str) -> str:
    keys = [part for part in loc if isinstance(part, str)]
    if not keys:
        return "Submission must be a JSON object."
    return FIELD_MESSAGES.get(keys[-1], default)


def collect_errors(exc: ValidationError) -> List[Dict[str, str]]:
    errors = []
    seen = set()
    for err in exc.errors():
        field = _field_name(err["loc"])
        if field in seen:
            continue
        seen.add(field)
        errors.append({"field": field, "message": _message_for(err["loc"], err["msg"])})
    return errors


def validate_submission(payload: Any) -> SolutionSubmission:
    """제출 데이터를 검증한다. 실패 시 필드별 오류를 담은 예외를 던진다."""
    try:
        return SolutionSubmission.model_validate(payload)
    except ValidationError as e:
        raise SubmissionValidationError(collect_errors(e))
