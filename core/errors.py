from typing import Dict, List


class BlogError(Exception):
    """모든 도메인 예외의 부모."""


class SubmissionValidationError(BlogError):
    # 필드 단위 오류 목록: [{"field": "title", "message": "..."}]
    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("Validation failed: " + ", ".join(e["message"] for e in errors))


class AuthError(BlogError):
    pass


class StoreError(BlogError):
    pass


class SlugGenerationError(StoreError):
    pass


class AIServiceError(BlogError):
    def __init__(self, message: str, upstream: bool = True):
        self.upstream = upstream
        super().__init__(message)


class ConfigError(BlogError):
    """관리자 계정 / JWT 비밀키 등 필수 설정 누락."""
