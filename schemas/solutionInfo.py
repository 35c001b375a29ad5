from pydantic import AnyUrl, BaseModel, ConfigDict, Field, TypeAdapter, ValidationError, field_validator, model_validator
from typing import List, Literal, Optional

SectionType = Literal["heading", "paragraph", "code", "equation", "hint"]
SECTION_TYPES = ("heading", "paragraph", "code", "equation", "hint")
DEFAULT_CODE_LANGUAGE = "plaintext"

_url_adapter = TypeAdapter(AnyUrl)


def normalize_language(section_type: str, language: Optional[str]) -> Optional[str]:
    # code 섹션만 language를 가진다
    if section_type != "code":
        return None
    return language or DEFAULT_CODE_LANGUAGE


# 1. 입력용 섹션 (id 없음, 서버가 부여)
class SectionInput(BaseModel):
    type: SectionType = Field(..., description="섹션 종류")
    content: str = Field(..., min_length=1, description="섹션 본문")
    language: Optional[str] = Field(None, description="code 섹션의 언어")

    @field_validator("content")
    @classmethod
    def content_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Section content cannot be empty.")
        return v

    @model_validator(mode="after")
    def apply_language_rule(self):
        self.language = normalize_language(self.type, self.language)
        return self


# 2. 제출 스키마
class SolutionSubmission(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str = Field(..., min_length=3, description="블로그 제목")
    problem_id: str = Field(..., alias="problemId", min_length=1, description="CSES 문제 ID 또는 이름")
    problem_statement_link: Optional[str] = Field(None, alias="problemStatementLink", description="문제 링크 (선택)")
    sections: List[SectionInput] = Field(..., min_length=1, description="순서 있는 섹션 목록")
    tags: List[str] = Field(default_factory=list, description="쉼표로 구분된 태그")
    category: str = Field(..., min_length=1, description="카테고리")

    @field_validator("title", "problem_id", "category", mode="before")
    @classmethod
    def strip_text(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("problem_statement_link", mode="before")
    @classmethod
    def check_link(cls, v):
        if v is None:
            return None
        if not isinstance(v, str):
            raise ValueError("Invalid URL for problem statement link.")
        v = v.strip()
        if v == "":
            return None
        # 형식만 검증하고 원래 문자열을 그대로 저장
        try:
            _url_adapter.validate_python(v)
        except ValidationError:
            raise ValueError("Invalid URL for problem statement link.")
        return v

    @field_validator("tags", mode="before")
    @classmethod
    def split_tags(cls, v):
        if v is None:
            return []
        if isinstance(v, str):
            return [tag.strip() for tag in v.split(",") if tag.strip()]
        raise ValueError("Tags must be a comma-separated string.")


# 3. 저장된 섹션 / 솔루션
class SolutionSection(BaseModel):
    id: str
    type: SectionType
    content: str
    language: Optional[str] = None


class Solution(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., description="제목에서 만든 slug")
    title: str
    problem_id: str = Field(..., alias="problemId")
    problem_statement_link: Optional[str] = Field(None, alias="problemStatementLink")
    sections: List[SolutionSection]
    tags: List[str] = Field(default_factory=list)
    category: str
    author: str
    created_at: str = Field(..., alias="createdAt")
    updated_at: str = Field(..., alias="updatedAt")
    is_approved: bool = Field(False, alias="isApproved")

    def to_document(self) -> dict:
        """DB/응답용 평범한 dict (camelCase, 빈 값 제외)."""
        return self.model_dump(by_alias=True, exclude_none=True)


# 4. 관리자 편집 요청
class SectionContentUpdate(BaseModel):
    content: str = Field(..., description="새 섹션 본문")


class SectionReplace(BaseModel):
    id: Optional[str] = Field(None, description="기존 섹션 id (없으면 새로 부여)")
    type: SectionType
    content: str = Field(..., min_length=1)
    language: Optional[str] = None
