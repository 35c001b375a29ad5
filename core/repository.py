"""솔루션 저장소: 공통 인터페이스 + MongoDB / 메모리 구현."""
import copy
import functools
import logging
import re
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Callable, Dict, Iterable, List, Optional

from pymongo import ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from core.config import AUTHOR_NAME
from core.errors import StoreError
from core.slug import slugify, unique_slug
from schemas.solutionInfo import (
    Solution,
    SolutionSection,
    SolutionSubmission,
    normalize_language,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], str]


def utc_now() -> str:
    return datetime.now(timezone.utc).isoformat()


def section_id(solution_id: str, number: int) -> str:
    return f"{solution_id}-section-{number}"


def number_sections(solution_id: str, sections: Iterable) -> List[SolutionSection]:
    """섹션 id를 부여한다. 유효한 기존 id는 유지하고, 없거나 중복이면 새로 만든다."""
    items = list(sections)
    used = set()
    kept = []
    for item in items:
        sid = getattr(item, "id", None)
        if sid and sid not in used:
            used.add(sid)
            kept.append(sid)
        else:
            kept.append(None)

    result = []
    counter = 1
    for item, sid in zip(items, kept):
        if sid is None:
            while section_id(solution_id, counter) in used:
                counter += 1
            sid = section_id(solution_id, counter)
            used.add(sid)
        result.append(
            SolutionSection(
                id=sid,
                type=item.type,
                content=item.content,
                language=normalize_language(item.type, item.language),
            )
        )
    return result


def build_solution(solution_id: str, submission: SolutionSubmission, now: str) -> Solution:
    return Solution(
        id=solution_id,
        title=submission.title,
        problem_id=submission.problem_id,
        problem_statement_link=submission.problem_statement_link,
        sections=[
            SolutionSection(
                id=section_id(solution_id, index + 1),
                type=s.type,
                content=s.content,
                language=normalize_language(s.type, s.language),
            )
            for index, s in enumerate(submission.sections)
        ],
        tags=list(submission.tags),
        category=submission.category,
        author=AUTHOR_NAME,
        created_at=now,
        updated_at=now,
        is_approved=False,
    )


def _to_solution(doc: Optional[dict]) -> Optional[Solution]:
    if doc is None:
        return None
    doc = {k: v for k, v in doc.items() if k != "_id"}
    return Solution.model_validate(doc)


class SolutionRepository(ABC):

    @abstractmethod
    async def create(self, submission: SolutionSubmission) -> Solution:
        """slug를 부여하고 미승인 상태로 저장한다."""
        ...

    @abstractmethod
    async def get_approved(self) -> List[Solution]:
        """승인된 솔루션만, createdAt 최신순."""
        ...

    @abstractmethod
    async def get_all(self) -> List[Solution]:
        """승인 여부와 무관하게 전체 (관리자용)."""
        ...

    @abstractmethod
    async def get_by_id(self, solution_id: str) -> Optional[Solution]:
        ...

    @abstractmethod
    async def replace_sections(self, solution_id: str, sections: List[SolutionSection]) -> Optional[Solution]:
        """섹션 전체를 덮어쓴다. 없는 id면 None."""
        ...

    @abstractmethod
    async def toggle_approval(self, solution_id: str) -> Optional[Solution]:
        """isApproved를 뒤집는다. 없는 id면 None."""
        ...


# =================================================================
# 메모리 구현 (로컬 개발 / 테스트)
# =================================================================
class MemorySolutionRepository(SolutionRepository):
    def __init__(self, clock: Clock = utc_now):
        self._docs: Dict[str, dict] = {}
        self._clock = clock

    async def create(self, submission: SolutionSubmission) -> Solution:
        solution_id = unique_slug(submission.title, self._docs)
        solution = build_solution(solution_id, submission, self._clock())
        self._docs[solution_id] = solution.to_document()
        logger.info("Created solution %s (pending approval)", solution_id)
        return solution

    def _sorted(self, docs: Iterable[dict]) -> List[Solution]:
        ordered = sorted(docs, key=lambda d: d["createdAt"], reverse=True)
        return [_to_solution(copy.deepcopy(d)) for d in ordered]

    async def get_approved(self) -> List[Solution]:
        return self._sorted(d for d in self._docs.values() if d["isApproved"])

    async def get_all(self) -> List[Solution]:
        return self._sorted(self._docs.values())

    async def get_by_id(self, solution_id: str) -> Optional[Solution]:
        return _to_solution(copy.deepcopy(self._docs.get(solution_id)))

    async def replace_sections(self, solution_id: str, sections: List[SolutionSection]) -> Optional[Solution]:
        doc = self._docs.get(solution_id)
        if doc is None:
            logger.warning("replace_sections: solution %s not found", solution_id)
            return None
        doc["sections"] = [s.model_dump(exclude_none=True) for s in number_sections(solution_id, sections)]
        doc["updatedAt"] = self._clock()
        return _to_solution(copy.deepcopy(doc))

    async def toggle_approval(self, solution_id: str) -> Optional[Solution]:
        doc = self._docs.get(solution_id)
        if doc is None:
            logger.warning("toggle_approval: solution %s not found", solution_id)
            return None
        doc["isApproved"] = not doc["isApproved"]
        doc["updatedAt"] = self._clock()
        logger.info("Solution %s approval -> %s", solution_id, doc["isApproved"])
        return _to_solution(copy.deepcopy(doc))


# =================================================================
# MongoDB 구현 (motor)
# =================================================================
def _store_call(func):
    """드라이버 오류를 StoreError로 바꾼다."""

    @functools.wraps(func)
    async def wrapper(*args, **kwargs):
        try:
            return await func(*args, **kwargs)
        except StoreError:
            raise
        except PyMongoError as e:
            logger.exception("MongoDB operation %s failed", func.__name__)
            raise StoreError(f"{func.__name__} failed") from e

    return wrapper


class MongoSolutionRepository(SolutionRepository):
    projection = {"_id": 0}
    max_insert_attempts = 3

    def __init__(self, collection, clock: Clock = utc_now):
        self.collection = collection
        self._clock = clock

    @_store_call
    async def ensure_indexes(self) -> None:
        await self.collection.create_index("id", unique=True)

    async def _taken_ids(self, title: str) -> set:
        base = slugify(title)
        pattern = f"^{re.escape(base)}(-[0-9]+)?$"
        cursor = self.collection.find({"id": {"$regex": pattern}}, {"id": 1, "_id": 0})
        return {doc["id"] for doc in await cursor.to_list(length=None)}

    @_store_call
    async def create(self, submission: SolutionSubmission) -> Solution:
        for attempt in range(1, self.max_insert_attempts + 1):
            solution_id = unique_slug(submission.title, await self._taken_ids(submission.title))
            solution = build_solution(solution_id, submission, self._clock())
            try:
                # insert_one이 _id를 붙이므로 복사본을 넘긴다
                await self.collection.insert_one(solution.to_document())
            except DuplicateKeyError:
                logger.warning("Slug %s taken concurrently (attempt %d)", solution_id, attempt)
                continue
            logger.info("Created solution %s (pending approval)", solution_id)
            return solution
        raise StoreError(f"Could not insert solution '{submission.title}'")

    async def _find_sorted(self, query: dict) -> List[Solution]:
        cursor = self.collection.find(query, self.projection).sort("createdAt", -1)
        return [_to_solution(doc) for doc in await cursor.to_list(length=None)]

    @_store_call
    async def get_approved(self) -> List[Solution]:
        return await self._find_sorted({"isApproved": True})

    @_store_call
    async def get_all(self) -> List[Solution]:
        return await self._find_sorted({})

    @_store_call
    async def get_by_id(self, solution_id: str) -> Optional[Solution]:
        return _to_solution(await self.collection.find_one({"id": solution_id}, self.projection))

    @_store_call
    async def replace_sections(self, solution_id: str, sections: List[SolutionSection]) -> Optional[Solution]:
        doc = await self.collection.find_one_and_update(
            {"id": solution_id},
            {
                "$set": {
                    "sections": [s.model_dump(exclude_none=True) for s in number_sections(solution_id, sections)],
                    "updatedAt": self._clock(),
                }
            },
            projection=self.projection,
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            logger.warning("replace_sections: solution %s not found", solution_id)
        return _to_solution(doc)

    @_store_call
    async def toggle_approval(self, solution_id: str) -> Optional[Solution]:
        current = await self.collection.find_one({"id": solution_id}, self.projection)
        if current is None:
            logger.warning("toggle_approval: solution %s not found", solution_id)
            return None

        new_status = not current.get("isApproved", False)
        doc = await self.collection.find_one_and_update(
            {"id": solution_id},
            {"$set": {"isApproved": new_status, "updatedAt": self._clock()}},
            projection=self.projection,
            return_document=ReturnDocument.AFTER,
        )
        if doc is None:
            # 조회와 갱신 사이에 사라진 경우
            logger.error("Solution %s disappeared during approval toggle", solution_id)
            return None
        logger.info("Solution %s approval -> %s", solution_id, new_status)
        return _to_solution(doc)
