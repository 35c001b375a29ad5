"""의존성 연결: 설정에 따라 구현체를 고른다."""
from functools import lru_cache

from core import config
from core.assistant import GeminiAssistant, SolutionAssistant
from core.cache import ViewCache, view_cache
from core.database import get_solution_collection
from core.repository import MemorySolutionRepository, MongoSolutionRepository, SolutionRepository


@lru_cache(maxsize=1)
def get_solution_repository() -> SolutionRepository:
    if config.SOLUTION_STORE == "memory":
        return MemorySolutionRepository()
    return MongoSolutionRepository(get_solution_collection())


@lru_cache(maxsize=1)
def get_assistant() -> SolutionAssistant:
    return GeminiAssistant()


def get_view_cache() -> ViewCache:
    return view_cache
