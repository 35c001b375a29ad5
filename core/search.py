from typing import Iterable, List

from schemas.solutionInfo import Solution


def matches(solution: Solution, term: str) -> bool:
    term = term.lower()
    return (
        term in solution.title.lower()
        or term in solution.problem_id.lower()
        or term in solution.category.lower()
        or any(term in tag.lower() for tag in solution.tags)
    )


def filter_solutions(solutions: Iterable[Solution], term: str = "") -> List[Solution]:
    """제목 / 문제 ID / 카테고리 / 태그 부분 문자열 검색 (대소문자 무시)."""
    term = (term or "").strip()
    if not term:
        return list(solutions)
    return [s for s in solutions if matches(s, term)]
