import copy
import logging
import threading
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

HOME_VIEW = "/"
ADMIN_VIEW = "/admin"


def detail_view(solution_id: str) -> str:
    return f"/problems/{solution_id}"


class ViewCache:
    """
    경로별 응답 payload를 메모리에 보관한다. 변경이 생기면 해당 경로를 무효화.
    조회 전에 generation을 읽어 두고 save에 넘기면, 조회 도중 무효화가 있었을 때 저장하지 않는다.
    """

    def __init__(self):
        self._views: Dict[str, Any] = {}
        self._generation = 0
        self._lock = threading.Lock()

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def load(self, key: str) -> Optional[Any]:
        with self._lock:
            value = self._views.get(key)
        return copy.deepcopy(value) if value is not None else None

    def save(self, key: str, value: Any, generation: int) -> bool:
        with self._lock:
            if generation != self._generation:
                logger.debug("Skipped stale view %s", key)
                return False
            self._views[key] = copy.deepcopy(value)
        return True

    def invalidate(self, *keys: str) -> None:
        with self._lock:
            self._generation += 1
            for key in keys:
                self._views.pop(key, None)
        logger.debug("Invalidated views: %s", ", ".join(keys))

    def invalidate_solution(self, solution_id: str) -> None:
        # 목록, 관리자 목록, 상세 페이지
        self.invalidate(HOME_VIEW, ADMIN_VIEW, detail_view(solution_id))


view_cache = ViewCache()
