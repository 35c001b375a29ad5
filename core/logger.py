"""로깅 설정."""
import logging
import sys

from core.config import LOG_LEVEL


def setup_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """루트 로거에 stdout 핸들러를 한 번만 붙인다."""
    root = logging.getLogger()
    if root.handlers:
        return root

    root.setLevel(level)
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    root.addHandler(handler)
    return root
