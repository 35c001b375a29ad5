import re
from typing import Container

from core.errors import SlugGenerationError

MAX_SLUG_ATTEMPTS = 1000
FALLBACK_SLUG = "solution"


def slugify(title: str) -> str:
    slug = re.sub(r"[^a-z0-9]+", "-", title.lower()).strip("-")
    return slug or FALLBACK_SLUG


def unique_slug(title: str, taken: Container[str]) -> str:
    """제목에서 slug를 만들고, 이미 있으면 -1, -2 ... 를 붙인다."""
    base = slugify(title)
    if base not in taken:
        return base

    for counter in range(1, MAX_SLUG_ATTEMPTS + 1):
        candidate = f"{base}-{counter}"
        if candidate not in taken:
            return candidate

    raise SlugGenerationError(
        f"Could not generate a unique id for '{base}' after {MAX_SLUG_ATTEMPTS} attempts"
    )
