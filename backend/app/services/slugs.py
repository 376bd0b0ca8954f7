import re
from collections.abc import Callable, Iterator

_DISALLOWED = re.compile(r"[^a-z0-9-]+")
_REPEATED_HYPHENS = re.compile(r"-+")

DEFAULT_FALLBACK = "project"


def canonicalize(name: str) -> str:
    """Lower-case ``name`` and reduce it to ``[a-z0-9]`` runs joined by single hyphens.

    Returns an empty string when nothing survives; callers decide on a fallback.
    """
    value = _DISALLOWED.sub("-", name.lower())
    value = _REPEATED_HYPHENS.sub("-", value)
    return value.strip("-")


def slug_candidates(base: str) -> Iterator[str]:
    yield base
    suffix = 1
    while True:
        yield f"{base}-{suffix}"
        suffix += 1


def generate_slug(
    name: str,
    is_taken: Callable[[str], bool],
    fallback: str = DEFAULT_FALLBACK,
) -> str:
    """Return the first slug for ``name`` that ``is_taken`` reports as free.

    Candidates are the canonical base, then ``base-1``, ``base-2`` and so on.
    """
    base = canonicalize(name) or fallback
    return next(c for c in slug_candidates(base) if not is_taken(c))
