from enum import Enum


class Archetype(str, Enum):
    FULL_STACK = "full_stack"
    API = "api"
    FRONTEND = "frontend"
    BASIC = "basic"


# Checked in order; the first archetype with a matching keyword wins.
KEYWORDS: list[tuple[Archetype, tuple[str, ...]]] = [
    (Archetype.FULL_STACK, ("full stack", "fullstack")),
    (Archetype.API, ("api", "backend", "server", "express", "node.js")),
    (Archetype.FRONTEND, ("react", "frontend", "ui")),
]


def classify(prompt: str) -> Archetype:
    """Pick the archetype for a free-text prompt by case-insensitive substring match."""
    text = prompt.lower()
    for archetype, keywords in KEYWORDS:
        if any(keyword in text for keyword in keywords):
            return archetype
    return Archetype.BASIC
