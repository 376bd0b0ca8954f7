from sqlmodel import Session, col, select

from app.models.common import PromptSuggestion

DEFAULT_SUGGESTIONS: list[tuple[str, str]] = [
    ("Build a React frontend with TypeScript for a personal portfolio", "frontend"),
    ("Create a REST API server for a todo list with Express", "backend"),
    ("Build a full stack recipe sharing app with user accounts", "fullstack"),
    ("Make a landing page UI for a coffee shop", "frontend"),
    ("Create a backend service that sends daily weather emails", "backend"),
    ("Write a small script that organizes my photos by date", "general"),
]


class SuggestionCatalog:
    def __init__(self, session: Session):
        self.session = session

    def list_active(self) -> list[PromptSuggestion]:
        return list(
            self.session.exec(
                select(PromptSuggestion)
                .where(PromptSuggestion.is_active == True)  # noqa: E712
                .order_by(
                    col(PromptSuggestion.created_at).desc(),
                    col(PromptSuggestion.id).desc(),
                )
            ).all()
        )

    def seed_defaults(self) -> int:
        """Insert the default catalog into an empty table; returns rows added."""
        if self.session.exec(select(PromptSuggestion)).first():
            return 0
        for text, category in DEFAULT_SUGGESTIONS:
            self.session.add(PromptSuggestion(text=text, category=category))
        self.session.commit()
        return len(DEFAULT_SUGGESTIONS)
