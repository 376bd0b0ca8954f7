import logging

from sqlmodel import Session, col, select

from app.errors import NotFoundError
from app.models.common import ChatMessage
from app.models.project import Project

logger = logging.getLogger(__name__)

DEFAULT_REPLY = (
    'I understand you\'re asking about: "{message}". I\'m here to help with '
    "your development needs. Can you provide more specific details about what "
    "you'd like to accomplish?"
)

# First matching entry wins.
CANNED_REPLIES: list[tuple[tuple[str, ...], str]] = [
    (
        ("bug", "error", "issue"),
        "I can help you debug this issue. Let me analyze the code and suggest "
        "some solutions. Can you share more details about when this occurs?",
    ),
    (
        ("feature", "add", "implement"),
        "That's a great feature idea! I can help you implement this. Let me "
        "break down the steps and suggest the best approach for your project.",
    ),
    (
        ("deploy",),
        "I can guide you through the deployment process. Let me check your "
        "current project setup and recommend the best deployment strategy.",
    ),
    (
        ("database", "data"),
        "For database-related tasks, I can help you design schemas, write "
        "queries, or optimize performance. What specific database work do you "
        "need assistance with?",
    ),
    (
        ("test",),
        "Testing is crucial for reliable code! I can help you write unit tests, "
        "integration tests, or set up testing frameworks. What would you like "
        "to test?",
    ),
    (
        ("performance", "optimize"),
        "Let's optimize your application! I can analyze your code for "
        "performance bottlenecks and suggest improvements. What specific "
        "performance issues are you experiencing?",
    ),
]


def auto_reply(message: str) -> str:
    text = message.lower()
    for keywords, reply in CANNED_REPLIES:
        if any(keyword in text for keyword in keywords):
            return reply
    return DEFAULT_REPLY.format(message=message)


class ChatService:
    def __init__(self, session: Session):
        self.session = session

    def post_message(self, project_id: int, user_id: int, message: str) -> ChatMessage:
        if not self.session.get(Project, project_id):
            raise NotFoundError(f"Project {project_id} not found")

        chat_message = ChatMessage(
            project_id=project_id,
            user_id=user_id,
            message=message,
            response=auto_reply(message),
            is_ai_response=False,
        )
        self.session.add(chat_message)
        self.session.commit()
        self.session.refresh(chat_message)
        return chat_message

    def list_messages(self, project_id: int) -> list[ChatMessage]:
        return list(
            self.session.exec(
                select(ChatMessage)
                .where(ChatMessage.project_id == project_id)
                .order_by(col(ChatMessage.created_at), col(ChatMessage.id))
            ).all()
        )
