from app.models.common import (
    ChatMessage,
    Deployment,
    DeploymentStatus,
    DeploymentUpdate,
    PromptSuggestion,
)
from app.models.file_node import FileNode, FileNodeCreate, FileNodeUpdate
from app.models.project import Project, ProjectUpdate
from app.models.user import User

__all__ = [
    "ChatMessage",
    "Deployment",
    "DeploymentStatus",
    "DeploymentUpdate",
    "FileNode",
    "FileNodeCreate",
    "FileNodeUpdate",
    "Project",
    "ProjectUpdate",
    "PromptSuggestion",
    "User",
]
