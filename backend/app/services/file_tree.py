"""Persistence for a project's file/folder nodes.

Nodes reference their parent by path string rather than by foreign key, so
the rules that keep the tree whole live here:

* ``parent_path`` is always the parent derived from ``path``, and that parent
  must be an existing folder in the same project.
* ``(project_id, path)`` is unique.
* Deleting a folder deletes every node under ``folder.path + "/"`` in the same
  transaction as the folder itself.

The ``(project_id, path)`` unique index doubles as the path -> node lookup used
by the parent checks.
"""
import logging

from sqlmodel import Session, col, select

from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.common import utc_now
from app.models.file_node import FileNode, FileNodeCreate, FileNodeUpdate
from app.models.project import Project
from app.services.paths import (
    basename_of,
    descendant_prefix,
    is_descendant_path,
    is_valid_path,
    parent_path_of,
)

logger = logging.getLogger(__name__)


class FileTreeStore:
    def __init__(self, session: Session):
        self.session = session

    def create_node(
        self, project_id: int, data: FileNodeCreate, commit: bool = True
    ) -> FileNode:
        """Insert one node after checking its project, path and parent.

        With ``commit=False`` the node is only flushed, letting a caller batch
        several inserts into one transaction.
        """
        if not self.session.get(Project, project_id):
            raise NotFoundError(f"Project {project_id} not found")

        parent_path = self._check_placement(project_id, data.path)
        if "parent_path" in data.model_fields_set and data.parent_path != parent_path:
            raise ValidationError(
                f"parent_path {data.parent_path!r} does not match path {data.path!r}"
            )

        node = FileNode(
            project_id=project_id,
            path=data.path,
            name=data.name or basename_of(data.path),
            content=data.content,
            is_folder=data.is_folder,
            parent_path=parent_path,
        )
        self.session.add(node)
        if commit:
            self.session.commit()
            self.session.refresh(node)
        else:
            self.session.flush()
        return node

    def get_node(self, node_id: int, project_id: int | None = None) -> FileNode:
        node = self.session.get(FileNode, node_id)
        if not node or (project_id is not None and node.project_id != project_id):
            raise NotFoundError(f"File {node_id} not found")
        return node

    def list_nodes(self, project_id: int) -> list[FileNode]:
        return list(
            self.session.exec(
                select(FileNode).where(FileNode.project_id == project_id)
            ).all()
        )

    def update_node(
        self, node_id: int, update: FileNodeUpdate, project_id: int | None = None
    ) -> FileNode:
        """Partial update of name, content and path.

        Moving a folder does not move its descendants; their paths keep the old
        prefix until they are moved themselves.
        """
        node = self.get_node(node_id, project_id)
        changes = update.model_dump(exclude_unset=True, exclude_none=True)

        new_path = changes.get("path")
        if new_path is not None and new_path != node.path:
            if node.is_folder and is_descendant_path(new_path, node.path):
                raise ValidationError(f"Cannot move {node.path!r} into itself")
            node.parent_path = self._check_placement(node.project_id, new_path)
            if node.is_folder and self._descendants(node.project_id, node.path):
                logger.warning(
                    f"Folder {node.path!r} moved to {new_path!r}; "
                    "descendants keep their old paths"
                )

        for key, value in changes.items():
            setattr(node, key, value)
        node.updated_at = utc_now()
        self.session.add(node)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        self.session.refresh(node)
        return node

    def delete_node(self, node_id: int, project_id: int) -> bool:
        """Delete a node, and its whole subtree if it is a folder.

        Returns False when no node with that id exists in ``project_id``.
        """
        node = self.session.exec(
            select(FileNode).where(
                FileNode.id == node_id, FileNode.project_id == project_id
            )
        ).first()
        if not node:
            return False

        try:
            if node.is_folder:
                descendants = self._descendants(project_id, node.path)
                for descendant in descendants:
                    self.session.delete(descendant)
                logger.info(
                    f"Deleting folder {node.path!r} with {len(descendants)} descendants"
                )
            self.session.delete(node)
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return True

    # --- Helpers ---

    def _descendants(self, project_id: int, folder_path: str) -> list[FileNode]:
        prefix = descendant_prefix(folder_path)
        return list(
            self.session.exec(
                select(FileNode).where(
                    FileNode.project_id == project_id,
                    col(FileNode.path).startswith(prefix, autoescape=True),
                )
            ).all()
        )

    def _find_by_path(self, project_id: int, path: str) -> FileNode | None:
        return self.session.exec(
            select(FileNode).where(
                FileNode.project_id == project_id, FileNode.path == path
            )
        ).first()

    def _check_placement(self, project_id: int, path: str) -> str | None:
        """Validate ``path`` for a new or moved node and return its parent path."""
        if not is_valid_path(path):
            raise ValidationError(f"Invalid path {path!r}")
        if self._find_by_path(project_id, path):
            raise ConflictError(f"Path {path!r} already exists")

        parent_path = parent_path_of(path)
        if parent_path is not None:
            parent = self._find_by_path(project_id, parent_path)
            if not parent or not parent.is_folder:
                raise ValidationError(f"Parent folder {parent_path!r} does not exist")
        return parent_path
