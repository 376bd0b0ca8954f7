import logging

from sqlalchemy.exc import IntegrityError
from sqlmodel import Session, col, select

from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.common import ChatMessage, Deployment, utc_now
from app.models.file_node import FileNode
from app.models.project import Project, ProjectUpdate
from app.models.user import User
from app.services.slugs import DEFAULT_FALLBACK, generate_slug

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "prompt", "is_deployed")


class ProjectStore:
    """Project rows, with slug uniqueness and owner-checked deletes."""

    def __init__(
        self,
        session: Session,
        slug_max_attempts: int = 50,
        slug_fallback: str = DEFAULT_FALLBACK,
    ):
        self.session = session
        self.slug_max_attempts = slug_max_attempts
        self.slug_fallback = slug_fallback

    def create(
        self,
        owner_id: int,
        name: str,
        prompt: str,
        description: str | None = None,
    ) -> Project:
        if not self.session.get(User, owner_id):
            raise NotFoundError(f"User {owner_id} not found")
        project = Project(
            owner_id=owner_id,
            name=name,
            description=description,
            prompt=prompt,
            slug="",
        )
        project = self._save_with_unique_slug(project, name, {})
        logger.info(f"Created project {project.id} with slug {project.slug!r}")
        return project

    def get(self, project_id: int) -> Project:
        project = self.session.get(Project, project_id)
        if not project:
            raise NotFoundError(f"Project {project_id} not found")
        return project

    def get_by_slug(self, slug: str) -> Project | None:
        return self.session.exec(select(Project).where(Project.slug == slug)).first()

    def list_for_owner(self, owner_id: int) -> list[Project]:
        projects = self.session.exec(
            select(Project)
            .where(Project.owner_id == owner_id)
            .order_by(col(Project.created_at).desc(), col(Project.id).desc())
        ).all()
        return list(projects)

    def update(self, project_id: int, update: ProjectUpdate) -> Project:
        project = self.get(project_id)
        changes = update.model_dump(exclude_unset=True)
        for key in REQUIRED_FIELDS:
            if key in changes and changes[key] is None:
                raise ValidationError(f"{key} cannot be null")
        if "name" in changes and not changes["name"].strip():
            raise ValidationError("name cannot be blank")
        changes["updated_at"] = utc_now()

        name = changes.get("name")
        if name is not None and name != project.name:
            project = self._save_with_unique_slug(project, name, changes)
            logger.info(f"Renamed project {project.id}, slug is now {project.slug!r}")
            return project

        for key, value in changes.items():
            setattr(project, key, value)
        self.session.add(project)
        self.session.commit()
        self.session.refresh(project)
        return project

    def delete(self, project_id: int, owner_id: int) -> bool:
        """Delete a project and everything it owns.

        Returns False, touching nothing, when the project is missing or belongs
        to someone else; the two cases are not distinguished.
        """
        project = self.session.exec(
            select(Project).where(
                Project.id == project_id, Project.owner_id == owner_id
            )
        ).first()
        if not project:
            return False

        for model in (FileNode, ChatMessage, Deployment):
            rows = self.session.exec(
                select(model).where(model.project_id == project_id)
            ).all()
            for row in rows:
                self.session.delete(row)
        self.session.flush()

        self.session.delete(project)
        self.session.commit()
        logger.info(f"Deleted project {project_id}")
        return True

    # --- Helpers ---

    def _slug_taken(self, slug: str, exclude_id: int | None) -> bool:
        query = select(Project.id).where(Project.slug == slug)
        if exclude_id is not None:
            query = query.where(Project.id != exclude_id)
        return self.session.exec(query).first() is not None

    def _save_with_unique_slug(
        self, project: Project, name: str, changes: dict
    ) -> Project:
        """Commit ``project`` under a fresh slug for ``name``.

        The pre-check can race with a concurrent insert, so a unique-constraint
        violation on commit marks that slug as taken and moves on to the next
        candidate.
        """
        rejected: set[str] = set()
        for _ in range(self.slug_max_attempts):
            slug = generate_slug(
                name,
                lambda s: s in rejected or self._slug_taken(s, project.id),
                fallback=self.slug_fallback,
            )
            for key, value in changes.items():
                setattr(project, key, value)
            project.slug = slug
            self.session.add(project)
            try:
                self.session.commit()
            except IntegrityError:
                self.session.rollback()
                logger.warning(f"Slug {slug!r} was claimed concurrently, retrying")
                rejected.add(slug)
                continue
            self.session.refresh(project)
            return project
        raise ConflictError(f"Could not find a free slug for {name!r}")
