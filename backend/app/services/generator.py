import logging
from dataclasses import dataclass

from sqlmodel import Session

from app.models.file_node import FileNodeCreate
from app.models.project import Project
from app.services.classifier import classify
from app.services.file_tree import FileTreeStore
from app.services.paths import parent_path_of
from app.services.projects import ProjectStore
from app.services.templates import GeneratedNode, synthesize

logger = logging.getLogger(__name__)


@dataclass
class GenerationResult:
    project: Project
    generated_nodes: list[GeneratedNode]


class ProjectGenerator:
    """Turns a project's stored prompt into a persisted file tree."""

    def __init__(self, session: Session):
        self.session = session
        self.projects = ProjectStore(session)
        self.files = FileTreeStore(session)

    def generate(self, project_id: int) -> GenerationResult:
        """Classify the prompt, synthesize the skeleton and store every node.

        Nodes are inserted in template order so each parent folder exists
        before its children. All inserts share one transaction: if any fails,
        none are kept. The project row itself is not modified.
        """
        project = self.projects.get(project_id)
        archetype = classify(project.prompt)
        nodes = synthesize(archetype, project.name)
        logger.info(
            f"Generating {archetype.value} project {project_id} ({len(nodes)} nodes)"
        )

        try:
            for node in nodes:
                self.files.create_node(
                    project_id,
                    FileNodeCreate(
                        path=node.path,
                        name=node.name,
                        content=node.content,
                        is_folder=node.is_folder,
                        parent_path=parent_path_of(node.path),
                    ),
                    commit=False,
                )
            self.session.commit()
        except Exception:
            self.session.rollback()
            logger.exception(f"Generation failed for project {project_id}")
            raise

        self.session.refresh(project)
        logger.info(f"Generated {len(nodes)} nodes for project {project_id}")
        return GenerationResult(project=project, generated_nodes=nodes)
