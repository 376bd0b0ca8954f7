import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import IntegrityError
from sqlmodel import Session

from app.errors import ConflictError, NotFoundError, ValidationError
from app.models.file_node import FileNodeCreate, FileNodeUpdate
from app.models.project import Project
from app.models.user import User
from app.services.file_tree import FileTreeStore
from app.services.projects import ProjectStore


@pytest.fixture
def project(session: Session, owner: User) -> Project:
    return ProjectStore(session).create(owner_id=owner.id, name="Tree", prompt="p")


@pytest.fixture
def tree(session: Session) -> FileTreeStore:
    return FileTreeStore(session)


def _folder(tree: FileTreeStore, project: Project, path: str):
    return tree.create_node(project.id, FileNodeCreate(path=path, is_folder=True))


def _file(tree: FileTreeStore, project: Project, path: str, content: str = ""):
    return tree.create_node(project.id, FileNodeCreate(path=path, content=content))


def _paths(tree: FileTreeStore, project: Project) -> set[str]:
    return {node.path for node in tree.list_nodes(project.id)}


# --- create ---


def test_create_derives_name_and_parent(tree: FileTreeStore, project: Project):
    _folder(tree, project, "/docs")
    node = _file(tree, project, "/docs/readme.md", "# hi")
    assert node.id is not None
    assert node.name == "readme.md"
    assert node.parent_path == "/docs"
    assert node.content == "# hi"
    assert node.is_folder is False


def test_create_top_level_has_no_parent(tree: FileTreeStore, project: Project):
    node = _file(tree, project, "/README.md")
    assert node.parent_path is None


def test_create_requires_existing_project(tree: FileTreeStore):
    with pytest.raises(NotFoundError):
        tree.create_node(9999, FileNodeCreate(path="/a"))


def test_create_requires_parent_folder(tree: FileTreeStore, project: Project):
    with pytest.raises(ValidationError):
        _file(tree, project, "/missing/file.txt")


def test_create_rejects_file_as_parent(tree: FileTreeStore, project: Project):
    _file(tree, project, "/notes.txt")
    with pytest.raises(ValidationError):
        _file(tree, project, "/notes.txt/inner.txt")


def test_create_rejects_mismatched_parent_path(tree: FileTreeStore, project: Project):
    _folder(tree, project, "/docs")
    _folder(tree, project, "/src")
    with pytest.raises(ValidationError):
        tree.create_node(
            project.id, FileNodeCreate(path="/docs/a.md", parent_path="/src")
        )


def test_create_duplicate_path(tree: FileTreeStore, project: Project):
    _file(tree, project, "/a.txt")
    with pytest.raises(ConflictError):
        _file(tree, project, "/a.txt")


@pytest.mark.parametrize("path", ["relative.txt", "/", "/trailing/", "/a//b"])
def test_create_rejects_malformed_path(tree: FileTreeStore, project: Project, path):
    with pytest.raises(ValidationError):
        _file(tree, project, path)


def test_same_path_allowed_in_different_projects(
    session: Session, tree: FileTreeStore, project: Project, owner: User
):
    other = ProjectStore(session).create(owner_id=owner.id, name="Other", prompt="p")
    _file(tree, project, "/same.txt")
    _file(tree, other, "/same.txt")
    assert _paths(tree, other) == {"/same.txt"}


# --- delete ---


def test_delete_file_only_removes_itself(tree: FileTreeStore, project: Project):
    _folder(tree, project, "/src")
    target = _file(tree, project, "/src/a.py")
    _file(tree, project, "/src/b.py")

    assert tree.delete_node(target.id, project.id) is True
    assert _paths(tree, project) == {"/src", "/src/b.py"}


def test_delete_folder_removes_whole_subtree(tree: FileTreeStore, project: Project):
    src = _folder(tree, project, "/src")
    _folder(tree, project, "/src/components")
    _file(tree, project, "/src/components/Button.tsx")
    _folder(tree, project, "/src/components/icons")
    _file(tree, project, "/src/components/icons/star.svg")
    _file(tree, project, "/src/index.ts")
    _folder(tree, project, "/src2")
    _file(tree, project, "/src2/keep.ts")
    _file(tree, project, "/README.md")

    assert tree.delete_node(src.id, project.id) is True
    assert _paths(tree, project) == {"/src2", "/src2/keep.ts", "/README.md"}


def test_delete_folder_is_scoped_to_project(
    session: Session, tree: FileTreeStore, project: Project, owner: User
):
    other = ProjectStore(session).create(owner_id=owner.id, name="Other", prompt="p")
    docs = _folder(tree, project, "/docs")
    _file(tree, project, "/docs/a.md")
    _folder(tree, other, "/docs")
    _file(tree, other, "/docs/a.md")

    tree.delete_node(docs.id, project.id)

    assert _paths(tree, project) == set()
    assert _paths(tree, other) == {"/docs", "/docs/a.md"}


def test_delete_wrong_project_returns_false(
    session: Session, tree: FileTreeStore, project: Project, owner: User
):
    other = ProjectStore(session).create(owner_id=owner.id, name="Other", prompt="p")
    node = _file(tree, project, "/a.txt")

    assert tree.delete_node(node.id, other.id) is False
    assert tree.delete_node(9999, project.id) is False
    assert _paths(tree, project) == {"/a.txt"}


def test_delete_folder_with_wildcard_characters(tree: FileTreeStore, project: Project):
    folder = _folder(tree, project, "/a_b")
    _file(tree, project, "/a_b/x.txt")
    _folder(tree, project, "/aXb")
    _file(tree, project, "/aXb/y.txt")

    tree.delete_node(folder.id, project.id)
    assert _paths(tree, project) == {"/aXb", "/aXb/y.txt"}


# --- update ---


def test_update_content_and_name(tree: FileTreeStore, project: Project):
    node = _file(tree, project, "/main.py", "print(1)")
    updated = tree.update_node(
        node.id, FileNodeUpdate(content="print(2)", name="entry.py")
    )
    assert updated.content == "print(2)"
    assert updated.name == "entry.py"
    assert updated.path == "/main.py"


def test_update_path_recomputes_parent(tree: FileTreeStore, project: Project):
    _folder(tree, project, "/lib")
    node = _file(tree, project, "/main.py")
    moved = tree.update_node(node.id, FileNodeUpdate(path="/lib/main.py"))
    assert moved.parent_path == "/lib"


def test_update_path_into_missing_folder(tree: FileTreeStore, project: Project):
    node = _file(tree, project, "/main.py")
    with pytest.raises(ValidationError):
        tree.update_node(node.id, FileNodeUpdate(path="/nowhere/main.py"))


def test_update_path_collision(tree: FileTreeStore, project: Project):
    _file(tree, project, "/a.py")
    node = _file(tree, project, "/b.py")
    with pytest.raises(ConflictError):
        tree.update_node(node.id, FileNodeUpdate(path="/a.py"))


def test_move_folder_into_itself_rejected(tree: FileTreeStore, project: Project):
    src = _folder(tree, project, "/src")
    _folder(tree, project, "/src/inner")
    with pytest.raises(ValidationError):
        tree.update_node(src.id, FileNodeUpdate(path="/src/inner/src"))


def test_move_folder_leaves_descendants(tree: FileTreeStore, project: Project):
    src = _folder(tree, project, "/src")
    _file(tree, project, "/src/a.py")

    tree.update_node(src.id, FileNodeUpdate(path="/source"))

    assert _paths(tree, project) == {"/source", "/src/a.py"}


def test_failed_update_rolls_back(
    session: Session, tree: FileTreeStore, project: Project, monkeypatch
):
    node = _file(tree, project, "/main.py", "print(1)")

    def failing_commit():
        raise IntegrityError("UPDATE files", {}, Exception("uq_files_project_path"))

    monkeypatch.setattr(session, "commit", failing_commit)
    with pytest.raises(IntegrityError):
        tree.update_node(node.id, FileNodeUpdate(content="print(2)"))
    monkeypatch.undo()

    assert tree.get_node(node.id).content == "print(1)"
    _file(tree, project, "/after.py")
    assert _paths(tree, project) == {"/main.py", "/after.py"}


def test_update_missing_node(tree: FileTreeStore):
    with pytest.raises(NotFoundError):
        tree.update_node(9999, FileNodeUpdate(content="x"))


# --- HTTP ---


def test_docs_folder_scenario(client: TestClient, auth_headers: dict):
    project_id = client.post(
        "/api/projects",
        json={"name": "Docs", "prompt": "notes"},
        headers=auth_headers,
    ).json()["id"]
    base = f"/api/projects/{project_id}/files"

    folder = client.post(
        base, json={"path": "/docs", "name": "docs", "is_folder": True}, headers=auth_headers
    )
    assert folder.status_code == 201
    readme = client.post(
        base,
        json={"path": "/docs/readme.md", "name": "readme.md", "parent_path": "/docs"},
        headers=auth_headers,
    )
    assert readme.status_code == 201
    assert readme.json()["parent_path"] == "/docs"

    resp = client.delete(f"{base}/{folder.json()['id']}", headers=auth_headers)
    assert resp.status_code == 200

    assert client.get(base, headers=auth_headers).json() == []
    missing = client.get(f"{base}/{readme.json()['id']}", headers=auth_headers)
    assert missing.status_code == 404


def test_http_errors(client: TestClient, auth_headers: dict, other_token: str):
    project_id = client.post(
        "/api/projects", json={"name": "Errs", "prompt": "p"}, headers=auth_headers
    ).json()["id"]
    base = f"/api/projects/{project_id}/files"

    orphan = client.post(base, json={"path": "/x/y.txt"}, headers=auth_headers)
    assert orphan.status_code == 400

    client.post(base, json={"path": "/dup.txt"}, headers=auth_headers)
    dup = client.post(base, json={"path": "/dup.txt"}, headers=auth_headers)
    assert dup.status_code == 409

    gone = client.delete(f"{base}/9999", headers=auth_headers)
    assert gone.status_code == 404

    foreign = client.get(base, headers={"Authorization": f"Bearer {other_token}"})
    assert foreign.status_code == 404


def test_http_update_file(client: TestClient, auth_headers: dict):
    project_id = client.post(
        "/api/projects", json={"name": "Edit", "prompt": "p"}, headers=auth_headers
    ).json()["id"]
    base = f"/api/projects/{project_id}/files"
    node = client.post(base, json={"path": "/a.txt"}, headers=auth_headers).json()

    resp = client.patch(
        f"{base}/{node['id']}", json={"content": "hello"}, headers=auth_headers
    )
    assert resp.status_code == 200
    assert resp.json()["content"] == "hello"
