SEPARATOR = "/"


def split_path(path: str) -> list[str]:
    return [part for part in path.split(SEPARATOR) if part]


def parent_path_of(path: str) -> str | None:
    """Parent folder path of ``path``, or None for a top-level node.

    >>> parent_path_of("/src/App.tsx")
    '/src'
    >>> parent_path_of("/README.md") is None
    True
    """
    parts = split_path(path)
    if len(parts) <= 1:
        return None
    return SEPARATOR + SEPARATOR.join(parts[:-1])


def basename_of(path: str) -> str:
    parts = split_path(path)
    return parts[-1] if parts else ""


def descendant_prefix(folder_path: str) -> str:
    """``folder_path`` with exactly one trailing separator."""
    return folder_path if folder_path.endswith(SEPARATOR) else folder_path + SEPARATOR


def is_descendant_path(candidate: str, ancestor_folder_path: str) -> bool:
    # "/src2" must not match "/src", so compare against "/src/"
    return candidate.startswith(descendant_prefix(ancestor_folder_path))


def is_valid_path(path: str) -> bool:
    """Absolute, no trailing separator, no empty segments."""
    if not path.startswith(SEPARATOR) or path == SEPARATOR:
        return False
    return all(path.split(SEPARATOR)[1:])
