import posixpath

from .models import EntryType, FileEntry, PackageRecord, Repository

GO_LANGUAGE = "Go"
SOURCE_SUFFIX = ".go"


def qualifies(repo: Repository) -> bool:
    """Only repositories whose primary language is exactly "Go" are considered."""
    return repo.primary_language == GO_LANGUAGE


def _source_dir(entry: FileEntry) -> str | None:
    """Directory of a Go source file, or None if the entry isn't one."""
    if entry.type != EntryType.FILE or not entry.name.endswith(SOURCE_SUFFIX):
        return None
    return posixpath.dirname(entry.path) or "."


def source_directories(entries: list[FileEntry]) -> list[str]:
    """Distinct non-root directories holding at least one .go file, first-seen order."""
    seen: dict[str, None] = {}
    for entry in entries:
        directory = _source_dir(entry)
        if directory is not None and directory != ".":
            seen.setdefault(directory, None)
    return list(seen)


def expand(module_id: str, repo: Repository) -> list[PackageRecord]:
    """
    Derive every import path a repository serves.

    The first record is always the module root. After that, one record is
    emitted per .go file outside the root, so a directory with several
    source files shows up several times; PackageRegistry collapses them.

    Any directory holding a .go file counts, including ones whose files are
    all tests or excluded by build constraints.

    Args:
        module_id: Module path declared in go.mod.
        repo: Repository with its file_entries populated.

    Returns:
        Records in file-listing order, root first.
    """
    records = [_record(module_id, repo)]
    for entry in repo.file_entries:
        directory = _source_dir(entry)
        if directory is None or directory == ".":
            continue
        import_path = posixpath.normpath(posixpath.join(module_id, directory))
        records.append(_record(import_path, repo))
    return records


def _record(import_path: str, repo: Repository) -> PackageRecord:
    return PackageRecord(
        import_path=import_path,
        repo_url=repo.html_url,
        description=repo.description,
        default_branch=repo.default_branch,
    )
