"""Writes rendered pages under the output directory."""

import logging
from pathlib import Path

from .models import PackageRecord

log = logging.getLogger(__name__)

PAGE_NAME = "index.html"


class OutputError(OSError):
    """Raised when a page cannot be placed or written under the output directory."""


class PageWriter:
    """Lays pages out as <output_dir>/<import path minus base domain>/index.html.

    Usage:
        writer = PageWriter("public", "pkg.example.net")
        writer.write_import_page(record, render_import_page(record))
        writer.write_index(render_index_page(records, "pkg.example.net"))
    """

    def __init__(self, output_dir: str | Path, base_domain: str):
        self.output_dir = Path(output_dir)
        self.base_domain = base_domain

    def page_path(self, import_path: str) -> Path:
        """File path of the page for an import path.

        Raises OutputError if the result would land outside output_dir.
        """
        rel = import_path.removeprefix(self.base_domain + "/")
        root = self.output_dir.resolve()
        target = (root / rel / PAGE_NAME).resolve()
        if not target.is_relative_to(root) or target.parent == root:
            raise OutputError(f"Import path {import_path!r} maps outside {self.output_dir}")
        return target

    def write_import_page(self, record: PackageRecord, document: bytes) -> Path:
        return self._write(self.page_path(record.import_path), document)

    def write_index(self, document: bytes) -> Path:
        return self._write(self.output_dir.resolve() / PAGE_NAME, document)

    def _write(self, path: Path, document: bytes) -> Path:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_bytes(document)
        except OSError as e:
            raise OutputError(f"Failed to write {path}: {e}") from e
        log.debug("Wrote %s (%d bytes)", path, len(document))
        return path
