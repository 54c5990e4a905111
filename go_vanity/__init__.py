from .discover import expand, qualifies
from .manifest import parse_module_name
from .models import EntryType, FileEntry, PackageRecord, Repository
from .pipeline import run
from .registry import PackageRegistry

__all__ = [
    "expand",
    "qualifies",
    "parse_module_name",
    "run",
    "EntryType",
    "FileEntry",
    "PackageRecord",
    "PackageRegistry",
    "Repository",
]
