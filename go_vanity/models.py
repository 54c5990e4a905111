from enum import Enum
from posixpath import basename
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class EntryType(str, Enum):
    FILE = "file"
    DIR = "dir"
    SYMLINK = "symlink"
    SUBMODULE = "submodule"


class FileEntry(BaseModel):
    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Slash-separated path relative to the repository root")
    type: EntryType = Field(description="Kind of entry, as reported by the provider")

    @property
    def name(self) -> str:
        return basename(self.path)


class Repository(BaseModel):
    model_config = ConfigDict(frozen=True)

    name: str
    primary_language: Optional[str] = Field(
        default=None,
        description="Primary language tag reported by the provider; None when undetected",
    )
    html_url: str
    description: str = ""
    default_branch: str = "master"
    file_entries: list[FileEntry] = Field(default_factory=list)


class PackageRecord(BaseModel):
    model_config = ConfigDict(frozen=True)

    import_path: str = Field(description="Vanity import path served by the generated page")
    repo_url: str = Field(description="HTML URL of the repository backing the import path")
    description: str = ""
    default_branch: str = Field(
        default="master",
        description="Branch used for go-source tree/blob links",
    )
