"""GitHub REST client: lists org repositories, fetches files and recursive trees.

Requests are single-shot with a timeout. Errors surface as ProviderError and
it is up to the caller whether that ends the run or just skips a repository.
"""

import base64
import binascii
import logging
import time
from typing import Any, Optional

import requests

from .config import DEFAULT_API_URL
from .manifest import ManifestDecodeError
from .models import EntryType, FileEntry, Repository

log = logging.getLogger(__name__)

PAGE_SIZE = 100
REQUEST_TIMEOUT = 30

# git tree entry type -> content entry type
_TREE_TYPES: dict[str, EntryType] = {
    "blob": EntryType.FILE,
    "tree": EntryType.DIR,
    "commit": EntryType.SUBMODULE,
}

# blobs with this mode are symlinks, not regular files
_SYMLINK_MODE = "120000"


class ProviderError(Exception):
    """A GitHub API call failed (transport error or unexpected status)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


def _repository_from_api(data: dict[str, Any]) -> Repository:
    return Repository(
        name=data.get("name", ""),
        primary_language=data.get("language"),
        html_url=data.get("html_url", ""),
        description=data.get("description") or "",
        default_branch=data.get("default_branch") or "master",
    )


def _entries_from_tree(data: dict[str, Any], path: str = "") -> list[FileEntry]:
    """Convert a git trees response into FileEntries, keeping only those under path."""
    prefix = path.strip("/")
    entries = []
    for item in data.get("tree", []):
        if item.get("type") == "blob" and item.get("mode") == _SYMLINK_MODE:
            entry_type = EntryType.SYMLINK
        else:
            entry_type = _TREE_TYPES.get(item.get("type", ""))
        entry_path = item.get("path", "")
        if entry_type is None or not entry_path:
            continue
        if prefix and not entry_path.startswith(prefix + "/"):
            continue
        entries.append(FileEntry(path=entry_path, type=entry_type))
    return entries


class GitHubProvider:
    """Synchronous GitHub API client.

    Usage:
        provider = GitHubProvider(token)
        for repo in provider.list_repositories("blksails"):
            raw = provider.get_file_content("blksails", repo.name, "go.mod")
    """

    def __init__(
        self,
        token: str,
        api_url: str = DEFAULT_API_URL,
        session: Optional[requests.Session] = None,
        timeout: float = REQUEST_TIMEOUT,
    ):
        self._api_url = api_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()
        self._session.headers.update({
            "Accept": "application/vnd.github+json",
            "Authorization": f"Bearer {token}",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": "go-vanity",
        })
        self._call_count = 0

    def __enter__(self) -> "GitHubProvider":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def close(self) -> None:
        log.debug("GitHub session: %d calls", self._call_count)
        self._session.close()

    def _get(self, endpoint: str, params: Optional[dict[str, Any]] = None) -> requests.Response:
        url = f"{self._api_url}/{endpoint}"
        t0 = time.monotonic()
        try:
            response = self._session.get(url, params=params, timeout=self._timeout)
        except requests.RequestException as e:
            raise ProviderError(f"GET {endpoint} failed: {e}") from e
        self._call_count += 1
        log.debug("GET %s → %d (%.2fs)", endpoint, response.status_code, time.monotonic() - t0)
        return response

    @staticmethod
    def _json(response: requests.Response, endpoint: str) -> Any:
        if response.status_code != 200:
            raise ProviderError(
                f"GitHub API error {response.status_code} for {endpoint}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise ProviderError(f"Invalid JSON from {endpoint}: {e}") from e

    def list_repositories(self, org: str) -> list[Repository]:
        """All repositories of an organization, following pagination."""
        endpoint = f"orgs/{org}/repos"
        repos: list[Repository] = []
        page = 1
        while True:
            data = self._json(self._get(endpoint, {"per_page": PAGE_SIZE, "page": page}), endpoint)
            if not isinstance(data, list):
                raise ProviderError(f"Unexpected response shape from {endpoint}")
            repos.extend(_repository_from_api(item) for item in data if isinstance(item, dict))
            log.info("list_repositories page %d → %d repos", page, len(data))
            if len(data) < PAGE_SIZE:
                break
            page += 1
        return repos

    def get_file_content(
        self, org: str, repo: str, path: str, ref: Optional[str] = None,
    ) -> Optional[bytes]:
        """Raw bytes of a file, or None if it doesn't exist.

        Raises ManifestDecodeError if the payload isn't decodable file content.
        """
        endpoint = f"repos/{org}/{repo}/contents/{path.lstrip('/')}"
        response = self._get(endpoint, {"ref": ref} if ref else None)
        if response.status_code == 404:
            return None
        data = self._json(response, endpoint)

        if not isinstance(data, dict) or data.get("type") != "file":
            raise ManifestDecodeError(f"{path} in {org}/{repo} is not a file")
        encoding = data.get("encoding")
        content = data.get("content")
        if encoding != "base64" or content is None:
            raise ManifestDecodeError(f"Unsupported encoding {encoding!r} for {path} in {org}/{repo}")
        try:
            return base64.b64decode(content)
        except (binascii.Error, ValueError) as e:
            raise ManifestDecodeError(f"Corrupt base64 content for {path} in {org}/{repo}") from e

    def get_directory_listing(
        self, org: str, repo: str, path: str = "", ref: Optional[str] = None,
    ) -> list[FileEntry]:
        """Every entry below path, recursively, via the git trees API."""
        endpoint = f"repos/{org}/{repo}/git/trees/{ref or 'HEAD'}"
        data = self._json(self._get(endpoint, {"recursive": 1}), endpoint)
        if not isinstance(data, dict):
            raise ProviderError(f"Unexpected response shape from {endpoint}")
        if data.get("truncated"):
            log.warning("Tree listing for %s/%s was truncated; some packages may be missing", org, repo)
        return _entries_from_tree(data, path)
