"""End-to-end pipeline: list repositories → filter → go.mod → expand → register → render/write.

Each repository ends up either Processed (its records) or Skipped (a reason).
Only a failed initial listing stops the run.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Optional, Protocol, Union

from .config import GeneratorConfig
from .discover import expand, qualifies, source_directories
from .github import ProviderError
from .manifest import GO_MOD, ManifestDecodeError, decode_manifest, has_base_prefix, parse_module_name
from .models import FileEntry, PackageRecord, Repository
from .output import OutputError, PageWriter
from .registry import PackageRegistry
from .render import RenderError, render_import_page, render_index_page

log = logging.getLogger(__name__)


class RepositoryProvider(Protocol):
    def list_repositories(self, org: str) -> list[Repository]: ...

    def get_file_content(
        self, org: str, repo: str, path: str, ref: Optional[str] = None,
    ) -> Optional[bytes]: ...

    def get_directory_listing(
        self, org: str, repo: str, path: str = "", ref: Optional[str] = None,
    ) -> list[FileEntry]: ...


@dataclass
class Processed:
    repo_name: str
    module_id: str
    records: list[PackageRecord]


@dataclass
class Skipped:
    repo_name: str
    reason: str
    quiet: bool = False  # expected exclusions, logged at debug only


RepoOutcome = Union[Processed, Skipped]


@dataclass
class PipelineResult:
    """Result of one generation run."""
    registry: PackageRegistry
    skipped: list[Skipped]                # repositories left out, with why
    total: int                            # repositories listed
    written_paths: set[str] = field(default_factory=set)
    failed_pages: dict[str, str] = field(default_factory=dict)  # import path (or "index") → error

    @property
    def pages_written(self) -> int:
        return len(self.written_paths)


def process_repository(
    repo: Repository,
    provider: RepositoryProvider,
    org: str,
    base_package: str,
) -> RepoOutcome:
    """Run the inclusion gate and path expansion for one repository."""
    if not qualifies(repo):
        return Skipped(repo.name, f"language is {repo.primary_language!r}, not Go", quiet=True)

    try:
        raw = provider.get_file_content(org, repo.name, GO_MOD, ref=repo.default_branch)
    except ProviderError as e:
        return Skipped(repo.name, f"fetching {GO_MOD} failed: {e}")
    except ManifestDecodeError as e:
        return Skipped(repo.name, str(e))
    if raw is None:
        return Skipped(repo.name, f"no {GO_MOD}")

    try:
        module_id = parse_module_name(decode_manifest(raw))
    except ManifestDecodeError as e:
        return Skipped(repo.name, str(e))

    if not has_base_prefix(module_id, base_package):
        return Skipped(repo.name, f"module {module_id!r} is not under {base_package}", quiet=True)

    try:
        entries = provider.get_directory_listing(org, repo.name, ref=repo.default_branch)
    except ProviderError as e:
        return Skipped(repo.name, f"listing files failed: {e}")

    repo = repo.model_copy(update={"file_entries": entries})
    subdirs = source_directories(entries)
    log.info("  %s → %s (+%d subpackages)", repo.name, module_id, len(subdirs))
    return Processed(repo.name, module_id, expand(module_id, repo))


def _publish(record: PackageRecord, writer: PageWriter, result: PipelineResult) -> None:
    try:
        writer.write_import_page(record, render_import_page(record))
    except (RenderError, OutputError) as e:
        log.warning("  ✗ page for %s: %s", record.import_path, e)
        result.failed_pages[record.import_path] = str(e)
        return
    result.failed_pages.pop(record.import_path, None)
    result.written_paths.add(record.import_path)


def run(
    config: GeneratorConfig,
    provider: RepositoryProvider,
    writer: Optional[PageWriter] = None,
) -> PipelineResult:
    """Generate every import page plus the index for config.org.

    Args:
        config: Organization, domain and prefix settings.
        provider: Source of repositories and file contents.
        writer: Output sink; defaults to a PageWriter on config.output_dir.

    Raises:
        ProviderError: if the repository listing itself fails.
    """
    t0 = time.monotonic()
    writer = writer or PageWriter(config.output_dir, config.base_domain)

    repos = provider.list_repositories(config.org)
    log.info("Listed %d repositories in %s", len(repos), config.org)

    result = PipelineResult(registry=PackageRegistry(), skipped=[], total=len(repos))

    for repo in repos:
        try:
            outcome = process_repository(repo, provider, config.org, config.base_package)
        except Exception as e:
            log.debug("Unexpected error processing %s", repo.name, exc_info=True)
            outcome = Skipped(repo.name, f"unexpected error: {type(e).__name__}: {e}")
        if isinstance(outcome, Skipped):
            result.skipped.append(outcome)
            level = logging.DEBUG if outcome.quiet else logging.INFO
            log.log(level, "  ✗ %s skipped: %s", outcome.repo_name, outcome.reason)
            continue
        for record in outcome.records:
            previous = result.registry.get(record.import_path)
            result.registry.insert(record)
            # same page already rendered; only a changed record is rewritten
            if record != previous:
                _publish(record, writer, result)

    try:
        writer.write_index(render_index_page(result.registry.all(), config.base_domain))
    except (RenderError, OutputError) as e:
        log.error("Index page not written: %s", e)
        result.failed_pages["index"] = str(e)

    elapsed = time.monotonic() - t0
    log.info("--- Generation complete (%.1fs) ---", elapsed)
    log.info(
        "  %d packages from %d/%d repositories, %d pages written, %d failed",
        len(result.registry), result.total - len(result.skipped), result.total,
        result.pages_written, len(result.failed_pages),
    )
    return result
