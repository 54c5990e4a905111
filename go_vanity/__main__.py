"""CLI entry point: python -m go_vanity"""

import argparse
import json
import logging
import sys
import time
from pathlib import Path

from dotenv import load_dotenv

from .config import GeneratorConfig
from .github import GitHubProvider, ProviderError
from .pipeline import PipelineResult, run

log = logging.getLogger(__name__)


def _report(result: PipelineResult, config: GeneratorConfig, elapsed_ms: float) -> dict:
    return {
        "org": config.org,
        "base_package": config.base_package,
        "output_dir": config.output_dir,
        "total_repositories": result.total,
        "packages": [record.model_dump() for record in result.registry],
        "skipped": {s.repo_name: s.reason for s in result.skipped},
        "pages_written": result.pages_written,
        "failed_pages": result.failed_pages,
        "execution_time_ms": round(elapsed_ms, 1),
    }


def main():
    load_dotenv()

    parser = argparse.ArgumentParser(
        description="Generate go-import vanity pages for the Go modules of a GitHub organization.",
    )
    parser.add_argument("--org", help="GitHub organization (default: $GO_VANITY_ORG or blksails)")
    parser.add_argument(
        "--base-domain",
        help="Domain stripped from import paths to build output paths (default: $GO_VANITY_BASE_DOMAIN)",
    )
    parser.add_argument(
        "--base-package",
        help="Only modules under this prefix are published (default: $GO_VANITY_BASE_PACKAGE, else the base domain)",
    )
    parser.add_argument(
        "--output-dir",
        help="Directory the pages are written to (default: $GO_VANITY_OUTPUT_DIR or public)",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging",
    )
    parser.add_argument(
        "-o", "--output",
        help="Write a JSON run report to file (for debugging)",
    )
    args = parser.parse_args()

    level = logging.DEBUG if args.debug else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(name)s %(levelname)s %(message)s",
        stream=sys.stderr,
    )

    try:
        config = GeneratorConfig.from_env()
    except ValueError as e:
        print(f"Config error: {e}", file=sys.stderr)
        sys.exit(1)

    config = config.with_overrides(
        org=args.org,
        base_domain=args.base_domain,
        base_package=args.base_package,
        output_dir=args.output_dir,
    )
    log.debug("Using %r", config)

    t0 = time.time()

    try:
        with GitHubProvider(config.token, api_url=config.api_url) as provider:
            result = run(config, provider)
    except ProviderError as e:
        print(f"GitHub API error: {e}", file=sys.stderr)
        log.debug("ProviderError detail", exc_info=True)
        sys.exit(1)

    elapsed_ms = (time.time() - t0) * 1000

    if args.output:
        json_str = json.dumps(_report(result, config, elapsed_ms), indent=2)
        Path(args.output).write_text(json_str)
        print(f"Report written to {args.output}", file=sys.stderr)


if __name__ == "__main__":
    main()
