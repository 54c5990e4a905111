"""Generator settings from environment."""

import os
from dataclasses import dataclass, replace
from typing import Optional

DEFAULT_ORG = "blksails"
DEFAULT_BASE_DOMAIN = "pkg.blksails.net"
DEFAULT_OUTPUT_DIR = "public"
DEFAULT_API_URL = "https://api.github.com"


@dataclass(frozen=True)
class GeneratorConfig:
    token: str
    org: str = DEFAULT_ORG
    base_domain: str = DEFAULT_BASE_DOMAIN
    base_package: str = DEFAULT_BASE_DOMAIN
    output_dir: str = DEFAULT_OUTPUT_DIR
    api_url: str = DEFAULT_API_URL

    @classmethod
    def from_env(cls) -> "GeneratorConfig":
        """Load from environment variables.

        Required: GITHUB_TOKEN

        Optional: GO_VANITY_ORG, GO_VANITY_BASE_DOMAIN, GO_VANITY_BASE_PACKAGE
        (defaults to the base domain), GO_VANITY_OUTPUT_DIR, GO_VANITY_API_URL
        """
        token = os.getenv("GITHUB_TOKEN", "")
        org = os.getenv("GO_VANITY_ORG", "") or DEFAULT_ORG
        base_domain = os.getenv("GO_VANITY_BASE_DOMAIN", "") or DEFAULT_BASE_DOMAIN
        base_package = os.getenv("GO_VANITY_BASE_PACKAGE", "") or base_domain
        output_dir = os.getenv("GO_VANITY_OUTPUT_DIR", "") or DEFAULT_OUTPUT_DIR
        api_url = os.getenv("GO_VANITY_API_URL", "") or DEFAULT_API_URL

        if not token:
            raise ValueError("Missing required env vars: GITHUB_TOKEN")

        return cls(
            token=token,
            org=org,
            base_domain=base_domain,
            base_package=base_package,
            output_dir=output_dir,
            api_url=api_url.rstrip("/"),
        )

    def with_overrides(
        self,
        org: Optional[str] = None,
        base_domain: Optional[str] = None,
        base_package: Optional[str] = None,
        output_dir: Optional[str] = None,
    ) -> "GeneratorConfig":
        """Return a copy with any non-None values replaced (CLI flags win over env).

        A base package that was tracking the base domain keeps tracking it
        when only the domain is overridden.
        """
        if base_domain is not None and base_package is None and self.base_package == self.base_domain:
            base_package = base_domain
        changes = {
            "org": org,
            "base_domain": base_domain,
            "base_package": base_package,
            "output_dir": output_dir,
        }
        return replace(self, **{k: v for k, v in changes.items() if v is not None})

    def __repr__(self) -> str:
        return (
            f"GeneratorConfig(token='***', org={self.org!r}, "
            f"base_domain={self.base_domain!r}, base_package={self.base_package!r}, "
            f"output_dir={self.output_dir!r}, api_url={self.api_url!r})"
        )
