"""Tests for GeneratorConfig loading."""

import pytest

from go_vanity.config import DEFAULT_BASE_DOMAIN, DEFAULT_ORG, GeneratorConfig


class TestFromEnv:
    _ALL_VARS = [
        "GITHUB_TOKEN", "GO_VANITY_ORG", "GO_VANITY_BASE_DOMAIN",
        "GO_VANITY_BASE_PACKAGE", "GO_VANITY_OUTPUT_DIR", "GO_VANITY_API_URL",
    ]

    def _clean_env(self, monkeypatch):
        for var in self._ALL_VARS:
            monkeypatch.delenv(var, raising=False)

    def test_defaults(self, monkeypatch):
        self._clean_env(monkeypatch)
        monkeypatch.setenv("GITHUB_TOKEN", "tok")

        config = GeneratorConfig.from_env()
        assert config.token == "tok"
        assert config.org == DEFAULT_ORG
        assert config.base_domain == DEFAULT_BASE_DOMAIN
        assert config.base_package == DEFAULT_BASE_DOMAIN
        assert config.output_dir == "public"
        assert config.api_url == "https://api.github.com"

    def test_base_package_follows_domain(self, monkeypatch):
        self._clean_env(monkeypatch)
        monkeypatch.setenv("GITHUB_TOKEN", "tok")
        monkeypatch.setenv("GO_VANITY_BASE_DOMAIN", "go.example.com")

        config = GeneratorConfig.from_env()
        assert config.base_package == "go.example.com"

    def test_explicit_values(self, monkeypatch):
        self._clean_env(monkeypatch)
        monkeypatch.setenv("GITHUB_TOKEN", "tok")
        monkeypatch.setenv("GO_VANITY_ORG", "acme")
        monkeypatch.setenv("GO_VANITY_BASE_PACKAGE", "go.example.com/lib")
        monkeypatch.setenv("GO_VANITY_API_URL", "https://ghe.example.com/api/v3/")

        config = GeneratorConfig.from_env()
        assert config.org == "acme"
        assert config.base_package == "go.example.com/lib"
        assert config.api_url == "https://ghe.example.com/api/v3"

    def test_missing_token_raises(self, monkeypatch):
        self._clean_env(monkeypatch)
        with pytest.raises(ValueError, match="GITHUB_TOKEN"):
            GeneratorConfig.from_env()


class TestOverrides:
    def test_none_keeps_value(self):
        config = GeneratorConfig(token="t", org="a")
        assert config.with_overrides(org=None).org == "a"

    def test_values_replace(self):
        config = GeneratorConfig(token="t").with_overrides(org="b", output_dir="site")
        assert config.org == "b"
        assert config.output_dir == "site"
        assert config.token == "t"

    def test_domain_override_moves_tracking_package(self):
        config = GeneratorConfig(token="t").with_overrides(base_domain="go.acme.dev")
        assert config.base_domain == "go.acme.dev"
        assert config.base_package == "go.acme.dev"

    def test_domain_override_keeps_explicit_package(self):
        config = GeneratorConfig(token="t", base_package="pkg.blksails.net/lib")
        config = config.with_overrides(base_domain="go.acme.dev")
        assert config.base_package == "pkg.blksails.net/lib"

    def test_both_overridden(self):
        config = GeneratorConfig(token="t").with_overrides(base_domain="go.acme.dev", base_package="go.acme.dev/x")
        assert config.base_package == "go.acme.dev/x"


def test_repr_masks_token():
    assert "secret" not in repr(GeneratorConfig(token="secret"))
