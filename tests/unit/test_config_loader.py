"""Tests for YAML configuration loading and provider resolution."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from contentful_provisioner.config import (
    ConfigError,
    engine_from_config,
    load_config,
    provider_from_config,
)

if TYPE_CHECKING:
    from pathlib import Path

_YAML = """\
provider:
  organization_id: org-from-yaml

state_path: custom-state.json
"""


def _write(tmp_path: Path, content: str, *, dotenv: str | None = None) -> Path:
    path = tmp_path / "contentful-provisioner.yaml"
    path.write_text(content)
    if dotenv is not None:
        (tmp_path / ".env").write_text(dotenv)
    return path


class TestLoadConfig:
    def test_full_config(self, tmp_path: Path) -> None:
        cfg = load_config(_write(tmp_path, _YAML))

        assert cfg.provider.organization_id == "org-from-yaml"
        assert cfg.provider.cma_token is None
        assert cfg.provider.base_url == "https://api.contentful.com"
        assert cfg.state_path == tmp_path / "custom-state.json"

    def test_env_fills_missing_fields(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTENTFUL_MANAGEMENT_TOKEN", "CFPAT-env")
        monkeypatch.setenv("CONTENTFUL_ORGANIZATION_ID", "org-from-env")

        cfg = load_config(_write(tmp_path, _YAML))

        assert cfg.provider.cma_token == "CFPAT-env"
        assert cfg.provider.organization_id == "org-from-yaml"

    def test_dotenv_is_lowest_priority(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTENTFUL_BASE_URL", "https://env.example.com")
        dotenv = (
            "CONTENTFUL_MANAGEMENT_TOKEN=CFPAT-dotenv\n"
            "CONTENTFUL_BASE_URL=https://dotenv.example.com\n"
        )

        cfg = load_config(_write(tmp_path, _YAML, dotenv=dotenv))

        assert cfg.provider.cma_token == "CFPAT-dotenv"
        assert cfg.provider.base_url == "https://env.example.com"

    def test_missing_file_uses_environment(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTENTFUL_MANAGEMENT_TOKEN", "CFPAT-env")

        cfg = load_config(tmp_path / "absent.yaml")

        assert cfg.provider.cma_token == "CFPAT-env"
        assert cfg.state_path == tmp_path / ".contentful-state.json"

    def test_empty_file(self, tmp_path: Path) -> None:
        cfg = load_config(_write(tmp_path, ""))

        assert cfg.provider.organization_id is None

    def test_unknown_provider_field(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="space_id"):
            load_config(_write(tmp_path, "provider:\n  space_id: abc\n"))

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="Failed to read"):
            load_config(_write(tmp_path, "provider: [unclosed\n"))

    def test_top_level_must_be_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="mapping"):
            load_config(_write(tmp_path, "- a\n- b\n"))

    def test_provider_must_be_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigError, match="provider"):
            load_config(_write(tmp_path, "provider: CFPAT-inline\n"))

    def test_unknown_top_level_key_is_ignored(self, tmp_path: Path) -> None:
        cfg = load_config(_write(tmp_path, "spaces: []\n"))

        assert cfg.state_path.name == ".contentful-state.json"


class TestProviderFromConfig:
    def test_requires_token(self, tmp_path: Path) -> None:
        cfg = load_config(_write(tmp_path, _YAML))

        with pytest.raises(ConfigError, match="CONTENTFUL_MANAGEMENT_TOKEN"):
            provider_from_config(cfg)

    def test_builds_provider_and_engine(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        monkeypatch.setenv("CONTENTFUL_MANAGEMENT_TOKEN", "CFPAT-env")
        cfg = load_config(_write(tmp_path, _YAML))

        provider = provider_from_config(cfg)
        engine = engine_from_config(cfg)

        assert provider.cma_token is not None
        assert provider.cma_token.get_secret_value() == "CFPAT-env"
        assert provider.client.organization_id == "org-from-yaml"
        assert engine.state_path == tmp_path / "custom-state.json"
