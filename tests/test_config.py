"""Tests for verso.config.SiteConfig."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from verso.config import ENV_VAR, SiteConfig, production_from_env


class TestSiteConfig:
    def test_defaults(self) -> None:
        config = SiteConfig(production=False)

        assert config.src_dir == "src/pages"
        assert config.layout_name == "layout"
        assert config.index_name == "index"
        assert config.source_extensions == (".py", ".html")
        assert config.throw_on_build_error is False

    def test_frozen(self) -> None:
        config = SiteConfig()
        with pytest.raises(FrozenInstanceError):
            config.out_dir = "dist"  # type: ignore[misc]

    def test_paths_are_absolute(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.chdir(tmp_path)
        config = SiteConfig(src_dir="pages", out_dir="dist", shell_path="shell.py")

        assert config.src_path == tmp_path.resolve() / "pages"
        assert config.out_path == tmp_path.resolve() / "dist"
        assert config.shell_file == tmp_path.resolve() / "shell.py"


class TestProductionFromEnv:
    @pytest.mark.parametrize("value", ["production", "Production", " production "])
    def test_production(self, value: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_VAR, value)

        assert production_from_env() is True
        assert SiteConfig().production is True

    @pytest.mark.parametrize("value", ["", "development", "prod"])
    def test_not_production(self, value: str, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_VAR, value)

        assert SiteConfig().production is False

    def test_unset(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv(ENV_VAR, raising=False)

        assert production_from_env() is False

    def test_explicit_overrides_env(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv(ENV_VAR, "production")

        assert SiteConfig(production=False).production is False
