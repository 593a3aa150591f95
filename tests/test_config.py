"""Configuration defaults and overrides."""

from __future__ import annotations

from pathlib import Path

import pytest

from flamin_ui_cli.config import (
    DEFAULT_REGISTRY_URL,
    REGISTRY_URL_ENV,
    ScaffoldConfig,
    load_config,
)


def test_defaults_match_flamin_ui_layout() -> None:
    config = ScaffoldConfig()
    assert config.manifest_filename == "package.json"
    assert config.required_dependencies == ("framer-motion", "clsx", "tailwind-merge", "tw-merge")
    assert [f.path for f in config.generated_files] == [
        Path("lib") / "util.ts",
        Path("utils") / "cn.ts",
        Path("tailwind.config.ts"),
    ]
    assert config.components_dir == Path("lib") / "components"


def test_empty_required_dependencies_rejected() -> None:
    with pytest.raises(ValueError):
        ScaffoldConfig(required_dependencies=())


def test_load_config_uses_default_registry(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv(REGISTRY_URL_ENV, raising=False)
    assert load_config().registry_url == DEFAULT_REGISTRY_URL


def test_load_config_reads_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(REGISTRY_URL_ENV, "  https://mirror.test/components/  ")
    assert load_config().registry_url == "https://mirror.test/components"


def test_cli_registry_takes_precedence(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv(REGISTRY_URL_ENV, "https://env.test")
    assert load_config("https://cli.test/").registry_url == "https://cli.test"


def test_tailwind_config_scans_component_directory() -> None:
    tailwind = next(f for f in ScaffoldConfig().generated_files if f.path == Path("tailwind.config.ts"))
    assert "./lib/components/**/*.{js,ts,jsx,tsx,mdx}" in tailwind.content
    assert tailwind.display_name == "tailwind.config.ts"
