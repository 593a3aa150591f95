"""Static configuration for the Flamin-UI scaffolding commands."""

import os
from dataclasses import dataclass, replace
from pathlib import Path

from flamin_ui_cli import templates

# Constants
MANIFEST_FILENAME = "package.json"
PACKAGE_MANAGER = "npm"
REQUIRED_DEPENDENCIES = (
    "framer-motion",
    "clsx",
    "tailwind-merge",
    "tw-merge",
)
COMPONENTS_DIRNAME = Path("lib") / "components"
COMPONENT_EXTENSION = ".tsx"
DEFAULT_REGISTRY_URL = "https://raw.githubusercontent.com/Vedant-Panchal/FlaminUI/refs/heads/main/lib/components"
REGISTRY_URL_ENV = "FLAMIN_UI_REGISTRY_URL"
FETCH_TIMEOUT = 30


@dataclass(frozen=True)
class GeneratedFile:
    """A fixed-content file written into the target project by ``init``."""
    path: Path
    content: str
    label: str = ""

    @property
    def display_name(self) -> str:
        return self.label or self.path.as_posix()


DEFAULT_FILES = (
    GeneratedFile(Path("lib") / "util.ts", templates.UTIL_TS, "util.ts"),
    GeneratedFile(Path("utils") / "cn.ts", templates.CN_TS, "cn.ts"),
    GeneratedFile(Path("tailwind.config.ts"), templates.TAILWIND_CONFIG_TS, "tailwind.config.ts"),
)


@dataclass(frozen=True)
class ScaffoldConfig:
    manifest_filename: str = MANIFEST_FILENAME
    package_manager: str = PACKAGE_MANAGER
    required_dependencies: tuple[str, ...] = REQUIRED_DEPENDENCIES
    generated_files: tuple[GeneratedFile, ...] = DEFAULT_FILES
    components_dir: Path = COMPONENTS_DIRNAME
    component_extension: str = COMPONENT_EXTENSION
    registry_url: str = DEFAULT_REGISTRY_URL
    fetch_timeout: float = FETCH_TIMEOUT

    def __post_init__(self):
        if not self.required_dependencies:
            raise ValueError("required_dependencies must not be empty")


def _registry_url(cli_url: str | None = None) -> str:
    """Return the registry base (cli arg takes precedence over env) without a trailing slash."""
    url = ((cli_url or os.getenv(REGISTRY_URL_ENV) or "").strip()) or DEFAULT_REGISTRY_URL
    return url.rstrip("/")


def load_config(registry_url: str | None = None) -> ScaffoldConfig:
    """Build the default configuration with environment overrides applied."""
    return replace(ScaffoldConfig(), registry_url=_registry_url(registry_url))
