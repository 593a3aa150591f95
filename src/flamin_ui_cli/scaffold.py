"""Project provisioning steps behind ``flamin-ui init`` and ``flamin-ui add``.

Every step raises a :class:`ScaffoldError` subclass on failure instead of
exiting; the command layer decides how a failure is reported.
"""

import json
import re
import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path

import httpx
from rich.console import Console

from flamin_ui_cli.config import GeneratedFile, ScaffoldConfig
from flamin_ui_cli.prompts import Confirm

COMPONENT_NAME_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_-]*$")


class ScaffoldError(Exception):
    """Base class for failures that abort a command."""


class ProjectNotFoundError(ScaffoldError):
    pass


class ManifestError(ScaffoldError):
    pass


class ConfirmationDeclinedError(ScaffoldError):
    pass


class DependencyInstallError(ScaffoldError):
    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


class InvalidComponentNameError(ScaffoldError):
    pass


class ComponentExistsError(ScaffoldError):
    def __init__(self, message: str, path: Path):
        super().__init__(message)
        self.path = path


class ComponentFetchError(ScaffoldError):
    def __init__(self, message: str, url: str, status_code: int | None = None):
        super().__init__(message)
        self.url = url
        self.status_code = status_code


def ensure_project(root: Path, config: ScaffoldConfig) -> Path:
    """Return the manifest path, or raise if ``root`` is not a project root."""
    manifest = root / config.manifest_filename
    if not manifest.is_file():
        raise ProjectNotFoundError(
            f"{config.manifest_filename} not found. Make sure you're in a Next.js project root."
        )
    return manifest


def read_manifest(manifest: Path) -> dict:
    try:
        with manifest.open("r", encoding="utf-8") as fh:
            data = json.load(fh)
    except (OSError, ValueError) as exc:
        raise ManifestError(f"Failed to read {manifest.name}: {exc}") from exc
    if not isinstance(data, dict):
        raise ManifestError(f"{manifest.name} must contain a JSON object")
    return data


@dataclass
class ReconcileResult:
    missing: list[str]
    installed: list[str]

    @property
    def changed(self) -> bool:
        return bool(self.installed)


class DependencyReconciler:
    """Install the required packages the project does not declare yet."""

    GROUPS = ("dependencies", "devDependencies")

    def __init__(self, config: ScaffoldConfig, confirm: Confirm, *, console: Console | None = None):
        self.config = config
        self.confirm = confirm
        self.console = console or Console()

    def declared_dependencies(self, manifest: dict) -> set[str]:
        declared: set[str] = set()
        for group in self.GROUPS:
            entries = manifest.get(group)
            if isinstance(entries, dict):
                declared.update(entries)
        return declared

    def missing_dependencies(self, manifest: dict) -> list[str]:
        declared = self.declared_dependencies(manifest)
        return [dep for dep in self.config.required_dependencies if dep not in declared]

    def install_command(self, packages: list[str]) -> list[str]:
        # npm resolves to npm.cmd on Windows
        executable = shutil.which(self.config.package_manager) or self.config.package_manager
        return [executable, "install", *packages]

    def install(self, packages: list[str]) -> None:
        cmd = self.install_command(packages)
        self.console.print(
            f"[cyan]Running:[/cyan] {self.config.package_manager} install {' '.join(packages)}"
        )
        try:
            # stdout/stderr inherited so the package manager reports progress itself
            subprocess.run(cmd, check=True)
        except subprocess.CalledProcessError as e:
            raise DependencyInstallError(
                f"{self.config.package_manager} install exited with code {e.returncode}",
                returncode=e.returncode,
            ) from e
        except OSError as e:
            raise DependencyInstallError(
                f"Could not run {self.config.package_manager}: {e}"
            ) from e

    def reconcile(self, root: Path) -> ReconcileResult:
        manifest_path = ensure_project(root, self.config)
        missing = self.missing_dependencies(read_manifest(manifest_path))
        if not missing:
            return ReconcileResult(missing=[], installed=[])

        message = (
            f"The following dependencies are required and will be installed: "
            f"{', '.join(missing)}. Proceed?"
        )
        if not self.confirm(message, False):
            raise ConfirmationDeclinedError("Installation cancelled.")

        self.install(missing)
        return ReconcileResult(missing=missing, installed=list(missing))


@dataclass
class MaterializeOutcome:
    file: GeneratedFile
    path: Path
    status: str  # created | overwritten | skipped


class ConfigMaterializer:
    """Write the fixed configuration files into a project."""

    def __init__(self, config: ScaffoldConfig, confirm: Confirm):
        self.config = config
        self.confirm = confirm

    def write(self, root: Path, generated: GeneratedFile) -> MaterializeOutcome:
        dest = root / generated.path
        status = "created"
        if dest.exists():
            message = f"A {generated.display_name} file already exists. Do you want to overwrite it?"
            if not self.confirm(message, False):
                return MaterializeOutcome(generated, dest, "skipped")
            status = "overwritten"
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_text(generated.content, encoding="utf-8")
        return MaterializeOutcome(generated, dest, status)

    def materialize(self, root: Path) -> list[MaterializeOutcome]:
        return [self.write(root, generated) for generated in self.config.generated_files]

    def ensure_components_dir(self, root: Path) -> Path:
        components = root / self.config.components_dir
        components.mkdir(parents=True, exist_ok=True)
        return components


def validate_component_name(name: str) -> str:
    if not COMPONENT_NAME_PATTERN.match(name or ""):
        raise InvalidComponentNameError(
            f"Invalid component name '{name}'. Use letters, digits, '-' or '_' only."
        )
    return name


class ComponentFetcher:
    """Download a single component's source from the remote registry."""

    def __init__(self, config: ScaffoldConfig, client: httpx.Client):
        self.config = config
        self.client = client

    def destination(self, root: Path, name: str) -> Path:
        return root / self.config.components_dir / f"{name}{self.config.component_extension}"

    def component_url(self, name: str) -> str:
        return f"{self.config.registry_url}/{name}/{name}{self.config.component_extension}"

    def fetch(self, name: str) -> bytes:
        url = self.component_url(name)
        try:
            response = self.client.get(url, timeout=self.config.fetch_timeout, follow_redirects=True)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise ComponentFetchError(f"Request failed: {e}", url) from e
        if not response.is_success:
            raise ComponentFetchError(
                f"HTTP error! status: {response.status_code}", url, status_code=response.status_code
            )
        return response.content

    def add(self, root: Path, name: str) -> Path:
        validate_component_name(name)
        dest = self.destination(root, name)
        if dest.exists():
            raise ComponentExistsError(f"{dest.name} already exists.", dest)

        body = self.fetch(name)
        dest.parent.mkdir(parents=True, exist_ok=True)
        dest.write_bytes(body)
        return dest
