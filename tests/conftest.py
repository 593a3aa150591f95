from __future__ import annotations

import json
from pathlib import Path

import pytest

ALL_REQUIRED = {
    "framer-motion": "^11.0.0",
    "clsx": "^2.1.0",
    "tailwind-merge": "^2.2.0",
    "tw-merge": "^0.0.1",
}


def write_manifest(root: Path, dependencies: dict | None = None, dev_dependencies: dict | None = None) -> Path:
    manifest: dict = {"name": "my-app", "version": "0.1.0"}
    if dependencies is not None:
        manifest["dependencies"] = dependencies
    if dev_dependencies is not None:
        manifest["devDependencies"] = dev_dependencies
    path = root / "package.json"
    path.write_text(json.dumps(manifest, indent=2), encoding="utf-8")
    return path


class Answers:
    """Confirmation provider that replays canned answers and records prompts."""

    def __init__(self, *answers: bool, default: bool | None = None):
        self.answers = list(answers)
        self.default = default
        self.messages: list[str] = []

    def __call__(self, message: str, default: bool = False) -> bool:
        self.messages.append(message)
        if self.answers:
            return self.answers.pop(0)
        if self.default is not None:
            return self.default
        raise AssertionError(f"Unexpected prompt: {message}")


@pytest.fixture
def project(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """A Next.js-like project root declaring every required dependency, used as cwd."""
    write_manifest(tmp_path, dependencies={"next": "14.2.0", **ALL_REQUIRED})
    monkeypatch.chdir(tmp_path)
    return tmp_path


@pytest.fixture
def no_install(monkeypatch: pytest.MonkeyPatch) -> list:
    """Record package manager invocations instead of running them."""
    calls: list = []

    def fake_run(cmd, check=False, **kwargs):
        calls.append(list(cmd))

    monkeypatch.setattr("flamin_ui_cli.scaffold.subprocess.run", fake_run)
    return calls
