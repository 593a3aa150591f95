#!/usr/bin/env python3
# /// script
# requires-python = ">=3.11"
# dependencies = [
#     "typer",
#     "rich",
#     "readchar",
#     "httpx",
#     "truststore",
# ]
# ///
"""
Flamin-UI CLI - Add Flamin-UI components to a Next.js project

Usage:
    flamin-ui init
    flamin-ui add <component-name>

Or install globally:
    uv tool install --from flamin-ui-cli flamin-ui
"""

import sys
from pathlib import Path

import typer
import httpx
from rich.console import Console
from rich.panel import Panel
from rich.text import Text
from rich.align import Align
from rich.tree import Tree
from rich.markup import escape
from typer.core import TyperGroup

import ssl
import truststore

from flamin_ui_cli import prompts
from flamin_ui_cli.config import load_config
from flamin_ui_cli.scaffold import (
    ComponentFetchError,
    ComponentFetcher,
    ConfigMaterializer,
    DependencyInstallError,
    DependencyReconciler,
    ScaffoldError,
    ensure_project,
)

__version__ = "1.0.0"

ssl_context = truststore.SSLContext(ssl.PROTOCOL_TLS_CLIENT)

# ASCII Art Banner
BANNER = """
███████╗██╗      █████╗ ███╗   ███╗██╗███╗   ██╗    ██╗   ██╗██╗
██╔════╝██║     ██╔══██╗████╗ ████║██║████╗  ██║    ██║   ██║██║
█████╗  ██║     ███████║██╔████╔██║██║██╔██╗ ██║    ██║   ██║██║
██╔══╝  ██║     ██╔══██║██║╚██╔╝██║██║██║╚██╗██║    ██║   ██║██║
██║     ███████╗██║  ██║██║ ╚═╝ ██║██║██║ ╚████║    ╚██████╔╝██║
╚═╝     ╚══════╝╚═╝  ╚═╝╚═╝     ╚═╝╚═╝╚═╝  ╚═══╝     ╚═════╝ ╚═╝
"""

TAGLINE = "Flamin-UI - Animated components for Next.js and Tailwind"


class StepTracker:
    """Track and render the steps of a command as a tree."""
    def __init__(self, title: str):
        self.title = title
        self.steps = []  # list of dicts: {key, label, status, detail}

    def add(self, key: str, label: str):
        if key not in [s["key"] for s in self.steps]:
            self.steps.append({"key": key, "label": label, "status": "pending", "detail": ""})

    def start(self, key: str, detail: str = ""):
        self._update(key, status="running", detail=detail)

    def complete(self, key: str, detail: str = ""):
        self._update(key, status="done", detail=detail)

    def error(self, key: str, detail: str = ""):
        self._update(key, status="error", detail=detail)

    def skip(self, key: str, detail: str = ""):
        self._update(key, status="skipped", detail=detail)

    def _update(self, key: str, status: str, detail: str):
        for s in self.steps:
            if s["key"] == key:
                s["status"] = status
                if detail:
                    s["detail"] = detail
                return
        # If not present, add it
        self.steps.append({"key": key, "label": key, "status": status, "detail": detail})

    def render(self):
        tree = Tree(f"[cyan]{self.title}[/cyan]", guide_style="grey50")
        for step in self.steps:
            label = step["label"]
            detail_text = step["detail"].strip() if step["detail"] else ""

            status = step["status"]
            if status == "done":
                symbol = "[green]●[/green]"
            elif status == "pending":
                symbol = "[green dim]○[/green dim]"
            elif status == "running":
                symbol = "[cyan]○[/cyan]"
            elif status == "error":
                symbol = "[red]●[/red]"
            elif status == "skipped":
                symbol = "[yellow]○[/yellow]"
            else:
                symbol = " "

            if status == "pending":
                if detail_text:
                    line = f"{symbol} [bright_black]{label} ({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [bright_black]{label}[/bright_black]"
            else:
                if detail_text:
                    line = f"{symbol} [white]{label}[/white] [bright_black]({detail_text})[/bright_black]"
                else:
                    line = f"{symbol} [white]{label}[/white]"

            tree.add(line)
        return tree


console = Console()


class BannerGroup(TyperGroup):
    """Custom group that shows banner before help."""

    def format_help(self, ctx, formatter):
        show_banner()
        super().format_help(ctx, formatter)


app = typer.Typer(
    name="flamin-ui",
    help="CLI for the Flamin-UI component library",
    add_completion=False,
    invoke_without_command=True,
    cls=BannerGroup,
)


def show_banner():
    """Display the ASCII art banner."""
    banner_lines = BANNER.strip().split('\n')
    colors = ["bright_red", "red", "orange1", "dark_orange", "yellow", "bright_yellow"]

    styled_banner = Text()
    for i, line in enumerate(banner_lines):
        color = colors[i % len(colors)]
        styled_banner.append(line + "\n", style=color)

    console.print(Align.center(styled_banner))
    console.print(Align.center(Text(TAGLINE, style="italic bright_yellow")))
    console.print()


def _version_callback(value: bool):
    if value:
        console.print(f"flamin-ui {__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    ctx: typer.Context,
    version: bool = typer.Option(False, "--version", "-V", help="Show the version and exit", callback=_version_callback, is_eager=True),
):
    """Show banner when no subcommand is provided."""
    if ctx.invoked_subcommand is None and "--help" not in sys.argv and "-h" not in sys.argv:
        show_banner()
        console.print(Align.center("[dim]Run 'flamin-ui --help' for usage information[/dim]"))
        console.print()


def _http_client(skip_tls: bool = False) -> httpx.Client:
    """Create the client used to reach the component registry."""
    return httpx.Client(verify=False if skip_tls else ssl_context)


def _debug_panel(error: BaseException) -> Panel:
    pairs = [
        ("Error", type(error).__name__),
        ("Python", sys.version.split()[0]),
        ("Platform", sys.platform),
        ("CWD", str(Path.cwd())),
    ]
    if isinstance(error, ComponentFetchError):
        pairs.append(("URL", error.url))
        if error.status_code is not None:
            pairs.append(("Status", str(error.status_code)))
    if isinstance(error, DependencyInstallError) and error.returncode is not None:
        pairs.append(("Exit code", str(error.returncode)))
    if error.__cause__ is not None:
        pairs.append(("Cause", repr(error.__cause__)))
    label_width = max(len(k) for k, _ in pairs)
    lines = [f"{k.ljust(label_width)} → [bright_black]{escape(v)}[/bright_black]" for k, v in pairs]
    return Panel("\n".join(lines), title="Debug Environment", border_style="magenta")


def _fail(message: str, error: BaseException, debug: bool = False):
    console.print(f"[red]Error:[/red] {escape(message)}")
    if debug:
        console.print(_debug_panel(error))
    raise typer.Exit(1)


@app.command()
def init(
    debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output for failures"),
):
    """
    Initialize Flamin-UI in your Next.js project.

    This command will:
    1. Check that package.json exists in the current directory
    2. Install missing dependencies (framer-motion, clsx, tailwind-merge, tw-merge) after confirmation
    3. Write lib/util.ts, utils/cn.ts and tailwind.config.ts (asking before overwriting)
    4. Create the lib/components directory

    Example:
        flamin-ui init
    """
    config = load_config()
    root = Path.cwd()

    console.print("[yellow]Initializing Flamin-UI...[/yellow]")

    tracker = StepTracker("Initialize Flamin-UI")
    tracker.add("project", "Check project manifest")
    tracker.add("deps", "Install required dependencies")
    for generated in config.generated_files:
        tracker.add(generated.path.as_posix(), f"Write {generated.path.as_posix()}")
    tracker.add("components", f"Create {config.components_dir.as_posix()} directory")
    tracker.add("final", "Finalize")

    reconciler = DependencyReconciler(config, prompts.confirm, console=console)
    materializer = ConfigMaterializer(config, prompts.confirm)

    step = "project"
    try:
        tracker.start(step)
        ensure_project(root, config)
        tracker.complete(step, config.manifest_filename)

        step = "deps"
        tracker.start(step)
        result = reconciler.reconcile(root)
        if result.changed:
            console.print("[green]✓[/green] Dependencies installed successfully")
            tracker.complete(step, ", ".join(result.installed))
        else:
            console.print("[green]✓[/green] All required dependencies are already installed")
            tracker.complete(step, "already installed")

        for generated in config.generated_files:
            step = key = generated.path.as_posix()
            tracker.start(step)
            outcome = materializer.write(root, generated)
            if outcome.status == "skipped":
                console.print(f"[yellow]Skipping {outcome.file.display_name} update.[/yellow]")
                tracker.skip(key, "kept existing file")
            else:
                console.print(f"[green]✓[/green] {outcome.status.capitalize()} {key}")
                tracker.complete(key, outcome.status)

        step = "components"
        tracker.start(step)
        materializer.ensure_components_dir(root)
        tracker.complete(step)

        tracker.complete("final", "ready")
    except (KeyboardInterrupt, typer.Abort):
        tracker.error(step, "cancelled")
        console.print(tracker.render())
        console.print("\n[yellow]Initialization cancelled[/yellow]")
        raise typer.Exit(1)
    except (ScaffoldError, OSError) as e:
        tracker.error(step, escape(str(e)))
        console.print(tracker.render())
        _fail(str(e), e, debug)

    console.print(tracker.render())
    console.print("\n[bold green]Flamin-UI has been successfully initialized in your project![/bold green]")

    steps_panel = Panel(
        "You can now add components using: [cyan]flamin-ui add <component-name>[/cyan]",
        title="Next Steps",
        border_style="cyan",
        padding=(1, 2),
    )
    console.print()
    console.print(steps_panel)


@app.command()
def add(
    component: str = typer.Argument(..., help="Name of the component to add, e.g. button"),
    registry: str = typer.Option(None, "--registry", help="Base URL of the component registry (or set FLAMIN_UI_REGISTRY_URL environment variable)"),
    skip_tls: bool = typer.Option(False, "--skip-tls", help="Skip SSL/TLS verification (not recommended)"),
    debug: bool = typer.Option(False, "--debug", help="Show verbose diagnostic output for network failures"),
):
    """
    Add a Flamin-UI component to your project.

    Downloads the component source into lib/components/<component>.tsx.
    An existing file is never overwritten.

    Examples:
        flamin-ui add button
        flamin-ui add animated-card --debug
    """
    config = load_config(registry)
    root = Path.cwd()

    console.print(f"[yellow]Adding {escape(component)} component...[/yellow]")

    with _http_client(skip_tls) as client:
        fetcher = ComponentFetcher(config, client)
        try:
            path = fetcher.add(root, component)
        except ComponentFetchError as e:
            _fail(f"Error fetching {component} component: {e}", e, debug)
        except (ScaffoldError, OSError) as e:
            _fail(str(e), e, debug)

    console.print(f"[green]✓[/green] Created {escape(str(path))}")
    console.print(f"\n[bold green]{escape(component[:1].upper() + component[1:])} component has been successfully added to your project![/bold green]")


def main():
    app()


if __name__ == "__main__":
    main()
