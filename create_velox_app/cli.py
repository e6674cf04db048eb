"""create-velox-app command line interface.

Resolves the project settings (from arguments, prompts or defaults), renders
the selected bundled template into the project directory and prints the
next steps.

Usage::

    create-velox-app my-app
    create-velox-app my-app --template vanilla --identifier com.acme.my-app -y
    python -m create_velox_app . --force
"""

from __future__ import annotations

import argparse
import logging
import shutil
import sys
from pathlib import Path
from typing import Optional, Sequence

from create_velox_app import __version__, prompts
from create_velox_app.config import Config, build_template_data
from create_velox_app.log import setup_logging
from create_velox_app.lte.errors import TemplateError, TemplateIOError
from create_velox_app.scaffolder import list_templates, render_template
from create_velox_app.utils import (
    console,
    is_cli_installed,
    print_error,
    print_success,
    print_summary_table,
    print_warning,
    run_command,
)

logger = logging.getLogger(__name__)

PRESERVED_ENTRIES = frozenset({".git"})


# ---------------------------------------------------------------------------
# Target directory handling
# ---------------------------------------------------------------------------


def should_abort_overwrite(config: Config) -> bool:
    """Decide whether a non-empty target directory blocks the run.

    An empty or missing directory never blocks.  ``--force`` always
    proceeds, ``--yes`` alone always aborts, otherwise the user is asked.
    """
    target = config.project_dir
    if not target.exists():
        return False
    try:
        if not any(target.iterdir()):
            return False
    except OSError as exc:
        raise TemplateIOError(f"Cannot use {target}: {exc}", target) from exc
    if config.force:
        return False
    if config.yes:
        return True

    name = "Current" if config.is_current_dir else target.name
    return not prompts.confirm(
        f"{name} directory is not empty, do you want to overwrite?", default=False
    )


def prepare_target_directory(target: Path) -> None:
    """Create *target*, or empty it while keeping a top-level ``.git``."""
    try:
        if not target.exists():
            target.mkdir(parents=True)
            return

        for entry in target.iterdir():
            if entry.name in PRESERVED_ENTRIES:
                continue
            if entry.is_dir() and not entry.is_symlink():
                shutil.rmtree(entry)
            else:
                entry.unlink()
    except OSError as exc:
        raise TemplateIOError(f"Failed to prepare {target}: {exc}", target) from exc


# ---------------------------------------------------------------------------
# Post-generation steps
# ---------------------------------------------------------------------------


def run_bootstrap_if_needed(project_dir: Path, config: Config) -> bool:
    """Run ``make bootstrap`` on macOS when the project ships a Makefile.

    Returns:
        ``True`` only if the bootstrap ran and succeeded.
    """
    if not config.run_bootstrap or sys.platform != "darwin":
        return False
    if not (project_dir / "Makefile").exists():
        return False

    console.print("\nRunning macOS bootstrap (make bootstrap)...")
    returncode, _, stderr = run_command(["make", "bootstrap"], cwd=project_dir, capture=False)
    if returncode == -1:
        print_warning(f"Bootstrap failed to start: {stderr}")
        return False
    if returncode != 0:
        print_warning("Bootstrap failed. See README.md for manual steps.")
        return False
    return True


def print_missing_deps() -> bool:
    """Report missing toolchain dependencies.

    Returns:
        ``True`` if anything is missing.
    """
    if is_cli_installed("swift", "--version"):
        return False

    missing = [
        ("Swift", "Install Xcode Command Line Tools: `xcode-select --install`"),
    ]
    console.print("\nYour system is [yellow]missing dependencies[/yellow]:")
    for name, instruction in missing:
        console.print(f"- {name}: {instruction}", markup=False)
    return True


def print_next_steps(config: Config, bootstrapped: bool) -> None:
    console.print()
    print_success("Template created! To get started run:")
    if not config.is_current_dir:
        name = config.display_name
        cd_command = f'cd "{name}"' if " " in name else f"cd {name}"
        console.print(f"  {cd_command}", markup=False)
    if not bootstrapped:
        console.print("  make bootstrap")
    console.print("  swift build")
    console.print(f"  swift run {config.swift_module_name}", markup=False)

    if not print_missing_deps():
        console.print("\nTip: set VELOX_DEV_URL to load a dev server instead of the built-in UI.")
        if not bootstrapped:
            console.print(
                "Important: on macOS run `make bootstrap` before the first build or it will fail."
            )


# ---------------------------------------------------------------------------
# Orchestration
# ---------------------------------------------------------------------------


def run(config: Config) -> int:
    """Execute one scaffolding run and return the process exit code.

    Raises:
        TemplateError: Rendering or filesystem failure; partially written
            output is left in place.
    """
    if config.project_name is None:
        if config.yes:
            config.project_name = config.defaults.project_name
        else:
            config.project_name = prompts.text(
                "Project name", default=config.defaults.project_name
            )

    identifier = config.identifier
    if identifier is None:
        default_identifier = config.defaults.identifier(config.package_name)
        identifier = (
            default_identifier
            if config.yes
            else prompts.text("Identifier", default=default_identifier)
        )

    if should_abort_overwrite(config):
        print_error("Directory is not empty, operation cancelled")
        return 1

    project_dir = config.project_dir
    prepare_target_directory(project_dir)

    data = build_template_data(config, identifier)
    if config.verbose:
        print_summary_table(data, title="Template data")

    written = render_template(
        config.template, project_dir, data, templates_dir=config.templates_dir
    )
    logger.info("Wrote %d files to %s", len(written), project_dir)

    bootstrapped = run_bootstrap_if_needed(project_dir, config)
    print_next_steps(config, bootstrapped)
    return 0


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------


def build_parser() -> argparse.ArgumentParser:
    available = ", ".join(list_templates()) or "none"
    parser = argparse.ArgumentParser(
        prog="create-velox-app",
        description="Rapidly scaffold out a new Velox app project.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  create-velox-app my-app\n"
            "  create-velox-app my-app -t vanilla -y\n"
            "  create-velox-app . --force\n"
        ),
    )
    parser.add_argument(
        "project_name",
        nargs="?",
        default=None,
        help="Project name, used for the directory and Swift package ('.' for the current directory)",
    )
    parser.add_argument(
        "--template", "-t",
        default="vanilla",
        help=f"UI template to use. Available: {available}",
    )
    parser.add_argument(
        "--identifier",
        default=None,
        help="Unique identifier for your application",
    )
    parser.add_argument(
        "--yes", "-y",
        action="store_true",
        help="Skip prompts and use defaults where applicable",
    )
    parser.add_argument(
        "--force", "-f",
        action="store_true",
        help="Force create the directory even if it is not empty",
    )
    parser.add_argument(
        "--velox-path",
        default=None,
        help="Use a local Velox checkout (path) instead of the GitHub dependency",
    )
    parser.add_argument(
        "--templates-dir",
        type=Path,
        default=None,
        help="Directory containing template-<name> folders (default: bundled templates)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Print template data and per-file progress",
    )
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point for ``create-velox-app``."""
    args = build_parser().parse_args(argv)
    setup_logging(args.verbose)

    config = Config.from_env(
        project_name=args.project_name,
        template=args.template,
        identifier=args.identifier,
        yes=args.yes,
        force=args.force,
        velox_path=args.velox_path,
        templates_dir=args.templates_dir,
        verbose=args.verbose,
    )

    try:
        exit_code = run(config)
    except TemplateError as exc:
        print_error(str(exc))
        sys.exit(1)

    if exit_code:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
