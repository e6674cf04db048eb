"""create-velox-app configuration.

Typed configuration for a single scaffolding run.  All settings use Pydantic
v2 models so they are validated at construction time and can be built from
command-line arguments or environment variables without boiler-plate.
"""

from __future__ import annotations

import getpass
import os
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, Field

from create_velox_app.utils import (
    is_valid_package_name,
    to_pascal_case,
    to_valid_package_name,
)

CURRENT_DIR = "."


class Defaults(BaseModel):
    """Fallback values used when the user skips a prompt."""

    project_name: str = Field(default="velox-app")
    velox_url: str = Field(default="https://github.com/velox-apps/velox")
    velox_branch: str = Field(default="main")

    def identifier(self, package_name: str) -> str:
        """Default reverse-DNS identifier, e.g. ``com.jane.my-app``."""
        try:
            user = getpass.getuser()
        except (KeyError, OSError):
            user = ""
        return f"com.{to_valid_package_name(user)}.{package_name}"


class Config(BaseModel):
    """Settings for one create-velox-app invocation.

    ``project_name`` of ``"."`` scaffolds into ``cwd`` itself.  ``None``
    means "not given on the command line"; the CLI then prompts or falls
    back to :class:`Defaults`.
    """

    project_name: Optional[str] = Field(default=None)
    template: str = Field(default="vanilla")
    identifier: Optional[str] = Field(default=None)
    yes: bool = Field(default=False, description="Skip prompts and use defaults")
    force: bool = Field(default=False, description="Overwrite a non-empty target directory")
    velox_path: Optional[str] = Field(
        default=None, description="Local Velox checkout used instead of the GitHub dependency"
    )
    cwd: Path = Field(default_factory=Path.cwd)
    templates_dir: Optional[Path] = Field(
        default=None, description="Alternative root containing template-<name> directories"
    )
    run_bootstrap: bool = Field(default=True, description="Run `make bootstrap` on macOS")
    verbose: bool = Field(default=False)
    defaults: Defaults = Field(default_factory=Defaults)

    # ------------------------------------------------------------------
    # Derived values (read-only properties)
    # ------------------------------------------------------------------

    @property
    def resolved_project_name(self) -> str:
        return self.project_name or self.defaults.project_name

    @property
    def is_current_dir(self) -> bool:
        """True when scaffolding into the working directory itself."""
        return self.resolved_project_name == CURRENT_DIR

    @property
    def project_dir(self) -> Path:
        """Directory the template is rendered into."""
        if self.is_current_dir:
            return self.cwd
        return self.cwd / self.resolved_project_name

    @property
    def display_name(self) -> str:
        """Human-facing project name (the cwd name for ``"."``)."""
        if self.is_current_dir:
            return self.cwd.name
        return self.resolved_project_name

    @property
    def package_name(self) -> str:
        name = self.display_name
        return name if is_valid_package_name(name) else to_valid_package_name(name)

    @property
    def swift_module_name(self) -> str:
        return to_pascal_case(self.display_name)

    @property
    def velox_dependency(self) -> str:
        """SwiftPM dependency declaration for Velox."""
        if self.velox_path:
            return f'.package(path: "{self.velox_path}")'
        return (
            f'.package(url: "{self.defaults.velox_url}", '
            f'branch: "{self.defaults.velox_branch}")'
        )

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls, **overrides: Any) -> "Config":
        """Build a ``Config`` from environment variables plus *overrides*.

        Recognised variables (all optional):
            VELOX_TEMPLATES_DIR, VELOX_PATH, VELOX_SKIP_BOOTSTRAP.

        Keyword overrides whose value is ``None`` are ignored so argparse
        results can be passed straight through.
        """
        values: dict[str, Any] = {}
        if os.environ.get("VELOX_TEMPLATES_DIR"):
            values["templates_dir"] = Path(os.environ["VELOX_TEMPLATES_DIR"])
        if os.environ.get("VELOX_PATH"):
            values["velox_path"] = os.environ["VELOX_PATH"]
        if os.environ.get("VELOX_SKIP_BOOTSTRAP", "").lower() in ("1", "true", "yes"):
            values["run_bootstrap"] = False

        values.update({key: value for key, value in overrides.items() if value is not None})
        return cls(**values)


def build_template_data(config: Config, identifier: str) -> dict[str, str]:
    """Build the binding map handed to the template renderer."""
    return {
        "project_name": config.display_name,
        "package_name": config.package_name,
        "identifier": identifier,
        "swift_module_name": config.swift_module_name,
        "velox_dependency": config.velox_dependency,
        "velox_local": "true" if config.velox_path else "false",
    }
