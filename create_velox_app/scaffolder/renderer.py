"""Directory rendering for project scaffolding.

Provides the TemplateRenderer class which walks a template source tree and
materialises it into a destination directory.  Every path segment is
rendered through the LTE engine; files ending in the template suffix have
their contents rendered too, everything else is copied byte-for-byte.

Rendering is fail-fast and not transactional: the first error aborts the
walk and whatever was already written stays on disk.
"""

from __future__ import annotations

import logging
import shutil
from collections.abc import Mapping
from pathlib import Path

from pydantic import BaseModel, Field

from create_velox_app.lte import render
from create_velox_app.lte.errors import TemplateIOError, TemplateNotFoundError


logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Template directory discovery
# ---------------------------------------------------------------------------

_DEFAULT_TEMPLATE_DIR = Path(__file__).parent / "templates"
TEMPLATE_DIR_PREFIX = "template-"


def list_templates(templates_dir: str | Path | None = None) -> list[str]:
    """Return the sorted names of all templates under *templates_dir*.

    A template is a directory named ``template-<name>``; the prefix is not
    part of the returned name.
    """
    root = Path(templates_dir) if templates_dir is not None else _DEFAULT_TEMPLATE_DIR
    if not root.is_dir():
        return []
    return sorted(
        p.name[len(TEMPLATE_DIR_PREFIX):]
        for p in root.iterdir()
        if p.is_dir() and p.name.startswith(TEMPLATE_DIR_PREFIX)
    )


def template_path(name: str, templates_dir: str | Path | None = None) -> Path:
    """Resolve the source directory of the template called *name*.

    Raises:
        TemplateNotFoundError: If no such template directory exists.
    """
    root = Path(templates_dir) if templates_dir is not None else _DEFAULT_TEMPLATE_DIR
    path = root / f"{TEMPLATE_DIR_PREFIX}{name}"
    if not path.is_dir():
        raise TemplateNotFoundError(name, path)
    return path


# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

class RendererConfig(BaseModel):
    """Filename conventions applied while rendering a template tree."""

    template_suffix: str = Field(
        default=".lte",
        description="Files ending in this suffix have it stripped and their content rendered",
    )
    module_placeholder: str = Field(
        default="__swift_module_name__",
        description="Literal token replaced in path segments before rendering",
    )
    module_binding: str = Field(
        default="swift_module_name",
        description="Binding whose value replaces the module placeholder",
    )
    renames: dict[str, str] = Field(
        default_factory=lambda: {"_gitignore": ".gitignore"},
        description="Exact file names rewritten in the destination",
    )
    ignored_names: frozenset[str] = Field(
        default=frozenset({".DS_Store", "Thumbs.db"}),
        description="OS-generated metadata files that are never copied",
    )


# ---------------------------------------------------------------------------
# TemplateRenderer
# ---------------------------------------------------------------------------

class TemplateRenderer:
    """Renders a template tree with a fixed binding map.

    The renderer holds no state besides its bindings and configuration, so
    the same instance can render several trees.  It does no locking: two
    renders into the same destination at once are not supported.
    """

    def __init__(
        self,
        bindings: Mapping[str, str],
        config: RendererConfig | None = None,
    ) -> None:
        self.bindings = dict(bindings)
        self.config = config or RendererConfig()

    # -- String rendering --------------------------------------------------

    def render_string(self, template: str) -> str:
        """Render an inline template string with the renderer's bindings."""
        return render(template, self.bindings)

    def render_path_component(self, segment: str) -> str:
        """Render a single path segment.

        The module placeholder is substituted literally first; it is left
        alone when the module binding is not supplied.  The result then goes
        through the template engine like any other text.
        """
        module_name = self.bindings.get(self.config.module_binding)
        if module_name is not None:
            segment = segment.replace(self.config.module_placeholder, module_name)
        return self.render_string(segment)

    def render_file_name(self, name: str) -> tuple[str, bool]:
        """Compute the destination name of a file.

        Returns:
            ``(destination_name, is_template)`` where *is_template* says
            whether the file's content must be rendered rather than copied.
        """
        module_name = self.bindings.get(self.config.module_binding)
        if module_name is not None:
            name = name.replace(self.config.module_placeholder, module_name)

        name = self.config.renames.get(name, name)

        suffix = self.config.template_suffix
        is_template = bool(suffix) and name.endswith(suffix)
        if is_template:
            name = name[: -len(suffix)]

        return self.render_string(name), is_template

    # -- File-based rendering ----------------------------------------------

    def render_to_file(self, source: Path, output_path: Path) -> Path:
        """Render the content of *source* and write it to *output_path*.

        The file is read and written as UTF-8 bytes so line endings survive
        unchanged.
        """
        try:
            content = source.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise TemplateIOError(f"Failed to read template {source}: {exc}", source) from exc

        rendered = self.render_string(content)

        try:
            output_path.write_bytes(rendered.encode("utf-8"))
        except OSError as exc:
            raise TemplateIOError(f"Failed to write {output_path}: {exc}", output_path) from exc
        return output_path

    def copy_to_file(self, source: Path, output_path: Path) -> Path:
        """Copy *source* to *output_path* without interpretation."""
        try:
            shutil.copyfile(source, output_path)
        except OSError as exc:
            raise TemplateIOError(f"Failed to copy {source}: {exc}", source) from exc
        return output_path

    def render_tree(self, source_root: str | Path, output_dir: str | Path) -> list[Path]:
        """Render every entry under *source_root* into *output_dir*.

        The tree is walked depth-first in name order.  Directory names are
        rendered and recreated (empty ones included); each file is rendered
        or copied according to its name.

        Args:
            source_root: Root of the template tree.
            output_dir: Destination root; created if missing.

        Returns:
            Paths of the written files, in write order.

        Raises:
            TemplateError: Any lexing, parsing, lookup or filesystem failure.
                Files written before the failure are left in place.
        """
        root = Path(source_root)
        if not root.is_dir():
            raise TemplateIOError(f"Template directory not found: {root}", root)

        out_base = Path(output_dir)
        _make_dir(out_base)

        written: list[Path] = []
        self._render_directory(root, out_base, written)
        return written

    def _render_directory(self, directory: Path, output_dir: Path, written: list[Path]) -> None:
        try:
            entries = sorted(directory.iterdir(), key=lambda p: p.name)
        except OSError as exc:
            raise TemplateIOError(f"Failed to list {directory}: {exc}", directory) from exc

        for entry in entries:
            if entry.name in self.config.ignored_names:
                logger.debug("Skipping %s", entry)
                continue

            if entry.is_dir():
                target = output_dir / self.render_path_component(entry.name)
                _make_dir(target)
                self._render_directory(entry, target, written)
                continue

            file_name, is_template = self.render_file_name(entry.name)
            target = output_dir / file_name
            if is_template:
                logger.debug("Rendering %s -> %s", entry, target)
                written.append(self.render_to_file(entry, target))
            else:
                logger.debug("Copying %s -> %s", entry, target)
                written.append(self.copy_to_file(entry, target))


def render_template(
    name: str,
    output_dir: str | Path,
    bindings: Mapping[str, str],
    *,
    templates_dir: str | Path | None = None,
    config: RendererConfig | None = None,
) -> list[Path]:
    """Render the bundled template called *name* into *output_dir*."""
    source = template_path(name, templates_dir)
    logger.info("Rendering template '%s' into %s", name, output_dir)
    return TemplateRenderer(bindings, config).render_tree(source, output_dir)


# ---------------------------------------------------------------------------
# Internal helpers
# ---------------------------------------------------------------------------

def _make_dir(path: Path) -> None:
    """Create *path* and its parents, converting failures to TemplateIOError."""
    try:
        path.mkdir(parents=True, exist_ok=True)
    except OSError as exc:
        raise TemplateIOError(f"Failed to create directory {path}: {exc}", path) from exc
