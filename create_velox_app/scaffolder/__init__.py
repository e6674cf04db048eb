"""Velox project scaffolder -- renders a bundled template tree to disk.

Quick usage::

    from create_velox_app.scaffolder import render_template

    render_template(
        "vanilla",
        "/tmp/my-app",
        {"project_name": "my-app", "swift_module_name": "MyApp", ...},
    )
"""

from create_velox_app.scaffolder.renderer import (
    RendererConfig,
    TemplateRenderer,
    list_templates,
    render_template,
    template_path,
)

__all__ = [
    "RendererConfig",
    "TemplateRenderer",
    "list_templates",
    "render_template",
    "template_path",
]
