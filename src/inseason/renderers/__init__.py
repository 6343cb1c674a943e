"""Rendering of task reports: report -> Markdown, HTML or JSON text.

Renderers are pure: they take a :class:`~inseason.engine.report.TaskReport`
and return a string. Writing the result is the runner's job.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import jinja2

from .anchors import AnchorSequence

_TEMPLATE_DIR = Path(__file__).resolve().parent.parent / "templates"
_jinja_env = jinja2.Environment(
    loader=jinja2.FileSystemLoader(str(_TEMPLATE_DIR)),
    autoescape=jinja2.select_autoescape(["html", "html.j2"]),
    trim_blocks=True,
    lstrip_blocks=True,
    keep_trailing_newline=True,
)

TEMPLATES = {
    "markdown": "report.md.j2",
    "html": "report.html.j2",
}


def render_template(template_name: str, **kwargs: Any) -> str:
    """Render a Jinja2 template by name."""
    return _jinja_env.get_template(template_name).render(**kwargs)


def render_report(report: Any, fmt: str = "markdown") -> str:
    if fmt == "json":
        return json.dumps(report.as_dict(), indent=2)
    try:
        template_name = TEMPLATES[fmt]
    except KeyError:
        raise ValueError(f"unsupported output format: {fmt}") from None
    return render_template(
        template_name,
        report=report,
        data=report.as_dict(),
        anchors=AnchorSequence(report.title),
    )


__all__ = ["AnchorSequence", "TEMPLATES", "render_report", "render_template"]
