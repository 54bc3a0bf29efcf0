"""Render templates and write generated output.

Takes the context from context_builder and produces one handlers file per
module plus a module index. Rendering returns artifacts; only
``write_artifacts`` touches the file system.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jinja2

from .errors import ScaffoldError
from .report import Reporter

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass(frozen=True)
class TargetLayout:
    handlers_template: str
    index_template: str
    handlers_path: str  # formatted with module=<slug>
    index_path: str


TARGETS: dict[str, TargetLayout] = {
    "fastapi": TargetLayout(
        handlers_template="fastapi/handlers.py.j2",
        index_template="fastapi/__init__.py.j2",
        handlers_path="src/{module}/handlers.py",
        index_path="src/__init__.py",
    ),
    "axum": TargetLayout(
        handlers_template="axum/handlers.rs.j2",
        index_template="axum/mod.rs.j2",
        handlers_path="src/{module}/handlers.rs",
        index_path="src/mod.rs",
    ),
}


@dataclass(frozen=True)
class Artifact:
    path: str
    content: str

    @property
    def line_count(self) -> int:
        return len(self.content.splitlines())


def quote(value: Any) -> str:
    """Double-quoted string literal, valid in both Python and Rust sources."""
    return json.dumps(str(value), ensure_ascii=False)


def make_environment(template_dir: Path = TEMPLATE_DIR) -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(template_dir)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["quote"] = quote
    return env


def render_artifacts(
    context: dict[str, Any], env: jinja2.Environment | None = None,
) -> list[Artifact]:
    """Render every artifact for the context's target. Writes nothing."""
    target = context["target"]
    layout = TARGETS.get(target)
    if layout is None:
        raise ScaffoldError(f"no templates for target {target!r}")

    env = env or make_environment()
    try:
        handlers = env.get_template(layout.handlers_template)
        index = env.get_template(layout.index_template)
    except jinja2.TemplateNotFound as exc:
        raise ScaffoldError(f"missing template {exc.name}") from exc

    artifacts = []
    for module in context["modules"]:
        content = handlers.render(**context, module=module)
        artifacts.append(Artifact(layout.handlers_path.format(module=module.slug), content))
    artifacts.append(Artifact(layout.index_path, index.render(**context)))

    logger.info("Rendered %d artifacts for target %s", len(artifacts), target)
    return artifacts


def write_artifacts(
    artifacts: list[Artifact], output_dir: Path | str, reporter: Reporter | None = None,
) -> Reporter:
    """Write artifacts under output_dir and record them in the reporter."""
    reporter = reporter if reporter is not None else Reporter()
    root = Path(output_dir)
    for artifact in artifacts:
        output_path = root / artifact.path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(artifact.content, encoding="utf-8")
        reporter.record_file(output_path, artifact.line_count)
        logger.debug("Wrote %s (%d lines)", output_path, artifact.line_count)
    return reporter


def generate(context: dict[str, Any], output_dir: Path | str) -> Reporter:
    """Render the templates for the context and write them to output_dir."""
    return write_artifacts(render_artifacts(context), output_dir)
