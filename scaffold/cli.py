"""CLI entry point for the scaffold generator."""

from __future__ import annotations

import logging
from pathlib import Path

import click

from .codegen import TARGETS, generate
from .config import ScaffoldConfig
from .context_builder import build_context
from .document import parse_document
from .errors import ScaffoldError
from .loader import load_spec


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@click.command()
@click.option("-i", "--input", "input_path", required=True, type=click.Path(path_type=Path), help="Path to the OpenAPI JSON or YAML file.")
@click.option("-o", "--output", "output_dir", default="gen", show_default=True, type=click.Path(path_type=Path), help="Output directory for generated files.")
@click.option("--target", default=None, type=click.Choice(sorted(TARGETS)), help="Code generation target (default: $SCAFFOLD_TARGET or fastapi).")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def main(input_path: Path, output_dir: Path, target: str | None, verbose: bool):
    """Generate server scaffold code from an OpenAPI specification."""
    try:
        config = ScaffoldConfig.from_env().with_overrides(
            target=target, log_level="DEBUG" if verbose else None,
        )
        _configure_logging(config.log_level)

        spec = load_spec(input_path)
        document = parse_document(spec)
        context = build_context(document, config)
        reporter = generate(context, output_dir)
    except (ScaffoldError, OSError) as exc:
        raise click.ClickException(str(exc)) from exc

    click.echo(reporter.render())
    click.echo(
        f"Generated {config.target} scaffold in {output_dir} "
        f"({context['route_count']} routes, {len(context['modules'])} modules)"
    )


if __name__ == "__main__":
    main()
