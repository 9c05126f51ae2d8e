"""Command-line interface for sossdocs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Annotated

import click
import typer

from . import context
from .config import discover_config
from .document import DocumentGenerator
from .exceptions import SossDocsError
from .loader import load_crate
from .logger import get_logger, setup_logger
from .rules import ProfileValidator
from .sections import ProvenanceInfo, detect_git_branch

app = typer.Typer(
    name="soss-docs",
    help="Generate documentation for SoSS+ RO-Crate profiles and validate crates against them",
    add_completion=False,
)

VALIDATE_USAGE = "Usage: soss-docs validate [--json] <target-crate.json> <profile-crate.json>"


@app.callback()
def main_callback(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            help="Verbosity level: 0=warnings (default), 1=progress, 2=checks, 3=debug",
            min=0,
            max=3,
        ),
    ] = 0,
    config: Annotated[
        Path | None,
        typer.Option(
            "--config",
            "-c",
            help="Path to config file (default: soss_config.yaml)",
        ),
    ] = None,
) -> None:
    """Global options for soss-docs commands."""
    setup_logger(verbose)
    context.set_config_path(config)


@app.command()
def generate(
    profile: Annotated[
        Path | None,
        typer.Argument(help="Path to the profile crate (ro-crate-metadata.json)"),
    ] = None,
    template: Annotated[
        Path | None,
        typer.Argument(help="Path to the markdown template"),
    ] = None,
    output: Annotated[
        Path | None,
        typer.Argument(help="Output file (default: profile-documentation.md beside the profile)"),
    ] = None,
) -> None:
    """Generate markdown documentation from a profile crate."""
    logger = get_logger()
    try:
        config = discover_config(profile)
        profile_path = profile or config.default_profile_path
        template_path = template or config.default_template_path
        output_path = output or profile_path.parent / config.output_filename

        profile_graph = load_crate(profile_path)
        logger.progress(f"Reading template from: {template_path}")
        template_text = template_path.read_text(encoding="utf-8")

        provenance = ProvenanceInfo(
            template_path=template_path,
            profile_path=profile_path,
            branch=detect_git_branch(config),
        )
        generator = DocumentGenerator(
            profile_graph, ProfileValidator(profile_graph, config), config, provenance
        )
        doc_output = generator.generate(template_text)

        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(doc_output, encoding="utf-8")
    except (SossDocsError, OSError, UnicodeDecodeError) as e:
        typer.echo(f"Error generating documentation: {e}", err=True)
        raise typer.Exit(1) from e

    typer.echo(f"Documentation generated successfully: {output_path}")


@app.command()
def validate(
    target: Annotated[
        Path | None,
        typer.Argument(help="Path to the crate to validate"),
    ] = None,
    profile: Annotated[
        Path | None,
        typer.Argument(help="Path to the profile crate"),
    ] = None,
    *,
    json_output: Annotated[
        bool,
        typer.Option("--json", help="Print the full validation result as JSON"),
    ] = False,
) -> None:
    """Validate a crate against a profile crate.

    Exits 0 when the crate conforms, 2 when validation errors were found and
    1 when the inputs could not be loaded.
    """
    if target is None or profile is None:
        typer.echo(VALIDATE_USAGE, err=True)
        raise typer.Exit(1)

    try:
        target_graph = load_crate(target)
        profile_graph = load_crate(profile)
        validator = ProfileValidator(profile_graph, discover_config(profile))
        report = validator.validate_crate(target_graph)
    except SossDocsError as e:
        typer.echo(f"Validation failed: {e}", err=True)
        raise typer.Exit(1) from e

    if json_output:
        typer.echo(report.model_dump_json(indent=2))
    else:
        for finding in [*report.error, *report.warning]:
            typer.echo(f"[{finding.level.upper()}] {finding.message}")
        if report.passed and report.warning:
            typer.echo(f"Validation passed with {len(report.warning)} warning(s).")
        elif report.passed:
            typer.echo("Validation passed: No issues found.")

    if not report.passed:
        raise typer.Exit(2)


def main(argv: list[str] | None = None) -> int:
    """Main entry point.

    Returns the process exit code. Usage errors map to 1, since 2 means the
    validated crate has errors.
    """
    try:
        result = app(args=argv, prog_name="soss-docs", standalone_mode=False)
    except click.UsageError as e:
        e.show()
        return 1
    except click.Abort:
        typer.echo("Aborted!", err=True)
        return 1
    return result if isinstance(result, int) else 0


if __name__ == "__main__":
    sys.exit(main())
