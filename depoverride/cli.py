"""Click CLI for depoverride: apply, check, show."""

from __future__ import annotations

import logging
import sys
from pathlib import Path
from typing import Optional

import click
from pydantic import ValidationError

from depoverride import __version__
from depoverride.config import OverrideSettings, load_config
from depoverride.extension import DepVersionOverride
from depoverride.logging import configure_logging, get_logger, new_correlation_id, timed_operation
from depoverride.model.pom import PomError, load_pom, render_pom
from depoverride.model.schema import ModelBuildingRequest, ModelBuildingResult
from depoverride.model.serializer import serialize_model
from depoverride.overrides.loader import load_overrides
from depoverride.overrides.properties import parse_property_args, properties_by_prefix
from depoverride.overrides.table import OverrideTableBuilder
from depoverride.overrides.validator import validate_overrides


pom_option = click.option(
    "--pom",
    type=click.Path(path_type=Path),
    default="pom.xml",
    help="Path to the pom.xml to rewrite.",
)
define_option = click.option(
    "-D",
    "--define",
    "defines",
    multiple=True,
    metavar="NAME=VALUE",
    help="Property assignment, e.g. -Dversion:junit:junit=4.10. Repeatable.",
)
overrides_option = click.option(
    "--overrides",
    type=click.Path(path_type=Path),
    default=None,
    help="YAML file of override properties (applied before -D).",
)


@click.group()
@click.version_option(version=__version__, prog_name="depoverride")
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
@click.option("--json-logs", is_flag=True, help="Output structured JSON logs.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(path_type=Path),
    default="depoverride.yml",
    help="Path to depoverride.yml settings.",
)
@click.pass_context
def depoverride(ctx: click.Context, verbose: bool, json_logs: bool, config_path: Path):
    """Override dependency versions in a build model."""
    try:
        settings = load_config(config_path)
    except ValidationError as e:
        raise click.ClickException(f"Invalid settings in {config_path}:\n{e}")

    new_correlation_id()
    level = logging.DEBUG if verbose else settings.level
    configure_logging(level, structured=json_logs or settings.structured_logs)
    ctx.obj = settings


def _collect_properties(overrides: Optional[Path], defines: tuple[str, ...]) -> dict[str, str]:
    """Merge the overrides file and -D assignments; -D wins."""
    properties: dict[str, str] = {}
    try:
        if overrides is not None:
            if not overrides.exists():
                raise FileNotFoundError(f"Overrides file not found: {overrides}")
            properties.update(load_overrides(overrides))
        properties.update(parse_property_args(defines))
    except (FileNotFoundError, ValueError) as e:
        raise click.ClickException(str(e))
    return properties


def _load_pom(pom: Path):
    try:
        return load_pom(pom)
    except (FileNotFoundError, PomError) as e:
        raise click.ClickException(str(e))


@depoverride.command()
@pom_option
@define_option
@overrides_option
@click.option(
    "-o",
    "--output",
    type=click.Path(path_type=Path),
    default=None,
    help="Write the rewritten model here instead of stdout.",
)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["pom", "json"]),
    default=None,
    help="Output format (default from settings: pom).",
)
@click.pass_obj
def apply(
    settings: OverrideSettings,
    pom: Path,
    defines: tuple[str, ...],
    overrides: Optional[Path],
    output: Optional[Path],
    output_format: Optional[str],
):
    """Apply version overrides to a POM's dependencies."""
    log = get_logger("cli")
    properties = _collect_properties(overrides, defines)
    model, tree = _load_pom(pom)

    request = ModelBuildingRequest(properties=properties, pom_file=pom)
    result = ModelBuildingResult(effective_model=model)

    with timed_operation(log, "rewrite", dependency_count=len(model.dependencies)) as ctx:
        modifier = DepVersionOverride(request.properties, settings)
        result = modifier.modify_build(request, result)
        ctx["override_count"] = len(modifier.table)

    fmt = output_format or settings.output_format
    if fmt == "json":
        text = serialize_model(result.effective_model) + "\n"
    else:
        text = render_pom(tree, result.effective_model)

    if output is not None:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text, encoding="utf-8")
        click.echo(f"Written: {output}", err=True)
    else:
        click.echo(text, nl=False)

    report = modifier.rewriter.report
    for change in report.changed:
        click.echo(
            f"  changed  {change.dependency.management_key}: {change.old_version} -> {change.new_version}",
            err=True,
        )
    for dep in report.injected:
        click.echo(f"  added    {dep.coordinates}", err=True)
    if modifier.builder.malformed:
        click.echo(f"  skipped {len(modifier.builder.malformed)} malformed override(s)", err=True)


@depoverride.command()
@pom_option
@define_option
@overrides_option
@click.pass_obj
def check(settings: OverrideSettings, pom: Path, defines: tuple[str, ...], overrides: Optional[Path]):
    """Check overrides against a POM without rewriting it."""
    properties = _collect_properties(overrides, defines)
    model, _ = _load_pom(pom)

    issues = validate_overrides(properties, model, settings)
    if not issues:
        click.secho("All overrides match existing dependencies.", fg="green")
        return

    colors = {"info": "cyan", "warning": "yellow", "error": "red"}
    for issue in issues:
        click.secho(f"[{issue.level.upper()}] {issue.message}", fg=colors.get(issue.level))
        if issue.override_key:
            click.echo(f"  Key: {issue.override_key}")

    if any(issue.level == "error" for issue in issues):
        sys.exit(1)


@depoverride.command()
@define_option
@overrides_option
@click.pass_obj
def show(settings: OverrideSettings, defines: tuple[str, ...], overrides: Optional[Path]):
    """Print the override table parsed from the given properties."""
    properties = _collect_properties(overrides, defines)
    builder = OverrideTableBuilder(settings.separator)
    table = builder.build(properties_by_prefix(properties, settings.prefix))

    if not table:
        click.echo("No version overrides.")
    for entry in table.entries():
        click.echo(f"{entry.key}={entry.version}")
    for name in builder.malformed:
        click.secho(f"malformed: {settings.prefix}{name}", fg="red")


if __name__ == "__main__":
    depoverride()
