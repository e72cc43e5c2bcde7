"""jobartifact CLI."""

import logging
from pathlib import Path
from typing import NoReturn

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from jobartifact.config import JobArtifactConfig, get_config_template, load_config
from jobartifact.errors import JobArtifactError
from jobartifact.parameter import ArtifactParameterDescriptor
from jobartifact.resolver import ArtifactPathResolver
from jobartifact.store import BuildStore, FilesystemBuildStore, SQLiteBuildStore

app = typer.Typer(help="jobartifact - pick archived artifacts of other jobs as build parameters")
console = Console()
err_console = Console(stderr=True)

CONFIG_FILE = "jobartifact.yaml"


def setup_logging(verbose: bool = False):
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, rich_tracebacks=True)],
    )


def fail(message: str) -> NoReturn:
    err_console.print(f"[red]Error:[/red] {message}")
    raise typer.Exit(1)


@app.callback()
def main(
    ctx: typer.Context,
    config: Path = typer.Option(Path(CONFIG_FILE), "--config", "-c", help="Config file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logging"),
):
    setup_logging(verbose)
    ctx.obj = config


def get_config(ctx: typer.Context) -> JobArtifactConfig:
    config_path: Path = ctx.obj
    if not config_path.exists():
        fail(f"{config_path} not found. Run 'jobartifact init' first.")
    try:
        return load_config(config_path)
    except (ValueError, yaml.YAMLError) as e:
        fail(f"Invalid config {config_path}: {e}")


def get_store(config: JobArtifactConfig) -> BuildStore:
    """Open the build store named by the config."""
    if config.store.type == "sqlite":
        db_path = Path(config.store.db_path)
        if not db_path.exists():
            fail(f"Database {db_path} not found.")
        return SQLiteBuildStore(db_path)

    root = Path(config.store.root)
    if not root.is_dir():
        fail(f"Store root {root} is not a directory.")
    return FilesystemBuildStore(root)


def build_resolver(config: JobArtifactConfig) -> ArtifactPathResolver:
    return ArtifactPathResolver(
        get_store(config),
        recent_days=config.builds.recent_days,
        min_builds=config.builds.min_builds,
    )


@app.command()
def init(ctx: typer.Context):
    """Write a configuration template."""
    config_path: Path = ctx.obj

    if config_path.exists():
        console.print(f"[yellow]Warning:[/yellow] {config_path} already exists.")
        if not typer.confirm("Overwrite?"):
            raise typer.Exit(0)

    config_path.write_text(get_config_template())
    console.print(f"[green]Created {config_path}.[/green]")
    console.print("Edit it to point at your build store and define parameters.")


@app.command()
def jobs(
    ctx: typer.Context,
    exclude: str = typer.Option("", "--exclude", "-x", help="Job to leave out"),
):
    """List jobs."""
    resolver = build_resolver(get_config(ctx))
    for name in resolver.list_other_jobs(exclude):
        typer.echo(name)


@app.command()
def builds(
    ctx: typer.Context,
    job: str = typer.Argument(..., help="Job name"),
):
    """List recent completed builds of a job."""
    resolver = build_resolver(get_config(ctx))
    try:
        numbers = resolver.list_builds_of(job)
        table = Table(title=job)
        table.add_column("#")
        table.add_column("Artifacts")
        for number in numbers:
            table.add_row(str(number), str(len(resolver.list_artifacts_of(job, number))))
    except JobArtifactError as e:
        fail(str(e))

    if not numbers:
        console.print(f"No completed builds for {job}.")
        return
    console.print(table)


@app.command()
def artifacts(
    ctx: typer.Context,
    job: str = typer.Argument(..., help="Job name"),
    build: str = typer.Argument(..., help="Build number"),
):
    """List artifacts archived by a build."""
    resolver = build_resolver(get_config(ctx))
    try:
        names = resolver.list_artifacts_of(job, build)
    except JobArtifactError as e:
        fail(str(e))

    for name in names:
        typer.echo(name)


@app.command()
def resolve(
    ctx: typer.Context,
    job: str = typer.Argument(..., help="Job name"),
    build: str = typer.Argument(..., help="Build number"),
    artifact: str = typer.Argument(..., help="Artifact path relative to the archive"),
):
    """Print the absolute path of an archived artifact."""
    resolver = build_resolver(get_config(ctx))
    try:
        paths = resolver.resolve(job, build, artifact)
    except JobArtifactError as e:
        fail(str(e))

    for path in paths:
        typer.echo(path)


@app.command()
def value(
    ctx: typer.Context,
    owner: str = typer.Argument(..., help="Job that defines the parameter"),
    param: str = typer.Argument(..., help="Parameter name"),
    build: str = typer.Argument(..., help="Build number of the source job"),
    artifact: str = typer.Argument(..., help="Artifact path relative to the archive"),
):
    """Bind an artifact parameter and print its environment variables."""
    config = get_config(ctx)
    descriptor = ArtifactParameterDescriptor(build_resolver(config))

    try:
        definition = config.find_parameter(owner, param).to_definition()
        paths = descriptor.fill_value_items(definition.job_name, build, artifact)
        if not paths:
            fail(f"Could not resolve {artifact} from {definition.job_name} #{build}")
        bound = definition.create_value({"name": definition.name, "value": paths[0]})
    except JobArtifactError as e:
        fail(str(e))

    for key, val in bound.build_env_vars().items():
        typer.echo(f"{key}={val}")


if __name__ == "__main__":
    app()
