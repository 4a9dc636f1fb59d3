from __future__ import annotations

import json
import logging

import typer

from .config import AppConfig
from .container import Container
from .cli_formatter import format_manifest_check, format_pipeline_result
from ..infra.logging import run_log_path

try:
    from dotenv import load_dotenv
    load_dotenv()
except ImportError:
    pass

app = typer.Typer(add_completion=False, no_args_is_help=True)


def _build_container(config: AppConfig) -> Container:
    container = Container()
    container.config.from_pydantic(config)
    container.init_resources()
    return container


@app.command()
def analyze(
    owner: str = typer.Argument(..., help="Repository owner (user or organization)"),
    repo: str = typer.Argument(..., help="Repository name"),
    explain: bool = typer.Option(True, "--explain/--no-explain", help="Ask the LLM to explain the score"),
    log_level: str = typer.Option("INFO", "--log-level", help="Log level", case_sensitive=False),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Do not mirror the run log to the console"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Compute the Application Readiness Index of a GitHub repository."""
    level = logging.getLevelName(log_level.upper())
    logging.basicConfig(level=level if isinstance(level, int) else logging.INFO, format='%(levelname)s: %(message)s', force=True)

    target = f"{owner}/{repo}"
    config = AppConfig().for_run(target, console_output=not (quiet or json_output), level=log_level)
    if not explain:
        config = config.model_copy(update={"analysis": config.analysis.model_copy(update={"explain": False})})

    log_file = run_log_path(config.directories.logs_dir, target)
    if not json_output:
        typer.echo(f"Starting analysis: {target}")
        typer.echo(f"Log file: {log_file}")
        if explain and not config.llm.api_key:
            typer.echo("Note: ARI_CHECKER_LLM__API_KEY is not set; the explanation will be skipped.", err=True)

    container = _build_container(config)
    try:
        result = container.analyze_uc().execute(owner=owner, repo=repo)
    finally:
        # Always shutdown resources to close file handles
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps(result.to_dict(), ensure_ascii=False, indent=2))
    else:
        typer.echo(format_pipeline_result(result))

    if not result.is_valid:
        raise typer.Exit(code=1)


@app.command()
def validate(
    owner: str = typer.Argument(..., help="Repository owner"),
    repo: str = typer.Argument(..., help="Repository name"),
    branch: str | None = typer.Option(None, "--branch", "-b", help="Branch to inspect (default: main)"),
    json_output: bool = typer.Option(False, "--json", help="Output result as JSON"),
):
    """Check through the GitHub API that a repository has a valid package.json."""
    container = _build_container(AppConfig())
    try:
        check = container.validate_uc().execute(owner=owner, repo=repo, branch=branch)
    finally:
        container.shutdown_resources()

    if json_output:
        typer.echo(json.dumps(check.to_dict(), ensure_ascii=False, indent=2))
    else:
        typer.echo(format_manifest_check(f"{owner}/{repo}", check))

    if not check.is_valid:
        raise typer.Exit(code=1)


@app.command()
def logs(
    target: str | None = typer.Argument(None, help="owner/repo to show; omit for a summary of all runs"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Raw records for a target, degradation notes for the summary"),
):
    """Show analysis run logs."""
    container = _build_container(AppConfig())
    try:
        lines = container.logs_uc().execute(target, verbose)
    except FileNotFoundError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)
    finally:
        container.shutdown_resources()

    for line in lines:
        typer.echo(line)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
