"""
CLI for handbook tooling.

Verifies internal links, checks navigation indexes and inspects the link
graph of a Markdown handbook.

Usage:
    handbook verify-links
    handbook verify-links path/to/handbook --check-anchors
    handbook check --strict
    handbook nav render guides --name CLAUDE.md --write
"""

import functools
import json
from pathlib import Path

import click
from pydantic import ValidationError
from rich.console import Console
from rich.table import Table

from handbook_tools import __version__
from handbook_tools.checks.base import CheckResult
from handbook_tools.errors import HandbookError, InvalidConfigError
from handbook_tools.logging import LogContext, configure_logging, get_logger
from handbook_tools.orchestrator import HandbookOrchestrator
from handbook_tools.renderers import LinkReportRenderer, NavigationIndexRenderer
from handbook_tools.settings import HandbookSettings

console = Console()
err_console = Console(stderr=True)
logger = get_logger(__name__)

root_argument = click.argument(
    "root",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)


def handle_errors(func):
    """Report HandbookError on stderr and exit with status 2."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        ctx = click.get_current_context()
        try:
            with LogContext(command=ctx.info_name):
                return func(*args, **kwargs)
        except HandbookError as e:
            logger.error("command_failed", **e.to_dict())
            err_console.print(f"[bold red]Error:[/bold red] {e.message}", highlight=False)
            ctx.exit(2)

    return wrapper


def _orchestrator(ctx: click.Context, root: Path | None) -> HandbookOrchestrator:
    settings: HandbookSettings = ctx.obj["settings"]
    return HandbookOrchestrator(
        root=root or settings.root,
        config_file=settings.config_file,
    )


def _print_issues(result: CheckResult) -> None:
    for issue in result.errors:
        console.print(f"  ❌ {issue.path}: {issue.message}", highlight=False)
    for issue in result.warnings:
        console.print(f"  ⚠️  {issue.path}: {issue.message}", highlight=False)


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default=None,
    help="Log level (default: HANDBOOK_LOG_LEVEL or WARNING).",
)
@click.option(
    "--json-logs/--console-logs",
    default=None,
    help="Emit logs as JSON or human-readable console lines.",
)
@click.pass_context
@handle_errors
def cli(ctx: click.Context, log_level: str | None, json_logs: bool | None):
    """Engineering handbook tooling.

    Keeps a Markdown handbook navigable: link verification, navigation
    index checks and link graph inspection.
    """
    try:
        settings = HandbookSettings()
    except ValidationError as e:
        configure_logging(level=log_level or "WARNING", json_format=json_logs, force=True)
        problems = "; ".join(
            f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
            for err in e.errors()
        )
        raise InvalidConfigError(
            f"invalid HANDBOOK_* settings ({problems})", cause=e
        ) from e

    configure_logging(
        level=log_level or settings.log_level,
        json_format=json_logs if json_logs is not None else settings.json_logs,
        force=True,
    )
    ctx.ensure_object(dict)
    ctx.obj["settings"] = settings


@cli.command("verify-links")
@root_argument
@click.option(
    "--check-anchors/--no-check-anchors",
    default=None,
    help="Also verify #fragments against target headings.",
)
@click.option(
    "--format", "output_format",
    type=click.Choice(["text", "json", "markdown"]),
    default="text",
    help="Report format.",
)
@click.pass_context
@handle_errors
def verify_links(ctx: click.Context, root: Path | None, check_anchors: bool | None, output_format: str):
    """Verify internal Markdown links.

    Every relative link must point at an existing file. Exits 1 when any
    link is broken.
    """
    report = _orchestrator(ctx, root).verify_links(check_anchors=check_anchors)

    if output_format == "json":
        click.echo(json.dumps(report.to_dict(), indent=2))
    else:
        click.echo(LinkReportRenderer(report, output_format).render(), nl=False)

    ctx.exit(report.exit_code)


@cli.command("check-nav")
@root_argument
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@handle_errors
def check_nav(ctx: click.Context, root: Path | None, as_json: bool):
    """Check AGENTS.md / CLAUDE.md / GEMINI.md navigation indexes.

    Checks that:
    - Indexed directories carry every required index file
    - Indexes link to every topic document of their directory
    - Indexes of one directory link to the same documents
    """
    result = _orchestrator(ctx, root).check_navigation()

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
    else:
        console.print("\n[bold blue]🧭 Navigation Indexes[/bold blue]\n")
        if result.issues:
            _print_issues(result)
            console.print()
        if result.ok:
            console.print(f"[bold green]✅ Navigation passed[/bold green] ({len(result.warnings)} warning(s))")
        else:
            console.print(f"[bold red]❌ {len(result.errors)} navigation error(s)[/bold red]")

    ctx.exit(0 if result.ok else 1)


@cli.command()
@root_argument
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@handle_errors
def orphans(ctx: click.Context, root: Path | None, as_json: bool):
    """List documents that no other document links to."""
    result = _orchestrator(ctx, root).find_orphans()
    paths = [issue.path for issue in result.issues]

    if as_json:
        click.echo(json.dumps(paths, indent=2))
        return

    console.print(f"\n[bold yellow]Orphan documents ({len(paths)}):[/bold yellow]")
    for path in paths:
        console.print(f"  {path}", highlight=False)


@cli.command()
@root_argument
@click.option(
    "--check-anchors/--no-check-anchors",
    default=None,
    help="Also verify #fragments against target headings.",
)
@click.option("--strict", is_flag=True, help="Treat warnings as failures.")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@handle_errors
def check(ctx: click.Context, root: Path | None, check_anchors: bool | None, strict: bool, as_json: bool):
    """Run every check: links, navigation indexes and orphans."""
    report = _orchestrator(ctx, root).run_all(check_anchors=check_anchors)

    if as_json:
        click.echo(json.dumps(report.to_dict(), indent=2))
        ctx.exit(report.exit_code(strict))

    console.print("\n[bold blue]📚 Handbook Check[/bold blue]\n")

    table = Table()
    table.add_column("Check", style="cyan")
    table.add_column("Errors", justify="right")
    table.add_column("Warnings", justify="right")
    table.add_column("Status", justify="center")
    table.add_row(
        "links",
        str(report.links.broken_count),
        "0",
        "✅" if report.links.ok else "❌",
    )
    for result in report.checks:
        status = "✅" if result.ok and not result.warnings else ("⚠️" if result.ok else "❌")
        table.add_row(result.name, str(len(result.errors)), str(len(result.warnings)), status)
    console.print(table)

    for item in report.links.broken:
        console.print(f"  ❌ {item.source}:{item.line}: {item.link} ({item.reason})", highlight=False)
    for result in report.checks:
        _print_issues(result)

    console.print(f"\n[bold]Links checked:[/bold] {report.links.total_checked}")
    ctx.exit(report.exit_code(strict))


@cli.command()
@root_argument
@click.option("--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
@handle_errors
def stats(ctx: click.Context, root: Path | None, as_json: bool):
    """Show statistics about the handbook link graph."""
    graph_stats = _orchestrator(ctx, root).get_stats()

    if as_json:
        click.echo(json.dumps(graph_stats, indent=2))
        return

    console.print("\n[bold blue]📊 Handbook Statistics[/bold blue]\n")

    table = Table(title="Links")
    table.add_column("Kind", style="cyan")
    table.add_column("Count", justify="right")
    for kind, count in graph_stats["link_counts"].items():
        table.add_row(kind, str(count))
    console.print(table)
    console.print()

    console.print(f"[bold]Documents:[/bold] {graph_stats['documents']}")
    console.print(f"[bold]Navigation indexes:[/bold] {graph_stats['index_documents']}")
    console.print(f"[bold]Directories:[/bold] {graph_stats['directories']}")
    console.print(f"[bold]Orphans:[/bold] {graph_stats['orphans']}")
    if graph_stats["files_skipped"]:
        console.print(f"[bold yellow]Unreadable files skipped:[/bold yellow] {graph_stats['files_skipped']}")

    if graph_stats["most_linked"]:
        console.print("\n[bold]Most linked:[/bold]")
        for path, count in graph_stats["most_linked"]:
            console.print(f"  {path} ({count})", highlight=False)


@cli.command()
@root_argument
@click.option(
    "--output", "-o",
    type=click.Path(dir_okay=False, path_type=Path),
    help="Output file for the graph (JSON format). Prints to stdout if omitted.",
)
@click.pass_context
@handle_errors
def graph(ctx: click.Context, root: Path | None, output: Path | None):
    """Build and export the link graph as JSON."""
    export_data = _orchestrator(ctx, root).export_graph()
    payload = json.dumps(export_data, indent=2, default=str)

    if output is None:
        click.echo(payload)
        return

    output.write_text(payload + "\n", encoding="utf-8")
    err_console.print(f"✅ Graph exported to {output}")


@cli.group()
def nav():
    """Navigation index tools."""


@nav.command("render")
@click.argument("directory", default=".")
@click.option(
    "--root", "-r",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Handbook root (default: HANDBOOK_ROOT or current directory).",
)
@click.option(
    "--name", "-n", "names",
    multiple=True,
    help="Index file name(s) to render (default: every configured index file).",
)
@click.option("--write", is_flag=True, help="Write the index files instead of printing them.")
@click.option("--force", is_flag=True, help="Overwrite existing index files when writing.")
@click.pass_context
@handle_errors
def nav_render(
    ctx: click.Context,
    directory: str,
    root: Path | None,
    names: tuple[str, ...],
    write: bool,
    force: bool,
):
    """Render navigation indexes for DIRECTORY (relative to the root)."""
    orchestrator = _orchestrator(ctx, root)
    directory = Path(directory).as_posix().strip("/") or "."
    target_dir = orchestrator.builder.root / directory
    if not target_dir.is_dir():
        raise click.BadParameter(f"not a directory: {directory}", param_hint="DIRECTORY")

    for name in names or orchestrator.config.index_files:
        content = NavigationIndexRenderer(
            orchestrator.graph,
            directory=directory,
            index_name=name,
            config=orchestrator.config,
        ).render()

        if not write:
            if len(names) != 1:
                click.echo(f"<!-- {name} -->")
            click.echo(content, nl=False)
            continue

        path = target_dir / name
        if path.exists() and not force:
            err_console.print(f"⚠️  {path} exists, skipped (use --force)", highlight=False)
            continue
        path.write_text(content, encoding="utf-8")
        logger.info("index_written", path=str(path))
        err_console.print(f"✅ Wrote {path}", highlight=False)


def main():
    """Entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
