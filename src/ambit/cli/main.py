"""CLI entry point for ambit.

Invoked as::

    ambit [OPTIONS] COMMAND [ARGS]...

or, during development::

    python -m ambit.cli.main

Commands
--------
check       Parse and resolve the configuration, reporting any errors
links       Show the (repository, home) pairs the configuration resolves to
parse       Dump the parsed AST to JSON or YAML
grammar     Print the configuration grammar
sync        Create the configured symlinks
clean       Remove the configured symlinks
move        Move untracked home files into the repository
version     Show version information
"""
from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING, Any, TypeVar

import click
from rich.console import Console
from rich.markup import escape
from rich.syntax import Syntax
from rich.table import Table

if TYPE_CHECKING:
    from ambit.ast.nodes import Document
    from ambit.expander.context import EvaluationContext
    from ambit.expander.expander import ResolvedLink
    from ambit.linker.paths import AmbitPaths
    from ambit.linker.planner import LinkReport

console = Console()
err_console = Console(stderr=True)

F = TypeVar("F", bound=Callable[..., Any])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _read_source(path: Path) -> str:
    """Read a configuration file, exiting on error.

    A leading UTF-8 byte order mark is dropped.
    """
    try:
        return path.read_text(encoding="utf-8-sig")
    except FileNotFoundError:
        err_console.print(f"[red]Error:[/red] Configuration file not found: {escape(str(path))}")
        sys.exit(1)
    except (OSError, UnicodeDecodeError) as exc:
        err_console.print(f"[red]Error:[/red] Cannot read {escape(str(path))}: {escape(str(exc))}")
        sys.exit(1)


def _parse_or_exit(source: str, path: Path) -> "Document":
    """Parse configuration text, printing errors and exiting on failure."""
    from ambit.lexer import LexError
    from ambit.parser import ParseErrorCollection, parse

    try:
        return parse(source)
    except LexError as exc:
        err_console.print(f"[red]Lex error[/red] in {escape(str(path))}: {escape(str(exc))}")
        sys.exit(1)
    except ParseErrorCollection as exc:
        err_console.print(f"[red]Parse errors[/red] in {escape(str(path))}:")
        for error in exc.errors:
            err_console.print(f"  {error}", markup=False)
        sys.exit(1)


def _resolve_or_exit(
    document: "Document",
    context: "EvaluationContext",
    max_expansions: int,
    path: Path,
) -> list["ResolvedLink"]:
    """Resolve a document, printing expansion errors and exiting on failure."""
    from ambit.expander import ExpansionError, resolve

    try:
        return resolve(document, context, max_expansions=max_expansions)
    except ExpansionError as exc:
        err_console.print(f"[red]Expansion error[/red] in {escape(str(path))}: {escape(str(exc))}")
        sys.exit(1)


def _build_paths(config: str | None, repo: str | None, home: str | None) -> "AmbitPaths":
    from ambit.linker.paths import AmbitPaths

    paths = AmbitPaths.from_env()
    overrides: dict[str, Path] = {}
    if config:
        overrides["config"] = Path(config).expanduser().absolute()
    if repo:
        overrides["repo"] = Path(repo).expanduser().absolute()
    if home:
        overrides["home"] = Path(home).expanduser().absolute()
    return AmbitPaths(
        home=overrides.get("home", paths.home),
        repo=overrides.get("repo", paths.repo),
        config=overrides.get("config", paths.config),
    )


def _locate_config(paths: "AmbitPaths", use_repo_config: bool) -> "AmbitPaths":
    """Pick the configuration file for a command that touches the disk.

    With ``use_repo_config`` the repository's own ``config.ambit`` is
    required.  Otherwise the configured file is used, falling back to the
    repository's copy when the configured file does not exist.
    """
    if not use_repo_config and paths.config.exists():
        return paths
    found = paths.find_repo_config()
    if found is not None:
        if not use_repo_config:
            err_console.print(
                f"[yellow]Warning:[/yellow] {escape(str(paths.config))} not found, "
                f"using {escape(str(found))}"
            )
        return paths.with_config(found)
    if use_repo_config:
        err_console.print(f"[red]Error:[/red] No config.ambit found in {escape(str(paths.repo))}")
        sys.exit(1)
    return paths


def _load_config(
    paths: "AmbitPaths",
    os_id: str | None,
    host: str | None,
    max_expansions: int,
) -> tuple["Document", "EvaluationContext", list["ResolvedLink"]]:
    """Read, parse and resolve the configuration at ``paths.config``."""
    from ambit.expander.context import EvaluationContext

    source = _read_source(paths.config)
    document = _parse_or_exit(source, paths.config)
    context = EvaluationContext.from_system(os_id=os_id, hostname=host)
    return document, context, _resolve_or_exit(document, context, max_expansions, paths.config)


def _load_links(
    paths: "AmbitPaths",
    os_id: str | None,
    host: str | None,
    max_expansions: int,
) -> list["ResolvedLink"]:
    _, _, links = _load_config(paths, os_id, host, max_expansions)
    return links


def _path_options(func: F) -> F:
    """Attach the options every configuration-reading command shares."""
    from ambit.expander.expander import DEFAULT_MAX_EXPANSIONS

    decorators = [
        click.option("--config", "config", default=None, help="Configuration file (env: AMBIT_CONFIG_PATH)"),
        click.option("--repo", "repo", default=None, help="Dotfile repository (env: AMBIT_REPO_PATH)"),
        click.option("--home", "home", default=None, help="Home directory (env: AMBIT_HOME_PATH)"),
        click.option("--os", "os_id", default=None, help="Override the detected OS identifier"),
        click.option("--host", "host", default=None, help="Override the detected hostname"),
        click.option(
            "--max-expansions",
            type=click.IntRange(min=1),
            default=DEFAULT_MAX_EXPANSIONS,
            envvar="AMBIT_MAX_EXPANSIONS",
            show_default=True,
            help="Maximum number of paths one expression may expand to",
        ),
    ]
    for decorator in reversed(decorators):
        func = decorator(func)
    return func


def _print_report(report: "LinkReport", quiet: bool) -> None:
    from ambit.linker.planner import LinkAction

    styles = {
        LinkAction.CREATED: ("green", "Synced"),
        LinkAction.WOULD_CREATE: ("yellow", "Would sync"),
        LinkAction.REMOVED: ("green", "Removed"),
        LinkAction.WOULD_REMOVE: ("yellow", "Would remove"),
        LinkAction.MOVED: ("green", "Moved"),
        LinkAction.WOULD_MOVE: ("yellow", "Would move"),
    }
    if not quiet:
        for outcome in report.outcomes:
            if outcome.action in styles:
                color, label = styles[outcome.action]
                arrow = "to" if outcome.action in (LinkAction.MOVED, LinkAction.WOULD_MOVE) else "->"
                console.print(
                    f"[{color}]{label}[/{color}] {escape(str(outcome.home))} {arrow} {escape(str(outcome.repo))}"
                )

    if report.failures:
        table = Table(title=f"{report.operation} failures", show_lines=True)
        table.add_column("Link", min_width=10)
        table.add_column("Reason", min_width=10)
        table.add_column("Message")
        for outcome in report.failures:
            assert outcome.error is not None
            table.add_row(escape(str(outcome.link)), outcome.error.kind.value, escape(str(outcome.error)))
        err_console.print(table)

    console.print(f"\n[bold]{report.summary()}[/bold]")


# ---------------------------------------------------------------------------
# CLI group
# ---------------------------------------------------------------------------


@click.group()
@click.version_option(package_name="ambit")
@click.option("-v", "--verbose", is_flag=True, default=False, help="Enable debug logging")
def cli(verbose: bool) -> None:
    """Dotfile manager: link files from a repository into your home directory."""
    from ambit.core.logging import setup_logging

    setup_logging(verbose=verbose, console=err_console)


# ---------------------------------------------------------------------------
# version command
# ---------------------------------------------------------------------------


@cli.command(name="version")
def version_command() -> None:
    """Show detailed version information."""
    from ambit import __version__
    from ambit.expander.context import EvaluationContext

    context = EvaluationContext.from_system()
    table = Table(show_header=False, box=None)
    table.add_row("[bold]ambit[/bold]", f"v{__version__}")
    table.add_row("Python", f"{sys.version_info.major}.{sys.version_info.minor}.{sys.version_info.micro}")
    table.add_row("OS", context.os_id)
    table.add_row("Host", context.hostname)
    console.print(table)


# ---------------------------------------------------------------------------
# grammar command
# ---------------------------------------------------------------------------


@cli.command(name="grammar")
def grammar_command() -> None:
    """Print the configuration grammar."""
    from ambit.grammar import FULL_GRAMMAR

    console.print(FULL_GRAMMAR.strip(), markup=False, highlight=False)


# ---------------------------------------------------------------------------
# check command
# ---------------------------------------------------------------------------


@cli.command(name="check")
@_path_options
def check_command(
    config: str | None,
    repo: str | None,
    home: str | None,
    os_id: str | None,
    host: str | None,
    max_expansions: int,
) -> None:
    """Check the configuration for errors.

    The file is parsed and every statement is expanded for the current
    (or overridden) OS and hostname.
    """
    paths = _build_paths(config, repo, home)
    document, context, links = _load_config(paths, os_id, host, max_expansions)
    console.print(
        f"[green]OK[/green] {escape(str(paths.config))}: {len(document.mappings)} statement(s), "
        f"{len(links)} link(s) for os={escape(context.os_id)} host={escape(context.hostname)}"
    )


# ---------------------------------------------------------------------------
# links command
# ---------------------------------------------------------------------------


@cli.command(name="links")
@_path_options
def links_command(
    config: str | None,
    repo: str | None,
    home: str | None,
    os_id: str | None,
    host: str | None,
    max_expansions: int,
) -> None:
    """Show the (repository, home) pairs the configuration resolves to."""
    paths = _build_paths(config, repo, home)
    links = _load_links(paths, os_id, host, max_expansions)

    if not links:
        console.print("[yellow]No links for this system.[/yellow]")
        return

    table = Table(title=f"Links: {escape(str(paths.config))}")
    table.add_column("#", justify="right")
    table.add_column("Repository")
    table.add_column("Home")
    for link in links:
        table.add_row(str(link.statement_index + 1), escape(link.repo_path), escape(link.home_path))
    console.print(table)


# ---------------------------------------------------------------------------
# parse command
# ---------------------------------------------------------------------------


@cli.command(name="parse")
@click.argument("file", type=click.Path(exists=False), required=False)
@click.option(
    "--format",
    "output_format",
    type=click.Choice(["json", "yaml"], case_sensitive=False),
    default="json",
    help="AST output format",
)
@click.option("--output", "-o", default=None, help="Output file path (defaults to stdout)")
def parse_command(file: str | None, output_format: str, output: str | None) -> None:
    """Parse a configuration file and dump the AST.

    FILE defaults to the configured path (env: AMBIT_CONFIG_PATH).
    """
    from ambit.ast import AstSerializer

    path = Path(file) if file else _build_paths(None, None, None).config
    source = _read_source(path)
    document = _parse_or_exit(source, path)

    serializer = AstSerializer()
    if output_format == "json":
        text = serializer.to_json(document, indent=2)
        lang = "json"
    else:
        text = serializer.to_yaml(document)
        lang = "yaml"

    if output:
        Path(output).write_text(text, encoding="utf-8")
        console.print(f"[green]AST written to[/green] {escape(output)}")
    else:
        console.print(Syntax(text, lang, line_numbers=True))


# ---------------------------------------------------------------------------
# sync / clean / move commands
# ---------------------------------------------------------------------------


def _link_options(dry_run_help: str) -> Callable[[F], F]:
    """Attach the options shared by the commands that change the disk."""

    def wrap(func: F) -> F:
        decorators = [
            _path_options,
            click.option("--dry-run", is_flag=True, default=False, help=dry_run_help),
            click.option("--quiet", "-q", is_flag=True, default=False, help="Don't report individual files"),
            click.option(
                "--use-repo-config",
                is_flag=True,
                default=False,
                help="Search the dotfile repository for config.ambit and use it",
            ),
        ]
        for decorator in reversed(decorators):
            func = decorator(func)
        return func

    return wrap


def _run_planner(
    operation: str,
    config: str | None,
    repo: str | None,
    home: str | None,
    os_id: str | None,
    host: str | None,
    max_expansions: int,
    dry_run: bool,
    quiet: bool,
    use_repo_config: bool,
) -> None:
    from ambit.linker import LinkError, LinkPlanner

    paths = _locate_config(_build_paths(config, repo, home), use_repo_config)
    links = _load_links(paths, os_id, host, max_expansions)
    planner = LinkPlanner(paths, dry_run=dry_run)
    try:
        report = getattr(planner, operation)(links)
    except LinkError as exc:
        err_console.print(f"[red]Error:[/red] {escape(str(exc))}")
        sys.exit(1)

    _print_report(report, quiet)
    if not report.ok:
        sys.exit(1)


@cli.command(name="sync")
@_link_options("Report what would be linked without linking")
def sync_command(**options: Any) -> None:
    """Link files from the dotfile repository into the home directory.

    When the configuration file is missing, the first config.ambit in
    the repository is used instead.
    """
    _run_planner("sync", **options)


@cli.command(name="clean")
@_link_options("Report what would be removed without removing")
def clean_command(**options: Any) -> None:
    """Remove the symlinks the configuration creates.

    Only home paths that link to the matching repository file are
    removed; nothing else in the home directory is touched.
    """
    _run_planner("clean", **options)


@cli.command(name="move")
@_link_options("Report what would be moved without moving")
def move_command(**options: Any) -> None:
    """Move home files into the dotfile repository.

    A file is moved only when the repository does not have it yet and the
    home path is a regular file.  Run ``ambit sync`` afterwards to link
    the moved files back into place.
    """
    _run_planner("move", **options)


if __name__ == "__main__":
    cli()
