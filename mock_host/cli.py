"""
This file is the entry point for the 'projinfo' command-line tool.
Run 'projinfo' in your shell to use the CLI.

It drives one project info pass against a mock workspace described in YAML
and prints what the pass wrote to the output channel.
"""
import logging
from pathlib import Path
from typing import Optional

import typer
import yaml
from rich.markup import escape
from rich.tree import Tree

from common.app_setup import setup_logging, monkeypatch_print, print_and_log, print_error
from connectors.mock_host_connector import MockOutputWindow, SolutionFolder, load_workspace
from projinfo import ProjectInfoPackage, coerce_settings

app = typer.Typer(add_completion=False, help="Report project names, directories and GUIDs of a workspace.")

monkeypatch_print()


@app.callback()
def main(
    logfile: Optional[str] = typer.Option(None, help="Log file (default: $PROJINFO_LOGFILE or ~/.projinfo/log.txt)"),
    host_log: bool = typer.Option(False, "--host-log", help="Send logs to syslog instead of a file"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log per-project progress"),
):
    setup_logging(app_name="projinfo", host_log=host_log,
                  loglevel=logging.DEBUG if verbose else logging.INFO, logfile=logfile)


@app.command()
def run(
    workspace: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML workspace description"),
    channel: Optional[str] = typer.Option(None, help="Output channel name (default: General)"),
    settings: Optional[Path] = typer.Option(None, exists=True, dir_okay=False, help="YAML or JSON report settings"),
    background: bool = typer.Option(False, "--background", help="Start the pass from a background worker"),
):
    """Run one project info pass and print the channel text."""
    try:
        solution = load_workspace(workspace)
        report_settings = coerce_settings(settings)
    except (ValueError, yaml.YAMLError) as e:
        print_error(f"Invalid input: {escape(str(e))}")
        raise typer.Exit(2)
    if channel:
        report_settings = report_settings.model_copy(update={"channel_name": channel})

    window = MockOutputWindow()
    with ProjectInfoPackage(solution, window, report_settings) as package:
        if background:
            summary = package.initialize_async().result()
        else:
            summary = package.initialize()

    typer.echo(window.text(report_settings.channel_name), nl=False)
    print_and_log(
        f"Visited {summary.visited} projects: {summary.reported} reported, "
        f"{summary.skipped} skipped, {summary.faults} faults"
    )
    if summary.error:
        print_error(f"Pass aborted: {escape(summary.error)}")
        raise typer.Exit(1)


@app.command()
def tree(workspace: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML workspace description")):
    """Show the workspace tree."""
    try:
        solution = load_workspace(workspace)
    except (ValueError, yaml.YAMLError) as e:
        print_error(f"Invalid input: {escape(str(e))}")
        raise typer.Exit(2)
    info = solution.info
    root = Tree(f"[bold]{escape(info.workspace)}[/bold] ({info.projects} projects)")
    _add_branch(root, solution.root)
    print(root)


def _add_branch(branch: Tree, folder: SolutionFolder) -> None:
    for item in folder.items:
        if isinstance(item, SolutionFolder):
            _add_branch(branch.add(f"[yellow]{escape(item.name)}/[/yellow]"), item)
        elif hasattr(item, "query_scalar"):
            branch.add(escape(item.label))
        else:
            branch.add(f"[dim]{escape(item.label)}[/dim]")


if __name__ == "__main__":
    app()
