#!/usr/bin/env python3
"""
Command-line interface for component-analyzer.

Usage:
    component-analyzer analyze ./webapp
    component-analyzer analyze ./dist --format json
    component-analyzer show ./dist my/app/Component.js
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import click
import yaml
from dotenv import load_dotenv
from rich.console import Console
from rich.table import Table

from . import __version__
from .analyzer import ComponentAnalyzer
from .config import AnalyzerSettings, configure_logging, load_settings
from .diagnostics import LoggingDiagnostics, RecordingDiagnostics, Severity
from .discovery import ComponentDiscovery
from .errors import ConfigurationError
from .module_info import ModuleInfo
from .resources import FileSystemResourcePool

console = Console()
err_console = Console(stderr=True)


def print_error(msg: str):
    err_console.print(f"[red]Error:[/red] {msg}")


def print_info(msg: str):
    err_console.print(f"[blue]{msg}[/blue]")


def build_report(
    results: Dict[str, ModuleInfo],
    diagnostics: RecordingDiagnostics,
) -> Dict[str, Any]:
    """Per component dependencies plus the warnings and errors raised for it."""
    report: Dict[str, Any] = {}
    for name, info in results.items():
        report[name] = {
            "dependencies": info.to_dict(),
            "diagnostics": [
                d.to_dict() for d in diagnostics.records
                if d.severity != Severity.VERBOSE and d.context.get("component") == name
            ],
        }
    return report


def render_report(report: Dict[str, Any], output_format: str) -> None:
    if output_format == "json":
        click.echo(json.dumps(report, indent=2))
        return
    if output_format == "yaml":
        click.echo(yaml.safe_dump(report, sort_keys=False, default_flow_style=False))
        return

    for name, entry in report.items():
        table = Table(title=name)
        table.add_column("Module", style="cyan")
        table.add_column("Dependency", style="green")
        for module, strength in entry["dependencies"].items():
            table.add_row(module, strength)
        console.print(table)
        for diagnostic in entry["diagnostics"]:
            style = "red" if diagnostic["severity"] == Severity.ERROR.value else "yellow"
            console.print(f"  [{style}]{diagnostic['severity']}[/{style}] {diagnostic['message']}")


async def analyze_components(
    root: Path,
    components: List[str],
    settings: AnalyzerSettings,
    diagnostics: RecordingDiagnostics,
) -> Dict[str, ModuleInfo]:
    analyzer = ComponentAnalyzer(FileSystemResourcePool(root), diagnostics)
    return await analyzer.analyze_each(components, max_concurrency=settings.max_concurrency)


def _settings_or_exit(**kwargs: Any) -> AnalyzerSettings:
    try:
        settings = load_settings(**kwargs)
    except ConfigurationError as e:
        print_error(str(e))
        sys.exit(1)
    configure_logging(settings.log_level)
    return settings


def _summarize(diagnostics: RecordingDiagnostics, components: int) -> None:
    print_info(
        f"Analyzed {components} component{'' if components == 1 else 's'}: "
        f"{len(diagnostics.warnings)} warning(s), {len(diagnostics.errors)} error(s)"
    )


@click.group()
@click.version_option(version=__version__, prog_name="component-analyzer")
def cli():
    """Derive module dependencies of UI5 components from their manifest.json.

    Library, component and component usage declarations, the root view, model
    classes and routing targets are turned into required or conditional
    module dependencies.
    """
    pass


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="YAML settings file")
@click.option("-f", "--format", "output_format", type=click.Choice(["table", "json", "yaml"]),
              help="Output format")
@click.option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
@click.option("--max-concurrency", type=int, help="Components analyzed at once")
def analyze(
    root: str,
    config_file: Optional[str],
    output_format: Optional[str],
    log_level: Optional[str],
    max_concurrency: Optional[int],
):
    """Analyze every Component.js below ROOT.

    Module names are taken relative to ROOT, so ROOT should be the resource
    root of the project (e.g. webapp/ or the build output).

    Examples:

        component-analyzer analyze ./dist

        component-analyzer analyze ./dist --format yaml --log-level DEBUG
    """
    settings = _settings_or_exit(
        config_file=config_file,
        log_level=log_level,
        max_concurrency=max_concurrency,
        output_format=output_format,
    )

    discovery = ComponentDiscovery(ignore_dirs=settings.ignore_dirs).discover(root)
    if not discovery.components:
        print_info(f"No Component.js found below {discovery.root_path}")
        return

    diagnostics = RecordingDiagnostics(forward_to=LoggingDiagnostics())
    results = asyncio.run(
        analyze_components(discovery.root_path, discovery.module_names, settings, diagnostics)
    )
    render_report(build_report(results, diagnostics), settings.output_format)
    _summarize(diagnostics, len(results))


@cli.command()
@click.argument("root", type=click.Path(exists=True, file_okay=False))
@click.argument("component")
@click.option("-c", "--config", "config_file", type=click.Path(exists=True, dir_okay=False),
              help="YAML settings file")
@click.option("-f", "--format", "output_format", type=click.Choice(["table", "json", "yaml"]),
              help="Output format")
@click.option("--log-level", help="Logging level (DEBUG, INFO, WARNING, ERROR)")
def show(
    root: str,
    component: str,
    config_file: Optional[str],
    output_format: Optional[str],
    log_level: Optional[str],
):
    """Analyze a single COMPONENT (module path relative to ROOT)."""
    settings = _settings_or_exit(config_file=config_file, log_level=log_level, output_format=output_format)

    diagnostics = RecordingDiagnostics(forward_to=LoggingDiagnostics())
    results = asyncio.run(
        analyze_components(Path(root).resolve(), [component], settings, diagnostics)
    )
    render_report(build_report(results, diagnostics), settings.output_format)
    _summarize(diagnostics, len(results))


def main():
    """Main entry point."""
    load_dotenv()
    return cli()


if __name__ == "__main__":
    main()
