"""Audit Coverage CLI Commands.

Checks a resource model snapshot for mutating endpoints that are missing
from the audit trail, for CI/CD integration.

Exit codes:
  0 = clean (or warnings without --strict)
  1 = coverage warnings with --strict or fail_on_warning
  2 = snapshot, action list or settings could not be loaded, or the
      report could not be written
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from auditcov.audit import (
    ActionProvider,
    CoverageReport,
    Diagnostic,
    DiagnosticKind,
    ResourceModel,
    StaticActionProvider,
    create_registry,
    create_verifier,
    load_action_file,
    load_resource_model,
    resolve_path,
)
from auditcov.core.config import VerifierSettings, load_settings
from auditcov.core.exceptions import AuditCovError, ReportWriteError
from auditcov.core.logging import configure_logging, get_logger

logger = get_logger(__name__)
console = Console()

DEFAULT_MAX_ROWS = 200


def _kind_label(diagnostic: Diagnostic) -> str:
    if diagnostic.kind is DiagnosticKind.MISSING_AUDIT_ANNOTATION:
        return "[yellow]missing[/yellow]"
    return "[red]unregistered[/red]"


def _display_summary_table(report: CoverageReport, registry_size: int) -> None:
    summary_table = Table(title="Audit Coverage Summary", show_header=False)
    summary_table.add_column("Metric", style="cyan")
    summary_table.add_column("Value", style="white")

    summary_table.add_row("Resources Checked", str(report.resources_checked))
    summary_table.add_row("Methods Checked", str(report.methods_checked))
    summary_table.add_row("Registered Actions", str(registry_size))
    summary_table.add_row("Missing Markers", str(report.missing_count))
    summary_table.add_row("Unregistered Actions", str(report.unregistered_count))

    console.print(summary_table)


def _display_diagnostics(diagnostics: List[Diagnostic], verbose: bool) -> None:
    """Display diagnostics table.

    Args:
        diagnostics: Diagnostics in traversal order.
        verbose: Also print the declaring handler of each finding.
    """
    table = Table(title="Audit Coverage Diagnostics")
    table.add_column("Kind", no_wrap=True)
    table.add_column("Verb", style="cyan", no_wrap=True)
    table.add_column("Path", style="white")
    table.add_column("Action", style="magenta")

    for diagnostic in diagnostics[:DEFAULT_MAX_ROWS]:
        table.add_row(
            _kind_label(diagnostic),
            diagnostic.verb.value,
            escape(diagnostic.resolved_path),
            escape(diagnostic.action_id or "-"),
        )

    console.print(table)
    if len(diagnostics) > DEFAULT_MAX_ROWS:
        console.print(
            f"[dim]{len(diagnostics) - DEFAULT_MAX_ROWS} more, "
            "use --output for the full report[/dim]"
        )

    if verbose:
        console.print("\n[bold]Details:[/bold]")
        for diagnostic in diagnostics:
            console.print(diagnostic.message, markup=False, highlight=False)
            console.print(f"  {diagnostic.detail}", markup=False, style="dim")


def _display_report(
    report: CoverageReport, registry_size: int, verbose: bool = False
) -> None:
    console.print()
    _display_summary_table(report, registry_size)
    console.print()

    if report.is_clean:
        console.print("[green]✓ No audit coverage gaps found[/green]")
        return

    _display_diagnostics(report.diagnostics, verbose)
    console.print(
        f"[yellow]⚠ {len(report.diagnostics)} audit coverage warning(s)[/yellow]"
    )


def _collect_providers(
    settings: VerifierSettings,
    action_files: List[Path],
    inline_actions: List[str],
) -> List[ActionProvider]:
    """Build action providers from settings and command-line options."""
    providers: List[ActionProvider] = [
        load_action_file(path) for path in [*settings.action_files, *action_files]
    ]
    inline = [*settings.actions, *inline_actions]
    if inline:
        providers.append(StaticActionProvider(inline, source="inline"))
    return providers


def _save_json_report(report: CoverageReport, output: Path) -> None:
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(json.dumps(report.to_dict(), indent=2), encoding="utf-8")
    except OSError as e:
        raise ReportWriteError(
            f"Cannot write report to {output}: {e}", path=str(output)
        ) from e
    console.print(f"\n[green]Report saved to: {output}[/green]")


def _print_error(error: AuditCovError) -> None:
    console.print(f"[red]Error {error.error_code}:[/red] {escape(str(error))}")
    for hint in error.how_to_fix:
        console.print(f"  [dim]- {hint}[/dim]")


def verify_command(
    model: Path = typer.Argument(..., help="Resource model snapshot (JSON or YAML)"),
    actions: Optional[List[Path]] = typer.Option(
        None, "--actions", "-a", help="File listing registered audit actions"
    ),
    action: Optional[List[str]] = typer.Option(
        None, "--action", help="Registered audit action identifier"
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Settings file (default: ./auditcov.yaml)"
    ),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Write the JSON report to a file"
    ),
    verbose: bool = typer.Option(
        False, "--verbose", "-v", help="Show the handler behind each finding"
    ),
    strict: bool = typer.Option(
        False, "--strict", help="Exit with code 1 on coverage warnings"
    ),
) -> None:
    """Verify that every POST, PUT and DELETE endpoint is audited.

    Examples:
        auditcov verify model.json --actions audit_actions.txt
        auditcov verify model.yaml --action stream:create --strict
    """
    try:
        settings = load_settings(config)
        configure_logging(
            level="DEBUG" if verbose else settings.log_level,
            log_file=settings.log_file,
        )

        registry = create_registry(
            _collect_providers(settings, actions or [], action or [])
        )
        resource_model = load_resource_model(model)

        verifier = create_verifier(registry=registry, emit=None)
        report = verifier.verify(resource_model.resources)

        _display_report(report, len(registry), verbose)
        if output:
            _save_json_report(report, output)

        if report.exit_code and (strict or settings.fail_on_warning):
            raise typer.Exit(code=report.exit_code)

    except typer.Exit:
        raise
    except AuditCovError as e:
        _print_error(e)
        logger.error("Audit coverage check failed", error=str(e))
        raise typer.Exit(code=2)
    except Exception as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        logger.error("Audit coverage check failed", error=str(e))
        raise typer.Exit(code=2)


def _resolve_rows(model: ResourceModel) -> List[List[str]]:
    rows: List[List[str]] = []
    for node in model.walk():
        path = escape(resolve_path(node))
        mutating = [m for m in node.methods if m.http_verb.is_mutating]
        if not mutating:
            rows.append([path, "-", "[dim]no mutating methods[/dim]"])
            continue
        for method in mutating:
            if method.audit_descriptor is not None:
                marker = escape(method.audit_descriptor.action_id)
                if method.exempt:
                    marker += " [dim](exempt)[/dim]"
            elif method.exempt:
                marker = "[dim]exempt[/dim]"
            else:
                marker = "[yellow]none[/yellow]"
            rows.append([path, method.http_verb.value, marker])
    return rows


def resolve_command(
    model: Path = typer.Argument(..., help="Resource model snapshot (JSON or YAML)"),
) -> None:
    """List resolved resource paths and the audit marker of each mutating method.

    Examples:
        auditcov resolve model.json
    """
    try:
        resource_model = load_resource_model(model)
    except AuditCovError as e:
        _print_error(e)
        raise typer.Exit(code=2)

    table = Table(title="Resolved Resources")
    table.add_column("Path", style="white")
    table.add_column("Verb", style="cyan", no_wrap=True)
    table.add_column("Audit Marker")

    for row in _resolve_rows(resource_model):
        table.add_row(*row)

    console.print(table)
