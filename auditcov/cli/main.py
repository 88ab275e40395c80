"""auditcov CLI entry point.

Registers the verifier commands on a single Typer app.
"""

from __future__ import annotations

import typer

from auditcov.cli.verify import resolve_command, verify_command

app = typer.Typer(
    name="auditcov",
    help="Audit coverage verification for HTTP API resource models",
    add_completion=False,
    pretty_exceptions_enable=False,
)


@app.callback(invoke_without_command=True)
def main_callback(
    ctx: typer.Context,
    version: bool = typer.Option(
        False, "--version", help="Show version and exit"
    ),
) -> None:
    """auditcov - Audit coverage verification."""
    if version:
        from auditcov import __version__

        typer.echo(f"auditcov {__version__}")
        raise typer.Exit()

    # If no command provided, show help
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()


app.command("verify", rich_help_panel="Coverage")(verify_command)
app.command("resolve", rich_help_panel="Coverage")(resolve_command)


def cli_main() -> None:
    """Entry point for console_scripts.

    This function is called when running the 'auditcov' command.
    """
    app()


if __name__ == "__main__":
    cli_main()
