"""auditcov CLI - Command-line host for the audit coverage verifier.

Main entry point is in main.py which registers all commands.

Usage:
    python -m auditcov          # Run CLI
"""


def __getattr__(name: str):
    """Lazy import to avoid RuntimeWarning when running as module."""
    if name == "app":
        from auditcov.cli.main import app

        return app
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")


__all__ = ["app"]
