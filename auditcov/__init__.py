"""auditcov - Audit coverage verification for HTTP API resource models.

Checks that every state-mutating endpoint of an API either declares the
audit action it emits or is explicitly marked as exempt.
"""

__version__ = "0.3.0"
__all__ = ["__version__"]
