"""servicekit - conventions for bootstrapping long-running backend services.

Provides a validated configuration contract for service identity, logging,
job retry, messaging, database and web-listener settings, and a lifecycle gate
that fails startup when a service does not signal readiness in time.
"""

__version__ = "0.1.0"

__all__ = [
    "__version__",
]
