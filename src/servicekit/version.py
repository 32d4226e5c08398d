"""Version reporting for the startup banner."""

from importlib import metadata

from servicekit import __version__

DISTRIBUTION_NAME = "servicekit"


def get_version() -> str:
    """Return the installed distribution version.

    Running from a source checkout without an install falls back to the
    in-tree ``__version__`` marked as a development build, so the startup
    log still says which code is running.
    """
    try:
        return metadata.version(DISTRIBUTION_NAME)
    except metadata.PackageNotFoundError:
        return f"{__version__}-dev"
