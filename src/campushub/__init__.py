"""CampusHub - campus event management core."""

__version__ = "0.1.0"


def get_version() -> str:
    """Return the installed CampusHub version."""
    return __version__
