"""
NuGet Feed Tools

Interactive command-line utilities for listing the packages published to a
NuGet feed and for removing packages from a feed in bulk.
"""

__version__ = "0.1.0"
__author__ = "NuGet Feed Tools Team"

# Make version easily importable
def get_version():
    """Get the current version of NuGet Feed Tools."""
    return __version__

__all__ = ['get_version']
