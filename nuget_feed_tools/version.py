"""
Version management for NuGet Feed Tools.

This module provides centralized version information so the tool banners and
the HTTP User-Agent never hardcode a version number.
"""

from . import __version__


def get_version() -> str:
    """
    Get the current version of NuGet Feed Tools.
    
    Returns:
        Version string (e.g., "0.1.0")
    """
    return __version__


def get_full_name_with_version(tool_name: str = "nuget-feed-tools") -> str:
    """
    Get a tool name with the package version appended.
    
    Args:
        tool_name: Name of the tool to label
        
    Returns:
        Full name string (e.g., "nuget-package-lister v0.1.0")
    """
    return f"{tool_name} v{__version__}"


def get_user_agent() -> str:
    """Get the User-Agent header value used for feed requests."""
    return f"nuget-feed-tools/{__version__}"
