"""Public interface for the directory browser."""

from .browser import DirectoryBrowser, DirectoryBrowserError

__version__ = "0.1.0"
__all__ = ["DirectoryBrowser", "DirectoryBrowserError", "__version__"]
