"""write-bench - compare kernel I/O paths for copying one file to another."""

from importlib.metadata import distribution


__version__ = distribution(__package__ or "writebench").version

__all__ = ["__version__"]

# Import CLI after setting __version__ to avoid circular imports
from .cli import app, main


__all__ += ["app", "main"]
