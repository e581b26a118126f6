"""ironpass: flatten password-store tree listings into entry paths."""

from importlib.metadata import PackageNotFoundError, version

from ironpass.ansi import strip_escape_sequences
from ironpass.listing import flatten_tree, parse_listing

try:
    __version__ = version("ironpass")
except PackageNotFoundError:
    __version__ = "dev"

__all__ = ["__version__", "flatten_tree", "parse_listing", "strip_escape_sequences"]
