"""patchbin - patch bytes into a copy of a binary file at an address or after a marker."""

from .version import load_version

__version__ = load_version()
