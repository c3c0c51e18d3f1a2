"""Adapters wiring the linking use cases to the local platform."""

from .filesystem.local import LocalLinkFileSystem
from .links import JunctionLinker, SymlinkLinker, linker_for

__all__ = ["JunctionLinker", "LocalLinkFileSystem", "SymlinkLinker", "linker_for"]
