"""distill-copy — copy the distill file set of a group of maps.

Runs the editor's ``GenerateDistillFileSets`` commandlet and mirrors the
resulting files from one tree into another.
"""

from distill_copy.version import __version__

__all__: list[str] = ["__version__"]
