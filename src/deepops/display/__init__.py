"""Presentation helpers: indented value rendering and text tables.

Usage:
    from deepops.display import pformat, tabulate

    print(pformat(config))
    print(tabulate(rows, header=["Name", "Score"]))
"""

from deepops.display.formatter import format_scalar, pformat
from deepops.display.table import format_cell, tabulate

__all__ = [
    "pformat",
    "tabulate",
    "format_scalar",
    "format_cell",
]
