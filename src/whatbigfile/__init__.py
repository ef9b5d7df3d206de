"""wbf - What big file?

Scan a directory tree and rank its files by size in a live terminal table,
with optional CSV export of the final ranking.
"""

from whatbigfile.__main__ import main

__all__ = ["main"]
