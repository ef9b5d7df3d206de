"""Application entry point for wbf.

Running ``python -m whatbigfile`` is equivalent to invoking the ``wbf``
console script.
"""

from __future__ import annotations

from whatbigfile.app.cli import cli

__all__ = ["main"]


def main() -> None:
    """Main entry point for the wbf application.

    Exit Codes:
        0: Scan completed (or interrupted with Ctrl+C)
        1: Fatal error (invalid filter, terminal, scan root or export failure)
        2: Command-line usage error
    """
    cli(prog_name="wbf")


if __name__ == "__main__":
    main()
