"""hydrohead command-line interface package.

Supports ``python -m hydrohead.cli`` as an alternative to the ``hydrohead`` entry point.
"""

from hydrohead.cli.main import cli, main

__all__ = ["cli", "main"]
