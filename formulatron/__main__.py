"""
Entry point for running formulatron as a module.

Usage:
    python -m formulatron list
    python -m formulatron show stellar-relations parallax
    python -m formulatron serve --port 8000
"""

import sys

from formulatron.cli.main import cli

if __name__ == "__main__":
    sys.exit(cli())
