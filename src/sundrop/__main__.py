"""Allow ``python -m sundrop``."""

from sundrop.cli import run

run()
