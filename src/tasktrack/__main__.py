"""Allow ``python -m tasktrack``."""

from tasktrack.cli import main

main()
