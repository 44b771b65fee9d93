"""tasktrack: a terminal to-do list persisted to a delimited text file."""

from tasktrack.config import VERSION

__version__ = VERSION
