"""Rules engine and terminal driver for a cellar solitaire variant."""

__version__ = "0.1.0"
