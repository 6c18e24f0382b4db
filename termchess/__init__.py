"""Two-player chess in the terminal: rules, clocks, draw detection and save files."""

__version__ = "1.0.0"