"""Reflow text files to a fixed width, one worker thread per file."""

__version__ = "0.1.0"
