"""Simple Blog - a minimal blogging web application."""

__version__ = "0.1.0"
