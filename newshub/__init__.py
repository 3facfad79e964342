"""NewsHub static news site tools."""

__version__ = "0.1.0"
