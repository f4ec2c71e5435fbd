"""Command line interface and interactive menus for multi-shop."""

__version__ = "1.0.0"
