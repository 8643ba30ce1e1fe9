"""Pizzaria auto-deploy: keep a compose-based app in sync with its git repository."""

__version__ = "0.1.0"
