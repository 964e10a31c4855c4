"""Order, stock and payment application layers for a small ordering system."""

__version__ = "0.1.0"