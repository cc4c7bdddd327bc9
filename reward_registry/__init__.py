"""Customer, product and gift registry with flat-text persistence."""

__version__ = "0.1.0"
