"""POS terminal: product lookup, purchase list and checkout against a POS backend."""

__version__ = "0.1.0"
