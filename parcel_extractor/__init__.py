"""County property page extraction: owners, sales, taxes and their relationships."""

__version__ = "0.1.0"
