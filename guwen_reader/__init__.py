"""Terminal browser for the guwen classical-text collection."""

__version__ = "0.3.0"
