"""hooksig — hook signature registry and resolver for static analyzers."""

__version__ = "0.1.0"
