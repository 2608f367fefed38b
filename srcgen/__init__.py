"""Build-time source generators for front-end packages."""

__version__ = "0.1.0"
