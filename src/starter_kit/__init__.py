"""starter-kit - answers and tokens for scaffolding new libraries."""

__version__ = "0.1.0"
