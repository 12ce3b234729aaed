"""SQL style guide linter and formatter."""

__version__ = "0.1.0"
