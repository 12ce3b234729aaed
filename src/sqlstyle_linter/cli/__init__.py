"""명령행 인터페이스."""

from .parser import build_parser

__all__ = ["build_parser"]
