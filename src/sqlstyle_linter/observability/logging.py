"""로깅 설정."""

from __future__ import annotations

import logging
import logging.config
from pathlib import Path
import sys
from typing import Any

import yaml

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"


def setup_logging(config_path: Path | None = None, *, verbose: bool = False) -> None:
    """로깅 초기화. config_path YAML 로딩 실패 시 기본 설정 적용.

    기본 설정은 stderr, WARNING 레벨 (verbose 이면 DEBUG).
    """
    if config_path is not None:
        try:
            with open(config_path, encoding="utf-8") as f:
                config: dict[str, Any] = yaml.safe_load(f)
            logging.config.dictConfig(config)
            if verbose:
                logging.getLogger().setLevel(logging.DEBUG)
            return
        except (OSError, yaml.YAMLError, ValueError, TypeError, AttributeError) as exc:
            print(f"logging config ignored ({config_path}): {exc}", file=sys.stderr)

    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        stream=sys.stderr,
        force=True,
    )


def get_logger(name: str) -> logging.Logger:
    """표준 로거 반환."""
    return logging.getLogger(name)
