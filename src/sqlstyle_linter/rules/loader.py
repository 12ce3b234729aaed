"""YAML 기반 린터 설정 로딩."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

import yaml

from sqlstyle_linter.common import SEVERITIES, ConfigError, Severity

from .models import DEFAULT_PROFILE, PROFILES, LinterConfig, LinterSettings

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_NAME = ".sqlstyle.yaml"


def load_linter_config(config_path: Path | None = None, *, search_dir: Path | None = None) -> LinterConfig:
    """.sqlstyle.yaml 로딩.

    명시한 경로가 없거나 읽을 수 없거나 값이 잘못되면 ConfigError.
    경로가 없으면 작업 디렉터리의 .sqlstyle.yaml, 그것도 없으면 기본값.
    """
    if config_path is None:
        candidate = (search_dir or Path.cwd()) / DEFAULT_CONFIG_NAME
        if not candidate.is_file():
            logger.debug("설정 파일 없음, 기본값 사용")
            return LinterConfig()
        config_path = candidate

    data = _load_yaml(config_path)
    linter: Any = data.get("linter", {})
    if linter is None:
        linter = {}
    if not isinstance(linter, dict):
        raise ConfigError(f"{config_path}: 'linter' must be a mapping")

    try:
        rules_raw = _mapping(linter.get("rules"), "linter.rules")
        settings_raw = _mapping(linter.get("settings"), "linter.settings")
        severity_raw = _mapping(linter.get("severity"), "linter.severity")

        profile = str(linter.get("profile", DEFAULT_PROFILE))
        if profile not in PROFILES:
            raise ConfigError(f"unknown profile: {profile}")

        settings = LinterSettings(
            max_identifier_length=_positive_int(
                settings_raw.get("max_identifier_length", 30), "max_identifier_length"
            ),
            indent_width=_positive_int(settings_raw.get("indent_width", 4), "indent_width"),
        )

        overrides: dict[str, Severity] = {}
        for rule_id, value in severity_raw.items():
            level = str(value).lower()
            if level not in SEVERITIES:
                raise ConfigError(f"invalid severity for {rule_id}: {value!r}")
            overrides[str(rule_id)] = level  # type: ignore[assignment]

        config = LinterConfig(
            profile=profile,
            enable=_id_list(rules_raw.get("enable"), "linter.rules.enable"),
            disable=_id_list(rules_raw.get("disable"), "linter.rules.disable"),
            severity_overrides=overrides,
            settings=settings,
            workers=_positive_int(linter.get("workers", 1), "workers"),
            source=config_path,
        )
    except ConfigError as exc:
        raise ConfigError(f"{config_path}: {exc}") from None

    logger.info("설정 로딩: %s (profile=%s)", config_path, config.profile)
    return config


def _load_yaml(path: Path) -> dict[str, Any]:
    try:
        with open(path, encoding="utf-8") as f:
            result = yaml.safe_load(f)
    except OSError as exc:
        raise ConfigError(f"cannot read configuration {path}: {exc}") from exc
    except yaml.YAMLError as exc:
        raise ConfigError(f"invalid YAML in {path}: {exc}") from exc

    if result is None:
        return {}
    if not isinstance(result, dict):
        raise ConfigError(f"{path}: configuration must be a mapping")
    return result


def _mapping(value: Any, name: str) -> dict[str, Any]:
    if value is None:
        return {}
    if not isinstance(value, dict):
        raise ConfigError(f"'{name}' must be a mapping")
    return value


def _id_list(value: Any, name: str) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ConfigError(f"'{name}' must be a list of rule ids")
    return tuple(str(item) for item in value)


def _positive_int(value: Any, name: str) -> int:
    if isinstance(value, bool):
        raise ConfigError(f"'{name}' must be a positive integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ConfigError(f"'{name}' must be a positive integer") from None
    if number < 1:
        raise ConfigError(f"'{name}' must be a positive integer")
    return number
