"""
Configuration: default.yaml / 환경변수 → GeneratorSettings

우선순위:
1. 명시적 config_path 인자
2. DOCBINDER_CONFIG 환경변수
3. 패키지 기본 default.yaml
license_path는 DOCBINDER_LICENSE_PATH가 있으면 그 값을 사용.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

from docbinder.domain.constants import DEFAULT_LOCALE
from docbinder.domain.errors import ConfigurationError, ErrorCodes

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR = "DOCBINDER_CONFIG"
LICENSE_ENV_VAR = "DOCBINDER_LICENSE_PATH"

DEFAULT_CONFIG_PATH = Path(__file__).parent.parent / "default.yaml"


def load_config(config_path: Path | None = None) -> dict:
    """설정 파일 로드."""
    if config_path is None:
        env_path = os.environ.get(CONFIG_ENV_VAR)
        config_path = Path(env_path) if env_path else DEFAULT_CONFIG_PATH

    if not config_path.exists():
        logger.debug(f"Config file not found, using defaults: {config_path}")
        return {}

    with open(config_path, encoding="utf-8") as f:
        data: dict[Any, Any] = yaml.safe_load(f) or {}
        return data


@dataclass(frozen=True)
class GeneratorSettings:
    """
    프로세스 단위 생성 기본값.

    builder.apply_settings(settings)로 각 생성 설정에 주입.
    """

    locale: str = DEFAULT_LOCALE
    log_rendered_markup: bool = True
    log_max_length: int | None = None
    allowed_schemes: tuple[str, ...] = ()
    allowed_hosts: tuple[str, ...] = ()
    license_path: str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "GeneratorSettings":
        """
        설정 dict → GeneratorSettings.

        Raises:
            ConfigurationError: log_max_length가 양수가 아님
        """
        markup = data.get("markup") or {}
        resources = data.get("resources") or {}

        max_length = markup.get("log_max_length")
        if max_length is not None and (not isinstance(max_length, int) or max_length <= 0):
            raise ConfigurationError(
                ErrorCodes.INVALID_OPTION,
                option="markup.log_max_length",
                value=max_length,
            )

        license_path = os.environ.get(LICENSE_ENV_VAR) or data.get("license_path")

        return cls(
            locale=str(data.get("locale") or DEFAULT_LOCALE),
            log_rendered_markup=bool(markup.get("log_rendered", True)),
            log_max_length=max_length,
            allowed_schemes=tuple(resources.get("allowed_schemes") or ()),
            allowed_hosts=tuple(resources.get("allowed_hosts") or ()),
            license_path=str(license_path) if license_path else None,
        )


def load_settings(config_path: Path | None = None) -> GeneratorSettings:
    """설정 파일 로드 후 GeneratorSettings 생성."""
    return GeneratorSettings.from_dict(load_config(config_path))
