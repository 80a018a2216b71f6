"""
선택적 라이선스/에셋 파일.

파일이 없어도 실패하지 않음 → 생성기는 LICENSE_NOT_FOUND 경고 후 계속 진행.
"""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)


def load_license_file(path: str | Path | None) -> bool:
    """
    라이선스 파일 확인.

    Args:
        path: 라이선스 파일 경로 (None/빈 값 허용)

    Returns:
        파일이 존재하고 읽을 수 있으면 True
    """
    if path is None or not str(path).strip():
        return False

    license_path = Path(path)
    if not license_path.is_file():
        return False

    try:
        license_path.read_bytes()
    except OSError as e:
        logger.debug(f"License file not readable: {license_path} ({e})")
        return False

    logger.debug(f"License file loaded: {license_path}")
    return True
