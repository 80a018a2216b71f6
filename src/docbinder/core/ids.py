"""
ID 생성: generation_id

규칙:
- 생성 호출마다 새 ID 발급 (재사용 금지)
- 파일명으로 사용 가능한 문자만
"""

import uuid
from datetime import UTC, datetime

from docbinder.domain.constants import GENERATION_ID_PREFIX


def generate_generation_id() -> str:
    """
    Generation ID 생성.

    고유성 보장: UUID v4
    포맷: GEN-{timestamp}-{uuid[:8]}

    Returns:
        generation_id 문자열
    """
    now = datetime.now(UTC)
    timestamp = now.strftime("%Y%m%d%H%M%S")
    unique = uuid.uuid4().hex[:8]

    return f"{GENERATION_ID_PREFIX}{timestamp}-{unique}"
