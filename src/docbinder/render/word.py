"""
Word (DOCX) 마크업 렌더러: docxtpl 기반.

- docxtpl 템플릿 렌더링 ({{ Name }}, {% for %} 등 Jinja2 문법)
- 마크업 경로와 같은 컨텍스트 + locale 필터 사용
- 결과는 DOCX 바이트 (PDF 변환 없음)
"""

import io
from pathlib import Path
from typing import Any

from docxtpl import DocxTemplate
from jinja2 import Environment

from docbinder.domain.errors import (
    DocumentGenerationError,
    ErrorCodes,
    RenderError,
    TemplateNotFoundError,
)


class DocxRenderer:
    """
    Word 문서 렌더러.

    Usage:
        renderer = DocxRenderer(template_path)
        docx_bytes = renderer.render(context, jinja_env)
    """

    def __init__(self, template_path: Path):
        """
        Args:
            template_path: DOCX 템플릿 파일 경로

        Raises:
            TemplateNotFoundError: 템플릿 없음
        """
        if not template_path.exists():
            raise TemplateNotFoundError(
                ErrorCodes.TEMPLATE_NOT_FOUND,
                path=str(template_path),
            )

        self.template_path = template_path
        self._doc: DocxTemplate | None = None

    def _load_template(self) -> DocxTemplate:
        """템플릿 로드 (lazy)."""
        if self._doc is None:
            self._doc = DocxTemplate(self.template_path)
        return self._doc

    def render(self, context: dict[str, Any], jinja_env: Environment | None = None) -> bytes:
        """
        템플릿에 컨텍스트를 채워 DOCX 바이트 생성.

        Args:
            context: placeholder 이름 → 값 (+ Model)
            jinja_env: 필터가 설치된 Jinja2 Environment

        Returns:
            DOCX 바이트

        Raises:
            RenderError: RENDER_FAILED
        """
        try:
            doc = self._load_template()
            doc.render(context, jinja_env=jinja_env, autoescape=True)

            buffer = io.BytesIO()
            doc.save(buffer)
            return buffer.getvalue()

        except DocumentGenerationError:
            raise
        except Exception as e:
            raise RenderError(
                ErrorCodes.RENDER_FAILED,
                template=str(self.template_path),
                error=str(e),
            ) from e
