"""
Render layer: 템플릿 + 데이터 아이템 → 문서 바이트.

역할:
- Form PDF 채우기 (pypdf)
- 마크업 템플릿 렌더링 → PDF 변환 (Jinja2 + WeasyPrint), DOCX (docxtpl)
- XLSX Named Range 채우기, 템플릿 없는 워크북 생성 (openpyxl)
- 설정 builder, 리소스 접근 정책
"""

from .configuration import (
    FormGenerationBuilder,
    GenerationConfiguration,
    MarkupGenerationBuilder,
)
from .converter import MarkupConverter, WeasyPrintConverter
from .filters import build_filters
from .form import FormPdfGenerator
from .markup import MarkupGenerator
from .resources import ResourceAccessPolicy, check_resource_access
from .sheet import (
    MultiColumn,
    PairedColumns,
    SheetColumn,
    SheetConfiguration,
    SheetGenerationBuilder,
    SheetGenerator,
    WorkbookBuilder,
    WorkbookConfiguration,
    WorksheetDefinition,
)
from .word import DocxRenderer

__all__ = [
    "GenerationConfiguration",
    "FormGenerationBuilder",
    "MarkupGenerationBuilder",
    "FormPdfGenerator",
    "MarkupGenerator",
    "MarkupConverter",
    "WeasyPrintConverter",
    "DocxRenderer",
    "build_filters",
    "ResourceAccessPolicy",
    "check_resource_access",
    "SheetColumn",
    "SheetConfiguration",
    "SheetGenerationBuilder",
    "SheetGenerator",
    "MultiColumn",
    "PairedColumns",
    "WorkbookBuilder",
    "WorkbookConfiguration",
    "WorksheetDefinition",
]
