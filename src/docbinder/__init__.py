"""
docbinder: 데이터 아이템 + 템플릿 → 완성 문서.

Usage:
    from docbinder import FormGenerationBuilder, FormPdfGenerator

    config = (
        FormGenerationBuilder()
        .use_template_path("invoice.pdf")
        .set_data(invoice)
        .add_text("Customer", lambda m: m.customer)
        .build()
    )
    pdf_bytes = FormPdfGenerator().generate(config)
"""

from docbinder.core import (
    CancellationToken,
    GeneratorSettings,
    LocaleScope,
    create_generation_log,
    load_settings,
    save_generation_log,
)
from docbinder.domain import (
    BarChartConfig,
    ConfigurationError,
    DocumentGenerationError,
    GenerationCancelledError,
    GenerationLog,
    GroupedBarChartConfig,
    NumericAndTextValue,
    PieChartConfig,
    PostProcessorExecutionError,
    RenderError,
    ResourceAccessDenied,
    TemplateNotFoundError,
    TemplateParseError,
)
from docbinder.postprocess import (
    Classification,
    DocumentClassifierPostProcessor,
    PasswordProtectPostProcessor,
    PdfSignatureOptions,
    PfxSignaturePostProcessor,
    PostProcessor,
)
from docbinder.render import (
    FormGenerationBuilder,
    FormPdfGenerator,
    MarkupGenerationBuilder,
    MarkupGenerator,
    MultiColumn,
    PairedColumns,
    ResourceAccessPolicy,
    SheetColumn,
    SheetGenerationBuilder,
    SheetGenerator,
    WorkbookBuilder,
)

__version__ = "0.1.0"

__all__ = [
    # builders / generators
    "FormGenerationBuilder",
    "FormPdfGenerator",
    "MarkupGenerationBuilder",
    "MarkupGenerator",
    "SheetGenerationBuilder",
    "SheetGenerator",
    "SheetColumn",
    "MultiColumn",
    "PairedColumns",
    "WorkbookBuilder",
    "ResourceAccessPolicy",
    # post-processors
    "PostProcessor",
    "PasswordProtectPostProcessor",
    "Classification",
    "DocumentClassifierPostProcessor",
    "PdfSignatureOptions",
    "PfxSignaturePostProcessor",
    # core
    "CancellationToken",
    "LocaleScope",
    "GeneratorSettings",
    "load_settings",
    "create_generation_log",
    "save_generation_log",
    # domain
    "NumericAndTextValue",
    "PieChartConfig",
    "BarChartConfig",
    "GroupedBarChartConfig",
    "GenerationLog",
    "DocumentGenerationError",
    "ConfigurationError",
    "TemplateNotFoundError",
    "TemplateParseError",
    "RenderError",
    "PostProcessorExecutionError",
    "GenerationCancelledError",
    "ResourceAccessDenied",
]
