"""Domain layer: errors, schemas and constants."""

from .errors import (
    ConfigurationError,
    DocumentGenerationError,
    ErrorCodes,
    GenerationCancelledError,
    PostProcessorExecutionError,
    RenderError,
    ResourceAccessDenied,
    TemplateNotFoundError,
    TemplateParseError,
)
from .schemas import (
    BarChartConfig,
    BarChartOrientation,
    GenerationLog,
    GroupedBarChartConfig,
    LabelPlacement,
    NumericAndTextValue,
    PieChartConfig,
    WarningLog,
)

__all__ = [
    "DocumentGenerationError",
    "ConfigurationError",
    "TemplateNotFoundError",
    "TemplateParseError",
    "RenderError",
    "PostProcessorExecutionError",
    "GenerationCancelledError",
    "ResourceAccessDenied",
    "ErrorCodes",
    "NumericAndTextValue",
    "PieChartConfig",
    "BarChartConfig",
    "GroupedBarChartConfig",
    "BarChartOrientation",
    "LabelPlacement",
    "WarningLog",
    "GenerationLog",
]
