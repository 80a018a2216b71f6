"""
Placeholder layer: 데이터 아이템 → 슬롯 값.

역할:
- 이름 있는 순수 resolver (text, number, date, boolean, collection,
  composite, graphic)
"""

from .base import LocalizedPlaceholder, Placeholder, ValueKind
from .charts import (
    BarChartPlaceholder,
    GroupedBarChartPlaceholder,
    PieChartPlaceholder,
    make_responsive,
    remove_xml_headers,
)
from .values import (
    CheckboxPlaceholder,
    CollectionPlaceholder,
    DatePlaceholder,
    FlagPlaceholder,
    LocalizedDatePlaceholder,
    LocalizedNumericPlaceholder,
    NumericAndTextPlaceholder,
    NumericPlaceholder,
    TextPlaceholder,
)

__all__ = [
    "Placeholder",
    "LocalizedPlaceholder",
    "ValueKind",
    "TextPlaceholder",
    "NumericPlaceholder",
    "LocalizedNumericPlaceholder",
    "DatePlaceholder",
    "LocalizedDatePlaceholder",
    "NumericAndTextPlaceholder",
    "FlagPlaceholder",
    "CheckboxPlaceholder",
    "CollectionPlaceholder",
    "PieChartPlaceholder",
    "BarChartPlaceholder",
    "GroupedBarChartPlaceholder",
    "remove_xml_headers",
    "make_responsive",
]
