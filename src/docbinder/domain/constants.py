"""
Domain Constants: 문서 생성 전역 상수.

포맷 기본값, 체크박스 상태값, 로그 마커, 차트 크기 등 시스템 전반에서 사용되는 값들.
"""

# =============================================================================
# Locale (로케일 기본값)
# =============================================================================

DEFAULT_LOCALE = "en_US"

# =============================================================================
# Formats (포맷 기본값)
# =============================================================================
# 숫자: "N" = 그룹 구분 + 소수 2자리, "N0"/"N3" 등으로 자리수 지정
# 날짜: "G" = 날짜 short + 시간 medium

DEFAULT_NUMBER_FORMAT = "N"
DEFAULT_NUMBER_DECIMALS = 2
DEFAULT_DATE_FORMAT = "G"

# 마크업 필터 기본값
FILTER_DATE_FORMAT = "dd/MM/yyyy"
FILTER_DATETIME_FORMAT = "dd/MM/yyyy HH:mm"
FILTER_DATE_PRESET = "short"
FILTER_CURRENCY_DECIMALS = 2

# format_date_preset 고정 패턴 (로케일 무관)
FIXED_DATE_PRESETS = {
    "monthyear": "MMMM yyyy",
    "iso": "yyyy-MM-dd",
}

# =============================================================================
# Form Fields (폼 필드 값)
# =============================================================================

CHECKBOX_ON = "Yes"
CHECKBOX_OFF = "Off"

# =============================================================================
# Markup Context (렌더링 컨텍스트)
# =============================================================================

# 데이터 아이템 자체가 등록되는 이름 → placeholder 이름으로 사용 불가
MODEL_CONTEXT_KEY = "Model"
DOCX_TEMPLATE_SUFFIXES = (".docx",)

# =============================================================================
# Logging (진단 로그)
# =============================================================================

TRUNCATION_MARKER = "... [truncated]"

GENERATION_ID_PREFIX = "GEN-"

# =============================================================================
# Charts (차트 기본값)
# =============================================================================

DEFAULT_CHART_WIDTH = 800
DEFAULT_CHART_HEIGHT = 450
