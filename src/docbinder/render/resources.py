"""
Resource access policy: 마크업 변환 중 외부 asset fetch 허용 목록.

규칙:
- scheme/host 허용 목록은 대소문자 무시, 공백 제거, 중복 제거
- 빈 목록 = 해당 차원 제한 없음
- 빈 host (file: URL 등)는 host 검사 통과
- 차단된 fetch는 에러가 아닌 soft denial → asset 생략
"""

from collections.abc import Iterable
from dataclasses import dataclass, field
from urllib.parse import urlsplit

from docbinder.core.logging import emit_warning
from docbinder.domain.errors import (
    ConfigurationError,
    ErrorCodes,
    ResourceAccessDenied,
)
from docbinder.domain.schemas import GenerationLog


def _normalize(entries: Iterable[str] | None, kind: str) -> frozenset[str]:
    normalized = set()
    for entry in entries or ():
        if entry is None or not str(entry).strip():
            raise ConfigurationError(
                ErrorCodes.INVALID_POLICY_ENTRY,
                kind=kind,
                value=entry,
            )
        normalized.add(str(entry).strip().lower())
    return frozenset(normalized)


@dataclass(frozen=True)
class ResourceAccessPolicy:
    """
    불변 허용 목록. 여러 생성 호출에서 공유 가능.

    Usage:
        policy = ResourceAccessPolicy(allowed_schemes=["file"], allowed_hosts=["cdn.example.com"])
        policy.should_allow("https://cdn.example.com/logo.png")  # False (scheme)
    """

    allowed_schemes: frozenset[str] = field(default_factory=frozenset)
    allowed_hosts: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_schemes", _normalize(self.allowed_schemes, "scheme"))
        object.__setattr__(self, "allowed_hosts", _normalize(self.allowed_hosts, "host"))

    @property
    def has_restrictions(self) -> bool:
        return bool(self.allowed_schemes or self.allowed_hosts)

    def allow_schemes(self, *schemes: str) -> "ResourceAccessPolicy":
        """scheme을 추가한 새 정책 반환."""
        return ResourceAccessPolicy(
            allowed_schemes=self.allowed_schemes | _normalize(schemes, "scheme"),
            allowed_hosts=self.allowed_hosts,
        )

    def allow_hosts(self, *hosts: str) -> "ResourceAccessPolicy":
        """host를 추가한 새 정책 반환."""
        return ResourceAccessPolicy(
            allowed_schemes=self.allowed_schemes,
            allowed_hosts=self.allowed_hosts | _normalize(hosts, "host"),
        )

    def allows_scheme(self, scheme: str) -> bool:
        if not self.allowed_schemes:
            return True
        return scheme.lower() in self.allowed_schemes

    def allows_host(self, host: str | None) -> bool:
        if not self.allowed_hosts:
            return True
        if not host or not host.strip():
            return True
        return host.lower() in self.allowed_hosts

    def should_allow(self, uri: str) -> bool:
        """
        URI fetch 허용 여부.

        1. scheme 목록이 있고 scheme이 없으면 거부
        2. host 목록이 있고 host가 없으면 거부
        3. 그 외 허용
        """
        parts = urlsplit(uri)
        if not self.allows_scheme(parts.scheme):
            return False
        return self.allows_host(parts.hostname)


def check_resource_access(
    policy: ResourceAccessPolicy,
    url: str,
    generation_log: GenerationLog | None = None,
) -> None:
    """
    정책 검사. 차단 시 경고 기록 후 ResourceAccessDenied.

    Args:
        policy: ResourceAccessPolicy
        url: fetch 대상 URL
        generation_log: 차단 경고를 기록할 GenerationLog (선택)

    Raises:
        ResourceAccessDenied: 정책에 의해 차단
    """
    if policy.should_allow(url):
        return
    emit_warning(
        generation_log,
        code=ErrorCodes.RESOURCE_ACCESS_DENIED,
        action_id="fetch_resource",
        field_or_slot=url,
        message="Resource blocked by access policy",
        original_value=url,
    )
    raise ResourceAccessDenied(url)
