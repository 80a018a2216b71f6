"""
정책을 적용하는 WeasyPrint URL fetcher.

WeasyPrint URLFetcher 계약:
- fetch(url, headers) → URLFetcherResponse
- fetch 중 예외 → WeasyPrint가 URLFetchingError 경고로 바꾸고 해당 asset만 생략
  (fail_on_errors=True면 FatalURLFetchingError로 변환 중단)
- 리다이렉트도 open() → fetch()를 거치므로 같은 정책이 적용됨

WeasyPrint import는 네이티브 라이브러리(pango)를 로드하므로 이 모듈은
변환 시점에만 import.
"""

from typing import Any

from weasyprint.urls import URLFetcher, URLFetcherResponse

from docbinder.domain.errors import ResourceAccessDenied
from docbinder.domain.schemas import GenerationLog

from .resources import ResourceAccessPolicy, check_resource_access


class FilteringResourceRetriever(URLFetcher):
    """
    ResourceAccessPolicy를 적용하는 url_fetcher.

    차단된 URL은 ResourceAccessDenied(ValueError) → WeasyPrint는 경고 후
    해당 asset만 생략하고 변환을 계속함. 허용된 URL은 기본 URLFetcher로 위임.

    Usage:
        fetcher = FilteringResourceRetriever(policy, generation_log=log)
        HTML(string=text, base_url=base_url, url_fetcher=fetcher).write_pdf()

    Args:
        policy: ResourceAccessPolicy
        generation_log: 차단 경고를 기록할 GenerationLog (선택)
        **kwargs: URLFetcher 옵션 (timeout, allowed_protocols, fail_on_errors 등)
    """

    def __init__(
        self,
        policy: ResourceAccessPolicy,
        generation_log: GenerationLog | None = None,
        **kwargs: Any,
    ) -> None:
        super().__init__(**kwargs)
        self.policy = policy
        self._generation_log = generation_log

    def fetch(self, url: str, headers: dict[str, str] | None = None) -> URLFetcherResponse:
        check_resource_access(self.policy, url, self._generation_log)
        return super().fetch(url, headers)

    def get_bytes(self, url: str) -> bytes | None:
        """
        URL 내용을 bytes로 반환. 차단되면 None.

        WeasyPrint 렌더링 밖에서 정책을 적용할 때 사용.
        """
        try:
            response = self.fetch(url)
        except ResourceAccessDenied:
            return None
        try:
            return response.read()
        finally:
            response.close()
