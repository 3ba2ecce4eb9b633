"""
Template Fetch Provider Abstraction.

다운로드/압축 해제 방식 교체 가능하게 설계.
코어(src/templates)는 download() 인터페이스만 의존.
"""

from .base import FetchError, TemplateFetcher, TemplateSource, parse_source
from .tarball import TarballFetcher

__all__ = [
    "TemplateFetcher",
    "TemplateSource",
    "FetchError",
    "parse_source",
    "TarballFetcher",
]
