"""Web search providers used to collect evidence snippets per candidate."""

from qa_extractor.search.provider import (
    GoogleCustomSearchProvider,
    SearchProviderError,
    StaticSearchProvider,
    WebSearchProvider,
)

__all__ = [
    "GoogleCustomSearchProvider",
    "SearchProviderError",
    "StaticSearchProvider",
    "WebSearchProvider",
]
