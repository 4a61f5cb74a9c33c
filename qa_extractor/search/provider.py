"""Web search provider contract and implementations.

A provider turns a query string into one block of result text (the snippets of
the top results joined together). Evidence indexing calls it once per candidate
answer, so it is the slow, failure-prone part of ranking: the HTTP client takes
a per-call timeout and retries transient failures with exponential backoff.
"""

from __future__ import annotations

import logging
import time
from abc import ABC, abstractmethod
from typing import Callable, Dict, List, Mapping, Optional, Union

import requests


log = logging.getLogger("qa_extractor.search")

GOOGLE_CSE_URL = "https://www.googleapis.com/customsearch/v1"

_RETRYABLE_STATUS_CODES = frozenset({429, 500, 502, 503, 504})


class SearchProviderError(RuntimeError):
    """A search call failed (network error, timeout, quota, bad response)."""


class WebSearchProvider(ABC):
    """Contract every search backend must fulfil."""

    @abstractmethod
    def search(self, query: str) -> str:
        """Return the result text for `query`; raise SearchProviderError on failure."""
        ...


class StaticSearchProvider(WebSearchProvider):
    """Offline provider backed by a mapping or a callable.

    Mapping lookups try the exact query first, then the whitespace-normalized
    query. Unknown queries return `default`, or raise if `default` is None.
    """

    def __init__(
        self,
        results: Union[Mapping[str, str], Callable[[str], str]],
        *,
        default: Optional[str] = "",
    ) -> None:
        self._results = results
        self.default = default
        self.calls: List[str] = []

    def search(self, query: str) -> str:
        self.calls.append(query)
        if callable(self._results):
            return str(self._results(query))
        if query in self._results:
            return self._results[query]
        normalized = " ".join(query.split())
        if normalized in self._results:
            return self._results[normalized]
        if self.default is None:
            raise SearchProviderError(f"No static result for query {query!r}")
        return self.default


def _join_snippets(items: List[Mapping[str, object]]) -> str:
    parts: List[str] = []
    for item in items:
        title = str(item.get("title") or "").strip()
        snippet = str(item.get("snippet") or "").strip()
        text = " ".join(p for p in (title, snippet) if p)
        if text:
            parts.append(text)
    return "\n".join(parts)


class GoogleCustomSearchProvider(WebSearchProvider):
    """Google Custom Search JSON API client.

    Result text is the title and snippet of each returned item, one per line.
    """

    def __init__(
        self,
        api_key: str,
        engine_id: str,
        *,
        num_results: int = 10,
        timeout: float = 10.0,
        max_retries: int = 2,
        backoff: float = 0.5,
        api_url: str = GOOGLE_CSE_URL,
        session: Optional[requests.Session] = None,
    ) -> None:
        if not isinstance(api_key, str) or not api_key.strip():
            raise ValueError("api_key must be a non-empty string")
        if not isinstance(engine_id, str) or not engine_id.strip():
            raise ValueError("engine_id must be a non-empty string")
        if not isinstance(num_results, int) or not (1 <= num_results <= 10):
            raise ValueError("num_results must be an integer in [1, 10]")
        if timeout <= 0:
            raise ValueError("timeout must be > 0")
        if not isinstance(max_retries, int) or max_retries < 0:
            raise ValueError("max_retries must be a non-negative integer")
        if backoff < 0:
            raise ValueError("backoff must be >= 0")
        self.api_key = api_key
        self.engine_id = engine_id
        self.num_results = num_results
        self.timeout = float(timeout)
        self.max_retries = max_retries
        self.backoff = float(backoff)
        self.api_url = api_url
        self._session = session or requests.Session()

    @classmethod
    def from_env(cls, env: Mapping[str, str], **kwargs) -> "GoogleCustomSearchProvider":
        """Factory: build from `GOOGLE_API_KEY` / `GOOGLE_CSE_ID`."""
        api_key = env.get("GOOGLE_API_KEY", "")
        engine_id = env.get("GOOGLE_CSE_ID", "")
        if not api_key or not engine_id:
            raise ValueError("GOOGLE_API_KEY and GOOGLE_CSE_ID must be set for Google search")
        return cls(api_key=api_key, engine_id=engine_id, **kwargs)

    def _sleep_before_retry(self, attempt: int, reason: str, query: str) -> None:
        wait = self.backoff * (2 ** attempt)
        log.warning("Google search: %s, retry %d/%d in %.2fs (query=%s)",
                    reason, attempt + 1, self.max_retries, wait, query[:80])
        time.sleep(wait)

    def search(self, query: str) -> str:
        params: Dict[str, object] = {
            "key": self.api_key,
            "cx": self.engine_id,
            "q": query,
            "num": self.num_results,
        }
        t0 = time.perf_counter()
        last_error = "unknown"
        for attempt in range(self.max_retries + 1):
            try:
                response = self._session.get(self.api_url, params=params, timeout=self.timeout)
            except requests.exceptions.Timeout:
                last_error = f"timeout after {self.timeout}s"
            except requests.exceptions.RequestException as exc:
                last_error = f"request error: {exc}"
            else:
                if response.status_code in _RETRYABLE_STATUS_CODES:
                    last_error = f"HTTP {response.status_code}"
                elif response.status_code >= 400:
                    raise SearchProviderError(
                        f"Google search failed with HTTP {response.status_code}: {response.text[:200]}"
                    )
                else:
                    try:
                        data = response.json()
                    except ValueError as e:
                        raise SearchProviderError("Google search returned invalid JSON") from e
                    text = _join_snippets(data.get("items") or [])
                    log.debug("Google search ok: elapsed=%.2fs query=%s chars=%d",
                              time.perf_counter() - t0, query[:80], len(text))
                    return text

            if attempt < self.max_retries:
                self._sleep_before_retry(attempt, last_error, query)

        raise SearchProviderError(f"Google search failed after {self.max_retries + 1} attempts: {last_error}")
