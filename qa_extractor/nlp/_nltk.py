"""Lazy NLTK access with actionable errors."""

from __future__ import annotations

from typing import Callable, Sequence, TypeVar

T = TypeVar("T")


def require_nltk():
    try:
        import nltk  # type: ignore
    except Exception as e:
        raise RuntimeError(
            "The default tagger/chunker need 'nltk', a core dependency of this package.\n"
            "Reinstall the package or install it with:\n"
            "  python -m pip install nltk\n"
        ) from e
    return nltk


def with_nltk_data(fn: Callable[[], T], packages: Sequence[str]) -> T:
    """Run `fn`, turning missing NLTK data into a LookupError with download instructions."""
    try:
        return fn()
    except LookupError as e:
        raise LookupError(
            "NLTK data is missing. Run:\n"
            f"  python -m nltk.downloader {' '.join(packages)}\n"
        ) from e
