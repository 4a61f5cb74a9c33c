import tempfile

import pytest

from qa_extractor.config import ExtractorConfig, config_from_mapping, default_extractor_config


def test_defaults():
    cfg = default_extractor_config()
    assert cfg.index_backend == "local"
    assert cfg.stop_labels == ("PP", "SBAR")
    assert cfg.question_words == ("how", "what", "who", "which", "where", "when")
    assert cfg.search_workers == 1 and cfg.passage_workers == 1


@pytest.mark.parametrize(
    "kwargs",
    [
        {"index_backend": "faiss"},
        {"bm25_k1": 0},
        {"bm25_b": 1.5},
        {"search_workers": 0},
        {"passage_workers": -1},
        {"search_timeout": 0},
        {"search_retries": -1},
        {"search_backoff": -0.1},
        {"stop_labels": ("PP", "")},
    ],
)
def test_validate_rejects_bad_values(kwargs):
    with pytest.raises(ValueError):
        ExtractorConfig(**kwargs).validate()


def test_config_from_mapping():
    cfg = config_from_mapping({"index_backend": "lucene", "bm25_k1": None, "stop_labels": "PP"})
    assert cfg.index_backend == "lucene"
    assert cfg.bm25_k1 == 0.9
    assert cfg.stop_labels == ("PP",)


def test_config_from_mapping_rejects_unknown_keys():
    with pytest.raises(ValueError, match="Unknown config keys"):
        config_from_mapping({"index_path": "/tmp"})


def test_resolved_index_root(monkeypatch):
    monkeypatch.delenv("ANSWER_INDEX_PATH", raising=False)
    assert ExtractorConfig().resolved_index_root() == tempfile.gettempdir()
    monkeypatch.setenv("ANSWER_INDEX_PATH", "/data/answers")
    assert ExtractorConfig().resolved_index_root() == "/data/answers"
    assert ExtractorConfig(index_root="/explicit").resolved_index_root() == "/explicit"


def test_search_provider_options_configure_google_provider():
    from qa_extractor.search.provider import GoogleCustomSearchProvider

    cfg = config_from_mapping({"search_timeout": 3.0, "search_retries": 0, "search_backoff": 0.25})
    provider = GoogleCustomSearchProvider("key", "cx", **cfg.search_provider_options())
    assert provider.timeout == 3.0
    assert provider.max_retries == 0
    assert provider.backoff == 0.25
