import logging
import sys

import pytest

import main as cli

from conftest import DictTagger, FixedChunker


TEXT = "Alan Turing proposed the test."


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger()
    level, handlers = root.level, list(root.handlers)
    yield
    root.setLevel(level)
    root.handlers[:] = handlers


@pytest.fixture
def offline_nlp(monkeypatch):
    monkeypatch.setattr(cli, "NltkEntityTagger", lambda: DictTagger({TEXT: f"<PERSON>Alan Turing</PERSON> proposed the test."}))
    monkeypatch.setattr(cli, "NltkChunker", lambda: FixedChunker("[NP Who] [VP proposed] [NP the test] ?"))


def test_main_static_search_writes_results(tmp_path, monkeypatch, offline_nlp):
    passages = tmp_path / "passages.tsv"
    passages.write_text(f"d1\t{TEXT}\nd2\tNothing to see.\n", encoding="utf-8")
    evidence = tmp_path / "evidence.tsv"
    evidence.write_text("proposed the test Alan Turing\tAlan Turing proposed the test in 1950.\n", encoding="utf-8")
    output = tmp_path / "results.tsv"

    monkeypatch.setattr(
        sys,
        "argv",
        [
            "main.py",
            "--question", "Who proposed the test?",
            "--query-type", "HUM",
            "--query-subtype", "ind",
            "--passages", str(passages),
            "--search", "static",
            "--evidence", str(evidence),
            "--output", str(output),
            "--log-level", "WARNING",
        ],
    )
    assert cli.main() == 0
    assert output.read_text(encoding="utf-8") == "Alan Turing\td1\n"


def test_static_search_requires_evidence_file(tmp_path, monkeypatch, offline_nlp):
    passages = tmp_path / "passages.tsv"
    passages.write_text(f"d1\t{TEXT}\n", encoding="utf-8")
    monkeypatch.setattr(
        sys,
        "argv",
        ["main.py", "--question", "Who?", "--query-type", "HUM", "--query-subtype", "ind",
         "--passages", str(passages), "--search", "static"],
    )
    with pytest.raises(ValueError, match="--evidence"):
        cli.main()
