# api/tests/test_scripture_cli.py
"""
Tests for the scripture command line tool.
"""

import os
import sys

import pytest

# Add api directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from conftest import TENT_VERSE
from scripts.scripture_cli import build_parser, main


def test_search_by_reference(service, capsys):
    assert main(["search", "1 Nephi 2:14-15"], service=service) == 0
    out = capsys.readouterr().out
    assert out == (
        "1 Nephi 2:14\nText of 1 Nephi 2:14.\n\n"
        f"1 Nephi 2:15\n{TENT_VERSE}\n"
    )


def test_search_text_with_count(service, capsys):
    assert main(["search", "alma 4:2", "-n", "1", "-c"], service=service) == 0
    out = capsys.readouterr().out
    assert out == "2\nAlma 4:2\nText of Alma 4:2.\n"


def test_search_count_without_matches(service, capsys):
    assert main(["search", "no such words anywhere", "--count-matches"], service=service) == 0
    assert capsys.readouterr().out == "0\n"


def test_random(service, corpus, capsys):
    assert main(["random"], service=service) == 0
    reference, text = capsys.readouterr().out.rstrip("\n").split("\n")
    assert (reference, text) in {(v.reference_string, v.text) for v in corpus.all_verses()}


def test_text(service, corpus, capsys):
    assert main(["text"], service=service) == 0
    lines = capsys.readouterr().out.rstrip("\n").split("\n")
    assert len(lines) == sum(1 for _ in corpus.all_verses())


def test_missing_corpus_is_reported(tmp_path, capsys):
    from services.cache import CorpusCache
    from services.scripture import ScriptureService

    service = ScriptureService(
        path=tmp_path / "missing.txt",
        use_cache=False,
        cache=CorpusCache(tmp_path / "unused.pickle"),
    )
    assert main(["text"], service=service) == 1
    assert capsys.readouterr().out == ""


def test_parser_options():
    args = build_parser().parse_args(["-d", "search", "faith", "--num_matches", "3"])
    assert args.delete_cache
    assert args.command == "search"
    assert args.num_matches == 3
    assert not args.count_matches


def test_subcommand_required():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
