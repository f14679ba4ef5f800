from __future__ import annotations

import json

import pytest

from conftest import FakePipeline, tokenize
from spanpipe import __main__ as cli


@pytest.fixture
def fake_backend(monkeypatch):
    text = "Ada lives in London ."
    pipeline = FakePipeline([
        tokenize(text, pos=["NNP", "VBZ", "IN", "NNP", "."], ner=["PERSON", "O", "O", "LOCATION", "O"]),
    ])
    created = {}

    def create_backend(name, **kwargs):
        created["name"] = name
        created.update(kwargs)
        return pipeline

    monkeypatch.setattr(cli, "create_backend", create_backend)
    return text, created


def test_analyse_json(tmp_path, capsys, fake_backend):
    text, created = fake_backend
    source = tmp_path / "input.txt"
    source.write_text(text, encoding="utf-8")

    code = cli.main(["analyse", "--backend", "corenlp", "--language", "en", "--input", str(source)])

    assert code == 0
    assert created["name"] == "corenlp"
    assert created["language"] == "en"
    data = json.loads(capsys.readouterr().out)
    assert len(data["tokens"]) == 5
    assert [chunk["ner"]["tag"] for chunk in data["chunks"]] == ["PERSON", "LOCATION"]


def test_analyse_table_to_file(tmp_path, fake_backend):
    text, _ = fake_backend
    source = tmp_path / "input.txt"
    source.write_text(text, encoding="utf-8")
    target = tmp_path / "out.txt"

    code = cli.main([
        "analyze", "--backend", "corenlp", "--language", "en",
        "--input", str(source), "--output", str(target), "--format", "table",
    ])

    assert code == 0
    content = target.read_text(encoding="utf-8")
    assert "London" in content
    assert "LOCATION" in content


def test_backend_failure_is_reported(tmp_path, capsys, monkeypatch):
    monkeypatch.setattr(cli, "create_backend", lambda name, **kwargs: FakePipeline(error=OSError("server down")))
    source = tmp_path / "input.txt"
    source.write_text("Hi", encoding="utf-8")

    code = cli.main(["analyse", "--backend", "corenlp", "--language", "en", "--input", str(source)])

    assert code == 1
    assert capsys.readouterr().err.startswith("[spanpipe] OSError while processing a 'en' language text")


def test_backends_listing(capsys):
    assert cli.main(["backends"]) == 0
    out = capsys.readouterr().out
    assert "stanza" in out
    assert "corenlp" in out


def test_tagsets_for_language(capsys):
    assert cli.main(["tagsets", "--language", "en"]) == 0
    out = capsys.readouterr().out
    assert "English (en)" in out
    assert "penn-treebank" in out
    assert "english-ner" in out


def test_tagsets_unknown_language(capsys):
    assert cli.main(["tagsets", "--language", "ja"]) == 1
    assert "No canonical tag sets" in capsys.readouterr().err


def test_tagsets_overview(capsys):
    assert cli.main(["tagsets"]) == 0
    out = capsys.readouterr().out
    assert "universal-pos" in out
    assert "German" in out
