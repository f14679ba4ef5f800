from __future__ import annotations

from types import SimpleNamespace
from unittest.mock import Mock

import pytest

from spanpipe import Analyzer, AnalyzerConfig
from spanpipe import backend_registry
from spanpipe.backend_registry import create_backend, get_backend_choices, get_backend_info
from spanpipe.backend_spec import BackendSpec
from spanpipe.backend_utils import strip_entity_prefix, utf16_offset_converter, validate_backend_kwargs
from spanpipe.backends.corenlp import CoreNLPServerPipeline, corenlp_json_to_sentences
from spanpipe.backends.spacy import spacy_doc_to_sentences
from spanpipe.backends.stanza import stanza_doc_to_sentences
from spanpipe.doc import RawToken


def test_builtin_backends_are_discovered():
    assert {"corenlp", "spacy", "stanza"} <= set(get_backend_choices())
    assert get_backend_info("CoreNLP").is_rest


def test_unknown_backend():
    with pytest.raises(ValueError, match="Unknown backend type"):
        create_backend("nope")


def test_missing_dependency_becomes_install_hint(monkeypatch):
    def factory(**kwargs):
        raise ImportError("No module named 'fancy'")

    spec = BackendSpec(name="fancy", description="test", factory=factory, install_hint="pip install fancy")
    monkeypatch.setitem(backend_registry._BACKEND_REGISTRY, "fancy", spec)

    with pytest.raises(RuntimeError, match="pip install fancy"):
        create_backend("fancy")


def test_factory_rejects_unexpected_arguments():
    with pytest.raises(ValueError, match="Unexpected CoreNLP backend arguments: colour"):
        create_backend("corenlp", colour="blue")


def test_stanza_requires_language():
    with pytest.raises(ValueError):
        create_backend("stanza")


def test_spacy_requires_known_language():
    with pytest.raises(ValueError, match="No default SpaCy model"):
        create_backend("spacy", language="xx")


def test_validate_backend_kwargs_allows_extras():
    kwargs = {"verbose": True}
    validate_backend_kwargs(kwargs, "Demo", allowed_extra=["verbose"])
    assert kwargs == {}


@pytest.mark.parametrize("label, expected", [
    ("B-PER", "PER"),
    ("S-LOC", "LOC"),
    ("E-ORG", "ORG"),
    ("O", "O"),
    ("PERSON", "PERSON"),
    (None, None),
])
def test_strip_entity_prefix(label, expected):
    assert strip_entity_prefix(label) == expected


def test_utf16_offsets():
    text = "a\U0001F600b c"
    convert = utf16_offset_converter(text)
    # UTF-16 offsets: a=0, emoji=1..3, b=3, space=4, c=5
    assert [convert(offset) for offset in (0, 1, 3, 4, 5, 6)] == [0, 1, 2, 3, 4, 5]
    assert utf16_offset_converter("plain")(4) == 4


def _stanza_word(xpos=None, upos=None, lemma=None):
    return SimpleNamespace(xpos=xpos, upos=upos, lemma=lemma)


def test_stanza_conversion():
    doc = SimpleNamespace(sentences=[
        SimpleNamespace(tokens=[
            SimpleNamespace(start_char=0, end_char=3, ner="S-PER",
                            words=[_stanza_word("NE", "PROPN", "Ada")]),
            SimpleNamespace(start_char=4, end_char=7, ner="O",
                            words=[_stanza_word(None, "ADP", "in")]),
            SimpleNamespace(start_char=8, end_char=11, ner="O",
                            words=[_stanza_word("APPR", "ADP", "in"), _stanza_word("ART", "DET", "der")]),
        ]),
    ])

    (sentence,) = stanza_doc_to_sentences(doc)

    assert sentence == [
        RawToken(0, 3, pos="NE", ner="PER", lemma="Ada"),
        RawToken(4, 7, pos="ADP", ner="O", lemma="in"),
        RawToken(8, 11, pos=None, ner="O", lemma=None),
    ]


def _spacy_token(idx, text, tag="", pos="", ent="", lemma="", space=False):
    return SimpleNamespace(idx=idx, text=text, tag_=tag, pos_=pos, ent_type_=ent, lemma_=lemma, is_space=space)


def test_spacy_conversion_skips_whitespace():
    doc = SimpleNamespace(sents=[
        [
            _spacy_token(0, "New", tag="NNP", ent="GPE", lemma="New"),
            _spacy_token(4, "York", tag="NNP", ent="GPE", lemma="York"),
            _spacy_token(8, "\n", space=True),
            _spacy_token(9, "rocks", pos="VERB", lemma="rock"),
        ],
    ])

    (sentence,) = spacy_doc_to_sentences(doc)

    assert sentence == [
        RawToken(0, 3, pos="NNP", ner="GPE", lemma="New"),
        RawToken(4, 8, pos="NNP", ner="GPE", lemma="York"),
        RawToken(9, 14, pos="VERB", ner=None, lemma="rock"),
    ]


def test_corenlp_conversion_uses_code_point_offsets():
    text = "\U0001F600 Bob"
    payload = {"sentences": [{"tokens": [
        {"characterOffsetBegin": 0, "characterOffsetEnd": 2, "pos": "SYM", "ner": "O", "lemma": "\U0001F600"},
        {"characterOffsetBegin": 3, "characterOffsetEnd": 6, "pos": "NNP", "ner": "PERSON", "lemma": "Bob"},
    ]}]}

    (sentence,) = corenlp_json_to_sentences(payload, text)

    assert [(raw.start, raw.end) for raw in sentence] == [(0, 1), (2, 5)]
    assert text[sentence[1].start:sentence[1].end] == "Bob"


def test_corenlp_pipeline_posts_text():
    response = Mock()
    response.json.return_value = {"sentences": [{"tokens": [
        {"characterOffsetBegin": 0, "characterOffsetEnd": 2, "pos": "UH", "ner": "O", "lemma": "hi"},
    ]}]}
    session = Mock()
    session.post.return_value = response
    pipeline = CoreNLPServerPipeline("http://nlp:9000", language="en", session=session, timeout=5)

    (sentence,) = pipeline.annotate("Hi")

    assert sentence == [RawToken(0, 2, pos="UH", ner="O", lemma="hi")]
    args, kwargs = session.post.call_args
    assert args == ("http://nlp:9000/",)
    assert kwargs["data"] == b"Hi"
    assert kwargs["params"]["pipelineLanguage"] == "en"
    assert kwargs["timeout"] == 5
    response.raise_for_status.assert_called_once()


def test_corenlp_invalid_json():
    response = Mock()
    response.json.side_effect = ValueError("Expecting value")
    session = Mock()
    session.post.return_value = response

    with pytest.raises(RuntimeError, match="invalid JSON"):
        CoreNLPServerPipeline(session=session).annotate("Hi")


def test_spacy_output_honours_custom_no_entity_label():
    text = "Ada lives here"
    doc = SimpleNamespace(sents=[
        [
            _spacy_token(0, "Ada", tag="NNP", ent="PERSON"),
            _spacy_token(4, "lives", tag="VBZ"),
            _spacy_token(10, "here", tag="RB"),
        ],
    ])
    pipeline = Mock()
    pipeline.annotate.return_value = spacy_doc_to_sentences(doc)

    with Analyzer(AnalyzerConfig(no_entity_label="NONE")) as analyzer:
        analyzer.set_pipeline("en", pipeline)
        at = analyzer.analyse("en", text)

    assert [at.span_text(chunk) for chunk in at.chunks] == ["Ada"]
