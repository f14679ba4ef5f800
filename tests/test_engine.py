from __future__ import annotations

import pytest

from conftest import tokenize
from spanpipe.doc import RawToken
from spanpipe.engine import align
from spanpipe.errors import InvalidSpanError


def chunk_texts(at):
    return [(at.span_text(chunk), chunk.ner.tag) for chunk in at.chunks]


def test_single_sentence_with_location(registry):
    text = "Paris is nice ."
    sentence = tokenize(text, pos=["NNP", "VBZ", "JJ", "."], ner=["LOCATION", "O", "O", "O"])

    at = align("en", text, [sentence], registry)

    assert [(s.start, s.end) for s in at.sentences] == [(0, len(text))]
    assert [t.text for t in at.tokens] == ["Paris", "is", "nice", "."]
    assert [t.pos.tag for t in at.tokens] == ["NNP", "VBZ", "JJ", "."]
    assert at.tokens[0].pos.upos == "PROPN"
    assert chunk_texts(at) == [("Paris", "LOCATION")]
    assert at.chunks[0].ner.category == "LOC"


def test_consecutive_tokens_merge_into_one_chunk(registry):
    text = "I love New York"
    sentence = tokenize(text, ner=["O", "O", "LOCATION", "LOCATION"])

    at = align("en", text, [sentence], registry)

    assert chunk_texts(at) == [("New York", "LOCATION")]


def test_changed_tag_closes_run_on_same_token(registry):
    text = "Obama Washington visited"
    sentence = tokenize(text, ner=["PERSON", "LOCATION", "O"])

    at = align("en", text, [sentence], registry)

    assert chunk_texts(at) == [("Obama", "PERSON"), ("Washington", "LOCATION")]


def test_absent_tag_closes_run(registry):
    text = "John Smith and Mary"
    sentence = tokenize(text, ner=["PERSON", "PERSON", None, "PERSON"])

    at = align("en", text, [sentence], registry)

    assert chunk_texts(at) == [("John Smith", "PERSON"), ("Mary", "PERSON")]


def test_sentence_end_closes_run(registry):
    text = "I met Anna. Anna left."
    first = tokenize(text[:11], ner=["O", "O", "PERSON"])
    second = [
        RawToken(start=12, end=16, ner="PERSON"),
        RawToken(start=17, end=22, ner="O"),
    ]

    at = align("en", text, [first, second], registry)

    assert [(s.start, s.end) for s in at.sentences] == [(0, 11), (12, 22)]
    assert [(c.start, c.end) for c in at.chunks] == [(6, 11), (12, 16)]


def test_chunks_stay_inside_their_sentence(registry):
    text = "Berlin . Paris"
    sentences = [
        [RawToken(0, 6, ner="LOCATION"), RawToken(7, 8, ner="LOCATION")],
        [RawToken(9, 14, ner="LOCATION")],
    ]

    at = align("en", text, sentences, registry)

    for chunk in at.chunks:
        assert any(sentence.contains(chunk) for sentence in at.sentences)
    assert [(c.start, c.end) for c in at.chunks] == [(0, 8), (9, 14)]


def test_empty_sentence_unit_is_skipped(registry):
    text = "Hello"
    at = align("en", text, [[], tokenize(text), []], registry)

    assert len(at.sentences) == 1
    assert len(at.tokens) == 1


def test_no_sentences(registry):
    at = align("en", "", [], registry)

    assert at.tokens == []
    assert at.sentences == []
    assert at.chunks == []


def test_lemma_only_when_it_differs(registry):
    text = "cats sleep"
    sentence = tokenize(text, pos=["NNS", "VBP"], lemma=["cat", "sleep"])

    at = align("en", text, [sentence], registry)

    cats, sleep = at.tokens
    assert cats.morpho.lemma == "cat"
    assert cats.morpho.pos is cats.pos
    assert sleep.morpho is None


def test_missing_pos_leaves_token_untagged(registry):
    text = "du"
    at = align("fr", text, [tokenize(text, lemma=["de"])], registry)

    token = at.tokens[0]
    assert token.pos is None
    assert token.morpho.lemma == "de"
    assert token.morpho.pos is None


def test_adhoc_pos_identity_across_tokens(registry):
    text = "a b c"
    sentence = tokenize(text, pos=["FOO", "NN", "FOO"])

    at = align("en", text, [sentence], registry)

    assert at.tokens[0].pos.adhoc
    assert at.tokens[0].pos is at.tokens[2].pos


def test_language_is_lower_cased(registry):
    at = align("EN", "Paris", [tokenize("Paris", pos=["NNP"])], registry)

    assert at.language == "en"
    assert at.tokens[0].pos.upos == "PROPN"


@pytest.mark.parametrize("raw", [
    RawToken(start=3, end=3),
    RawToken(start=4, end=2),
    RawToken(start=-1, end=2),
    RawToken(start=0, end=99),
])
def test_invalid_token_offsets(registry, raw):
    with pytest.raises(InvalidSpanError):
        align("en", "Hello", [[raw]], registry)


def test_overlapping_tokens(registry):
    sentence = [RawToken(start=0, end=3), RawToken(start=2, end=5)]
    with pytest.raises(InvalidSpanError):
        align("en", "Hello", [sentence], registry)


def test_to_dict(registry):
    text = "Paris is nice ."
    sentence = tokenize(text, pos=["NNP", "VBZ", "JJ", "."], ner=["LOCATION", "O", "O", "O"])

    data = align("en", text, [sentence], registry).to_dict()

    assert data["language"] == "en"
    assert data["sentences"] == [{"start": 0, "end": 15}]
    assert data["tokens"][0] == {"start": 0, "end": 5, "text": "Paris", "pos": {"tag": "NNP", "upos": "PROPN"}}
    assert data["chunks"] == [{"start": 0, "end": 5, "ner": {"tag": "LOCATION", "category": "LOC"}}]
