"""
Alignment of a raw annotation stream with the document text.

The engine walks the per-sentence token stream reported by a pipeline once,
creating tokens, sentences and named entity chunks on an ``AnalysedText``.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .doc import AnalysedText, MorphoFeatures, RawToken, Token
from .errors import InvalidSpanError
from .tag_registry import TagSetRegistry
from .tags import NerTag, PosTag

logger = logging.getLogger(__name__)


class _NerRun:
    """Open run of consecutive tokens carrying the same NER tag."""

    __slots__ = ("tag", "start", "end")

    def __init__(self, tag: NerTag, token: Token):
        self.tag = tag
        self.start = token
        self.end = token


def _close_run(at: AnalysedText, run: _NerRun) -> None:
    at.add_chunk(run.start.start, run.end.end, run.tag)


def _resolve_pos(registry: TagSetRegistry, language: str, raw: Optional[str]) -> Optional[PosTag]:
    if raw is None:
        return None
    return registry.resolve_pos(language, raw)


def align(
    language: str,
    text: str,
    sentences: Iterable[Iterable[RawToken]],
    registry: TagSetRegistry,
) -> AnalysedText:
    """
    Build an ``AnalysedText`` from the raw sentences reported for ``text``.

    Args:
        language: Language code used for tag resolution
        text: The document text the offsets refer to
        sentences: Raw sentence units, each an ordered sequence of raw tokens
        registry: Tag registry used to resolve raw POS and NER strings

    Returns:
        The populated analysis

    Raises:
        InvalidSpanError: If a token has an empty/negative span, lies outside
            the text or overlaps the previous token of its sentence. Nothing
            is returned for the document in that case.
    """
    language = language.lower()
    at = AnalysedText(text=text, language=language)

    for sent_idx, raw_sentence in enumerate(sentences):
        sent_start: Optional[Token] = None
        sent_end: Optional[Token] = None
        run: Optional[_NerRun] = None

        for raw in raw_sentence:
            if sent_end is not None and raw.start < sent_end.end:
                raise InvalidSpanError(
                    f"Token [{raw.start}, {raw.end}) in sentence {sent_idx + 1} overlaps "
                    f"the previous token [{sent_end.start}, {sent_end.end})"
                )
            token = at.add_token(raw.start, raw.end)
            if sent_start is None:
                sent_start = token
            sent_end = token

            pos_tag = _resolve_pos(registry, language, raw.pos)
            if pos_tag is not None:
                token.pos = pos_tag
            logger.debug(" > '%s' pos: %s", token.text, pos_tag)

            ner_tag = registry.resolve_ner(language, raw.ner)
            if run is not None and run.tag != ner_tag:
                _close_run(at, run)
                run = None
            if ner_tag is not None:
                if run is None:
                    run = _NerRun(ner_tag, token)
                else:
                    run.end = token

            if raw.lemma is not None and raw.lemma != token.text:
                token.morpho = MorphoFeatures(lemma=raw.lemma, pos=pos_tag)

        if sent_start is None:
            # empty sentence unit
            continue
        at.add_sentence(sent_start.start, sent_end.end)
        if run is not None:
            _close_run(at, run)

    logger.debug(
        "Aligned %d sentences, %d tokens, %d chunks for a '%s' language text",
        len(at.sentences), len(at.tokens), len(at.chunks), language,
    )
    return at
