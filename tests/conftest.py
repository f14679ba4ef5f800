from __future__ import annotations

import re
import threading
from typing import List, Optional, Sequence

import pytest

from spanpipe.doc import RawSentence, RawToken
from spanpipe.tag_registry import TagSetRegistry

_WORD = re.compile(r"\S+")


def tokenize(text: str, pos: Sequence[Optional[str]] = (), ner: Sequence[Optional[str]] = (),
             lemma: Sequence[Optional[str]] = ()) -> RawSentence:
    """Whitespace tokens of ``text`` with per-token annotations."""
    tokens = []
    for idx, match in enumerate(_WORD.finditer(text)):
        tokens.append(
            RawToken(
                start=match.start(),
                end=match.end(),
                pos=pos[idx] if idx < len(pos) else None,
                ner=ner[idx] if idx < len(ner) else None,
                lemma=lemma[idx] if idx < len(lemma) else None,
            )
        )
    return tokens


class FakePipeline:
    """Pipeline returning canned sentences and recording every call."""

    def __init__(self, sentences: Optional[List[RawSentence]] = None, *, error: Optional[Exception] = None,
                 delay: Optional[threading.Event] = None):
        self.sentences = sentences or []
        self.error = error
        self.delay = delay
        self.calls: List[str] = []

    def annotate(self, text: str) -> List[RawSentence]:
        self.calls.append(text)
        if self.delay is not None:
            self.delay.wait(5)
        if self.error is not None:
            raise self.error
        return self.sentences


@pytest.fixture
def registry() -> TagSetRegistry:
    return TagSetRegistry.default()
