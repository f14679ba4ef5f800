from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional

from .errors import InvalidSpanError
from .tags import NerTag, PosTag


@dataclass(frozen=True)
class RawToken:
    """One token as reported by an annotation pipeline."""
    start: int
    end: int
    pos: Optional[str] = None
    ner: Optional[str] = None
    lemma: Optional[str] = None

    @classmethod
    def from_dict(cls, data: dict) -> "RawToken":
        return cls(
            start=int(data["start"]),
            end=int(data["end"]),
            pos=data.get("pos"),
            ner=data.get("ner"),
            lemma=data.get("lemma"),
        )


# A raw sentence is the ordered token sequence of one sentence unit
RawSentence = List[RawToken]


@dataclass(frozen=True)
class MorphoFeatures:
    """Morphological analysis of a token: its lemma and, if known, its POS tag."""
    lemma: str
    pos: Optional[PosTag] = None

    def to_dict(self) -> dict:
        result: Dict[str, Any] = {"lemma": self.lemma}
        if self.pos is not None:
            result["pos"] = self.pos.to_dict()
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "MorphoFeatures":
        pos = data.get("pos")
        return cls(lemma=data["lemma"], pos=PosTag.from_dict(pos) if pos else None)


@dataclass
class Span:
    """Half-open character interval [start, end) over the document text."""
    start: int
    end: int

    def __len__(self) -> int:
        return self.end - self.start

    def contains(self, other: "Span") -> bool:
        return self.start <= other.start and other.end <= self.end

    def _span_dict(self) -> Dict[str, Any]:
        return {"start": self.start, "end": self.end}


@dataclass
class Token(Span):
    pos: Optional[PosTag] = None
    morpho: Optional[MorphoFeatures] = None
    text: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "Token":
        pos = data.get("pos")
        morpho = data.get("morpho")
        return cls(
            start=int(data["start"]),
            end=int(data["end"]),
            pos=PosTag.from_dict(pos) if pos else None,
            morpho=MorphoFeatures.from_dict(morpho) if morpho else None,
            text=data.get("text", ""),
        )

    def to_dict(self) -> dict:
        result = self._span_dict()
        result["text"] = self.text
        if self.pos is not None:
            result["pos"] = self.pos.to_dict()
        if self.morpho is not None:
            result["morpho"] = self.morpho.to_dict()
        return result


@dataclass
class Sentence(Span):

    @classmethod
    def from_dict(cls, data: dict) -> "Sentence":
        return cls(start=int(data["start"]), end=int(data["end"]))

    def to_dict(self) -> dict:
        return self._span_dict()


@dataclass
class Chunk(Span):
    """Span over consecutive tokens sharing one named entity tag."""
    ner: Optional[NerTag] = None

    @classmethod
    def from_dict(cls, data: dict) -> "Chunk":
        ner = data.get("ner")
        return cls(
            start=int(data["start"]),
            end=int(data["end"]),
            ner=NerTag.from_dict(ner) if ner else None,
        )

    def to_dict(self) -> dict:
        result = self._span_dict()
        if self.ner is not None:
            result["ner"] = self.ner.to_dict()
        return result


@dataclass
class AnalysedText:
    """
    Analysis result for one document.

    Tokens, sentences and chunks are spans over ``text`` kept in the order
    they were added, which is document order for the alignment engine.
    """
    text: str
    language: str = ""
    tokens: List[Token] = field(default_factory=list)
    sentences: List[Sentence] = field(default_factory=list)
    chunks: List[Chunk] = field(default_factory=list)

    def _check_span(self, kind: str, start: int, end: int) -> None:
        if start >= end:
            raise InvalidSpanError(f"Invalid {kind} span [{start}, {end}): start must be before end")
        if start < 0 or end > len(self.text):
            raise InvalidSpanError(
                f"Invalid {kind} span [{start}, {end}): outside of the text [0, {len(self.text)})"
            )

    def add_token(self, start: int, end: int) -> Token:
        self._check_span("token", start, end)
        token = Token(start=start, end=end, text=self.text[start:end])
        self.tokens.append(token)
        return token

    def add_sentence(self, start: int, end: int) -> Sentence:
        self._check_span("sentence", start, end)
        sentence = Sentence(start=start, end=end)
        self.sentences.append(sentence)
        return sentence

    def add_chunk(self, start: int, end: int, ner: NerTag) -> Chunk:
        self._check_span("chunk", start, end)
        chunk = Chunk(start=start, end=end, ner=ner)
        self.chunks.append(chunk)
        return chunk

    def span_text(self, span: Span) -> str:
        return self.text[span.start:span.end]

    def tokens_in(self, span: Span) -> Iterable[Token]:
        for token in self.tokens:
            if span.contains(token):
                yield token

    def chunks_in(self, span: Span) -> Iterable[Chunk]:
        for chunk in self.chunks:
            if span.contains(chunk):
                yield chunk

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysedText":
        return cls(
            text=data.get("text", ""),
            language=data.get("language", ""),
            tokens=[Token.from_dict(t) for t in data.get("tokens", [])],
            sentences=[Sentence.from_dict(s) for s in data.get("sentences", [])],
            chunks=[Chunk.from_dict(c) for c in data.get("chunks", [])],
        )

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "language": self.language,
            "sentences": [sent.to_dict() for sent in self.sentences],
            "tokens": [tok.to_dict() for tok in self.tokens],
            "chunks": [chunk.to_dict() for chunk in self.chunks],
        }
