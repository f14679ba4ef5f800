"""Tag objects and immutable tag sets."""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Generic, Iterable, Iterator, Mapping, Optional, Tuple, TypeVar

# Universal Dependencies UPOS categories
STANDARD_UPOS = {
    "ADJ", "ADP", "ADV", "AUX", "CCONJ", "DET", "INTJ", "NOUN", "NUM",
    "PART", "PRON", "PROPN", "PUNCT", "SCONJ", "SYM", "VERB", "X",
}


@dataclass(frozen=True)
class PosTag:
    """Part-of-speech tag as emitted by an annotator."""
    tag: str
    upos: Optional[str] = None  # Universal POS category, known for canonical tags only
    adhoc: bool = False

    def __str__(self) -> str:
        return self.tag

    def to_dict(self) -> dict:
        result = {"tag": self.tag}
        if self.upos:
            result["upos"] = self.upos
        if self.adhoc:
            result["adhoc"] = True
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "PosTag":
        return cls(tag=data["tag"], upos=data.get("upos"), adhoc=bool(data.get("adhoc", False)))


@dataclass(frozen=True)
class NerTag:
    """Named entity tag as emitted by an annotator."""
    tag: str
    category: Optional[str] = None  # Coarse entity category (PER, LOC, ORG, ...)
    adhoc: bool = False

    def __str__(self) -> str:
        return self.tag

    def to_dict(self) -> dict:
        result = {"tag": self.tag}
        if self.category:
            result["category"] = self.category
        if self.adhoc:
            result["adhoc"] = True
        return result

    @classmethod
    def from_dict(cls, data: dict) -> "NerTag":
        return cls(tag=data["tag"], category=data.get("category"), adhoc=bool(data.get("adhoc", False)))


TagT = TypeVar("TagT", PosTag, NerTag)


class TagSet(Generic[TagT]):
    """
    Immutable collection of canonical tags for one or more languages.

    Tags are looked up by their raw string. A missing entry is not an error;
    callers fall back to ad-hoc tags.
    """

    def __init__(self, name: str, languages: Iterable[str], tags: Iterable[TagT]):
        self.name = name
        self.languages: Tuple[str, ...] = tuple(sorted({lang.lower() for lang in languages}))
        by_raw: Dict[str, TagT] = {}
        for tag in tags:
            by_raw.setdefault(tag.tag, tag)
        self._tags: Mapping[str, TagT] = MappingProxyType(by_raw)

    def get(self, raw: str) -> Optional[TagT]:
        return self._tags.get(raw)

    def __contains__(self, raw: object) -> bool:
        return raw in self._tags

    def __iter__(self) -> Iterator[TagT]:
        return iter(self._tags.values())

    def __len__(self) -> int:
        return len(self._tags)

    def __repr__(self) -> str:
        return f"TagSet(name={self.name!r}, languages={list(self.languages)!r}, size={len(self)})"

    @classmethod
    def pos(cls, name: str, languages: Iterable[str], mapping: Mapping[str, Optional[str]]) -> "TagSet[PosTag]":
        """Build a POS tag set from a {raw tag: UPOS} mapping."""
        return cls(name, languages, (PosTag(tag=raw, upos=upos or None) for raw, upos in mapping.items()))

    @classmethod
    def ner(cls, name: str, languages: Iterable[str], mapping: Mapping[str, Optional[str]]) -> "TagSet[NerTag]":
        """Build a NER tag set from a {raw tag: category} mapping."""
        return cls(name, languages, (NerTag(tag=raw, category=category or None) for raw, category in mapping.items()))
