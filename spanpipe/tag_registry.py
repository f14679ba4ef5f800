"""
Per-language tag registry.

Maps the raw tag strings reported by an annotation pipeline to canonical
``PosTag``/``NerTag`` objects. Raw strings without a canonical entry get an
ad-hoc tag that is cached per language, so the same raw string always resolves
to the identical object for the lifetime of the registry.
"""

from __future__ import annotations

import json
import logging
import threading
from pathlib import Path
from typing import Dict, Iterable, Optional, Union

from .errors import ConfigurationError
from .tags import NerTag, PosTag, TagSet
from .tagset_definitions import build_default_ner_tagsets, build_default_pos_tagsets

logger = logging.getLogger(__name__)

NO_ENTITY = "O"

TAGSET_KINDS = ("pos", "ner")


def _normalize_language(language: str) -> str:
    if not language:
        raise ConfigurationError("The language MUST NOT be None nor empty")
    return language.lower()


class TagSetRegistry:
    """Canonical tag sets plus mutable ad-hoc tag maps, both keyed by language."""

    def __init__(
        self,
        pos_tagsets: Iterable[TagSet[PosTag]] = (),
        ner_tagsets: Iterable[TagSet[NerTag]] = (),
        *,
        no_entity: str = NO_ENTITY,
    ) -> None:
        self.no_entity = no_entity
        self._pos_tagsets: Dict[str, TagSet[PosTag]] = {}
        self._ner_tagsets: Dict[str, TagSet[NerTag]] = {}
        self._adhoc_pos: Dict[str, Dict[str, PosTag]] = {}
        self._adhoc_ner: Dict[str, Dict[str, NerTag]] = {}
        self._lock = threading.RLock()
        for tagset in pos_tagsets:
            self.register_tagset("pos", tagset)
        for tagset in ner_tagsets:
            self.register_tagset("ner", tagset)

    @classmethod
    def default(cls, *, no_entity: str = NO_ENTITY) -> "TagSetRegistry":
        """Registry populated with the built-in tag set tables."""
        return cls(build_default_pos_tagsets(), build_default_ner_tagsets(), no_entity=no_entity)

    def register_tagset(self, kind: str, tagset: Union[TagSet[PosTag], TagSet[NerTag]]) -> None:
        """Assign ``tagset`` to every language it declares, replacing earlier assignments."""
        if kind not in TAGSET_KINDS:
            raise ConfigurationError(f"Unknown tag set kind '{kind}' (expected one of: {', '.join(TAGSET_KINDS)})")
        if not tagset.languages:
            raise ConfigurationError(f"Tag set '{tagset.name}' does not declare any language")
        target = self._pos_tagsets if kind == "pos" else self._ner_tagsets
        with self._lock:
            for language in tagset.languages:
                previous = target.get(language)
                if previous is not None and previous is not tagset:
                    logger.debug(
                        "Replacing %s tag set '%s' with '%s' for language %s",
                        kind, previous.name, tagset.name, language,
                    )
                target[language] = tagset

    def load_tagsets(self, path: Union[str, Path]) -> int:
        """
        Register additional tag sets from a JSON file.

        The file holds ``{"pos": [...], "ner": [...]}`` where every entry is
        ``{"name": str, "languages": [str], "tags": {raw: category}}``.

        Returns:
            Number of tag sets registered.
        """
        path = Path(path)
        try:
            with path.open("r", encoding="utf-8") as handle:
                data = json.load(handle)
        except (OSError, json.JSONDecodeError) as exc:
            raise ConfigurationError(f"Unable to read tag sets from {path}: {exc}") from exc
        if not isinstance(data, dict):
            raise ConfigurationError(f"Tag set file {path} must contain a JSON object")

        count = 0
        for kind in TAGSET_KINDS:
            for entry in data.get(kind, []):
                try:
                    name = entry["name"]
                    languages = entry["languages"]
                    tags = entry["tags"]
                except (KeyError, TypeError) as exc:
                    raise ConfigurationError(
                        f"Invalid {kind} tag set entry in {path}: expected name, languages and tags"
                    ) from exc
                if isinstance(tags, list):
                    tags = {raw: None for raw in tags}
                builder = TagSet.pos if kind == "pos" else TagSet.ner
                self.register_tagset(kind, builder(name, languages, tags))
                count += 1
        logger.debug("Loaded %d tag sets from %s", count, path)
        return count

    def get_pos_tagset(self, language: str) -> Optional[TagSet[PosTag]]:
        return self._pos_tagsets.get(_normalize_language(language))

    def get_ner_tagset(self, language: str) -> Optional[TagSet[NerTag]]:
        return self._ner_tagsets.get(_normalize_language(language))

    def tagsets(self, kind: str) -> Dict[str, Union[TagSet[PosTag], TagSet[NerTag]]]:
        """Return a {language: tag set} snapshot for ``kind``."""
        source = self._pos_tagsets if kind == "pos" else self._ner_tagsets
        with self._lock:
            return dict(source)

    def adhoc_pos_tags(self, language: str) -> Dict[str, PosTag]:
        with self._lock:
            return dict(self._adhoc_pos.get(_normalize_language(language), {}))

    def adhoc_ner_tags(self, language: str) -> Dict[str, NerTag]:
        with self._lock:
            return dict(self._adhoc_ner.get(_normalize_language(language), {}))

    def resolve_pos(self, language: str, raw: str) -> PosTag:
        """Resolve a raw POS string, creating an ad-hoc tag on first sight."""
        lang = _normalize_language(language)
        tagset = self._pos_tagsets.get(lang)
        tag = tagset.get(raw) if tagset is not None else None
        if tag is not None:
            return tag
        return self._adhoc(self._adhoc_pos, lang, raw, PosTag(tag=raw, adhoc=True), "POS")

    def resolve_ner(self, language: str, raw: Optional[str]) -> Optional[NerTag]:
        """
        Resolve a raw NER string.

        Returns ``None`` for the no-entity sentinel, for missing values and for
        every value of a language that has no canonical NER tag set.
        """
        if not raw or raw == self.no_entity:
            return None
        lang = _normalize_language(language)
        tagset = self._ner_tagsets.get(lang)
        if tagset is None:
            return None
        tag = tagset.get(raw)
        if tag is not None:
            return tag
        return self._adhoc(self._adhoc_ner, lang, raw, NerTag(tag=raw, adhoc=True), "NER")

    def _adhoc(self, maps, language, raw, candidate, label):
        existing = maps.get(language, {}).get(raw)
        if existing is not None:
            return existing
        # insert-if-absent; concurrent first sightings must agree on one object
        with self._lock:
            adhoc = maps.setdefault(language, {})
            existing = adhoc.get(raw)
            if existing is not None:
                return existing
            adhoc[raw] = candidate
        logger.info("Unmapped %s tag '%s' for language %s", label, raw, language)
        return candidate
