"""
Directory of annotation pipelines by language.

Language codes are case-insensitive and stored lower-cased.
"""

from __future__ import annotations

import logging
import threading
from typing import Dict, Iterable, Optional, Protocol, Tuple

from .doc import RawToken
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class AnnotationPipeline(Protocol):
    """Protocol all pipeline handles implement."""

    def annotate(self, text: str) -> Iterable[Iterable[RawToken]]:
        """Return the raw sentences (each a sequence of raw tokens) for ``text``."""
        ...


class PipelineDirectory:
    """Maps language codes to annotation pipeline handles."""

    def __init__(self) -> None:
        self._pipelines: Dict[str, AnnotationPipeline] = {}
        self._supported: Tuple[str, ...] = ()
        self._lock = threading.Lock()

    def register(self, language: str, pipeline: AnnotationPipeline) -> Optional[AnnotationPipeline]:
        """
        Set the pipeline for a language.

        Returns:
            The pipeline previously registered for this language or ``None``
        """
        if not language:
            raise ConfigurationError("The language MUST NOT be None nor empty")
        if pipeline is None:
            raise ConfigurationError("The annotation pipeline MUST NOT be None")
        lang = language.lower()
        with self._lock:
            old = self._pipelines.get(lang)
            self._pipelines[lang] = pipeline
            if old is None:
                self._supported = tuple(sorted(self._pipelines))
                logger.debug("Registered pipeline for language %s (supported: %s)", lang, ", ".join(self._supported))
            # language was already present, the listing stays valid
        return old

    def get(self, language: str) -> Optional[AnnotationPipeline]:
        if not language:
            return None
        return self._pipelines.get(language.lower())

    def is_supported(self, language: str) -> bool:
        if not language:
            return False
        return language.lower() in self._pipelines

    def list_supported(self) -> Tuple[str, ...]:
        """
        Alphabetically sorted supported languages, intended for messages.

        Use ``is_supported`` to check for a single language.
        """
        return self._supported

    def __len__(self) -> int:
        return len(self._pipelines)
