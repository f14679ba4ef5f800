from __future__ import annotations

import logging
import threading
from typing import Optional, Tuple

from .config import AnalyzerConfig
from .doc import AnalysedText
from .engine import align
from .errors import ConfigurationError, UnsupportedLanguageError
from .gate import ExecutionGate
from .pipeline_registry import AnnotationPipeline, PipelineDirectory
from .tag_registry import TagSetRegistry

logger = logging.getLogger(__name__)


class Analyzer:
    """
    Runs the registered pipeline for a language and aligns its output.

    The analyzer owns the gate it creates and shuts it down on ``close``;
    a gate passed in by the caller is left running.
    """

    def __init__(
        self,
        config: Optional[AnalyzerConfig] = None,
        *,
        registry: Optional[TagSetRegistry] = None,
        directory: Optional[PipelineDirectory] = None,
        gate: Optional[ExecutionGate] = None,
    ) -> None:
        self.config = config or AnalyzerConfig()
        if registry is None:
            registry = TagSetRegistry.default(no_entity=self.config.no_entity_label)
            if self.config.tagsets_file:
                registry.load_tagsets(self.config.tagsets_file)
        self.registry = registry
        self.directory = directory or PipelineDirectory()
        self._owns_gate = gate is None
        self.gate = gate or ExecutionGate(
            max_workers=self.config.max_workers,
            poll_interval=self.config.poll_interval,
        )

    def set_pipeline(self, language: str, pipeline: AnnotationPipeline) -> Optional[AnnotationPipeline]:
        """
        Set the annotation pipeline for a language.

        Returns:
            The old pipeline for this language or ``None`` if none
        """
        return self.directory.register(language, pipeline)

    def is_supported(self, language: str) -> bool:
        return self.directory.is_supported(language)

    @property
    def supported(self) -> Tuple[str, ...]:
        """Alphabetically sorted supported languages, intended for logging."""
        return self.directory.list_supported()

    def analyse(
        self,
        language: str,
        text: str,
        *,
        cancel_event: Optional[threading.Event] = None,
    ) -> AnalysedText:
        if not language:
            raise ConfigurationError("The language MUST NOT be None nor empty")
        if text is None:
            raise ConfigurationError("The text MUST NOT be None")
        lang = language.lower()
        pipeline = self.directory.get(lang)
        if pipeline is None:
            raise UnsupportedLanguageError(lang, self.directory.list_supported())

        raw_sentences = self.gate.run(
            pipeline,
            text,
            language=lang,
            timeout=self.config.timeout,
            cancel_event=cancel_event,
        )
        logger.debug("Pipeline for '%s' returned %d sentences", lang, len(raw_sentences))
        return align(lang, text, raw_sentences, self.registry)

    analyze = analyse

    def close(self) -> None:
        if self._owns_gate:
            self.gate.shutdown()

    def __enter__(self) -> "Analyzer":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
