"""Stanza backend implementation and registry spec."""

from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional

from ..backend_spec import BackendSpec
from ..backend_utils import strip_entity_prefix, validate_backend_kwargs
from ..doc import RawSentence, RawToken

DEFAULT_PROCESSORS = "tokenize,mwt,pos,lemma,ner"
# languages without a multi-word token expander in stanza
_NO_MWT_LANGUAGES = {"en", "zh", "ja", "ko", "vi", "th"}


class StanzaPipeline:
    """Annotation pipeline backed by ``stanza.Pipeline``."""

    def __init__(
        self,
        *,
        language: str,
        package: Optional[str] = None,
        processors: Optional[str] = None,
        use_gpu: bool = False,
        download_model: bool = False,
        model_dir: Optional[str] = None,
        verbose: bool = False,
    ):
        from stanza import Pipeline, download

        self._Pipeline = Pipeline
        self._download = download
        if not verbose:
            stanza_logger = logging.getLogger("stanza")
            stanza_logger.setLevel(logging.ERROR)
            for handler in stanza_logger.handlers:
                handler.setLevel(logging.ERROR)
            stanza_logger.propagate = False
        self._language = language.lower()
        self._package = package or "default"
        if processors:
            self._processors = processors
        elif self._language in _NO_MWT_LANGUAGES:
            self._processors = DEFAULT_PROCESSORS.replace("mwt,", "")
        else:
            self._processors = DEFAULT_PROCESSORS
        self._use_gpu = use_gpu
        self._download_model = download_model
        self._model_dir = model_dir
        self._pipeline = None

    def _pipeline_kwargs(self) -> dict:
        kwargs = {
            "lang": self._language,
            "package": self._package,
            "processors": self._processors,
            "use_gpu": self._use_gpu,
            "tokenize_pretokenized": False,
            "download_method": None,
        }
        if self._model_dir:
            kwargs["dir"] = self._model_dir
        return kwargs

    def _ensure_pipeline(self):
        if self._pipeline:
            return self._pipeline
        try:
            self._pipeline = self._Pipeline(**self._pipeline_kwargs())
        except Exception:
            if not self._download_model:
                raise
            download_kwargs = {"package": self._package, "processors": self._processors}
            if self._model_dir:
                download_kwargs["model_dir"] = self._model_dir
            self._download(self._language, **download_kwargs)
            self._pipeline = self._Pipeline(**self._pipeline_kwargs())
        return self._pipeline

    def annotate(self, text: str) -> List[RawSentence]:
        pipeline = self._ensure_pipeline()
        return stanza_doc_to_sentences(pipeline(text))


def _word_pos(word) -> Optional[str]:
    return getattr(word, "xpos", None) or getattr(word, "upos", None) or None


def stanza_doc_to_sentences(stanza_doc) -> List[RawSentence]:
    """Convert a stanza ``Document`` into raw sentences."""
    sentences: List[RawSentence] = []
    for stanza_sent in stanza_doc.sentences:
        raw_tokens: List[RawToken] = []
        for token in stanza_sent.tokens:
            words: Iterable[Any] = getattr(token, "words", None) or []
            words = list(words)
            # multi-word tokens carry no single POS or lemma
            if len(words) == 1:
                pos = _word_pos(words[0])
                lemma = getattr(words[0], "lemma", None)
            else:
                pos = None
                lemma = None
            raw_tokens.append(
                RawToken(
                    start=token.start_char,
                    end=token.end_char,
                    pos=pos,
                    ner=strip_entity_prefix(getattr(token, "ner", None)),
                    lemma=lemma,
                )
            )
        sentences.append(raw_tokens)
    return sentences


def _create_stanza_backend(
    *,
    language: Optional[str] = None,
    model_name: Optional[str] = None,
    package: Optional[str] = None,
    processors: Optional[str] = None,
    use_gpu: bool = False,
    download_model: bool = False,
    model_dir: Optional[str] = None,
    verbose: bool = False,
    **kwargs: Any,
) -> StanzaPipeline:
    validate_backend_kwargs(kwargs, "Stanza", allowed_extra=["url", "timeout"])
    # model names follow stanza's <lang>_<package> convention
    if model_name and "_" in model_name:
        model_lang, model_package = model_name.split("_", 1)
        language = language or model_lang
        package = package or model_package
    if not language:
        raise ValueError("Stanza backend requires a language")

    return StanzaPipeline(
        language=language,
        package=package,
        processors=processors,
        use_gpu=use_gpu,
        download_model=download_model,
        model_dir=model_dir,
        verbose=verbose,
    )


BACKEND_SPEC = BackendSpec(
    name="stanza",
    description="Stanza - Stanford NLP library with neural models for 70+ languages",
    factory=_create_stanza_backend,
    url="https://github.com/stanfordnlp/stanza",
    install_hint="pip install stanza",
)
