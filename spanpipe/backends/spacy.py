"""SpaCy backend implementation and registry spec."""

from __future__ import annotations

from typing import Any, List, Optional

from ..backend_spec import BackendSpec
from ..backend_utils import validate_backend_kwargs
from ..doc import RawSentence, RawToken

SPACY_DEFAULT_MODELS = {
    "ca": "ca_core_news_sm",
    "da": "da_core_news_sm",
    "de": "de_core_news_sm",
    "el": "el_core_news_sm",
    "en": "en_core_web_sm",
    "es": "es_core_news_sm",
    "fi": "fi_core_news_sm",
    "fr": "fr_core_news_sm",
    "hr": "hr_core_news_sm",
    "it": "it_core_news_sm",
    "ja": "ja_core_news_sm",
    "ko": "ko_core_news_sm",
    "lt": "lt_core_news_sm",
    "nl": "nl_core_news_sm",
    "no": "nb_core_news_sm",
    "pl": "pl_core_news_sm",
    "pt": "pt_core_news_sm",
    "ro": "ro_core_news_sm",
    "ru": "ru_core_news_sm",
    "sl": "sl_core_news_sm",
    "sv": "sv_core_news_sm",
    "uk": "uk_core_news_sm",
    "zh": "zh_core_web_sm",
}


class SpacyPipeline:
    """Annotation pipeline backed by a loaded spaCy model."""

    def __init__(self, *, model_name: str, download_model: bool = False):
        import spacy

        self._spacy = spacy
        self._model_name = model_name
        self._download_model = download_model
        self._nlp = None

    @property
    def nlp(self):
        if self._nlp is None:
            try:
                self._nlp = self._spacy.load(self._model_name)
            except OSError:
                if not self._download_model:
                    raise
                from spacy.cli import download as spacy_download

                spacy_download(self._model_name)
                self._nlp = self._spacy.load(self._model_name)
        return self._nlp

    def annotate(self, text: str) -> List[RawSentence]:
        return spacy_doc_to_sentences(self.nlp(text))


def spacy_doc_to_sentences(spacy_doc) -> List[RawSentence]:
    """Convert a spaCy ``Doc`` into raw sentences, skipping whitespace tokens."""
    sentences: List[RawSentence] = []
    for sent in spacy_doc.sents:
        raw_tokens: List[RawToken] = []
        for tok in sent:
            if tok.is_space:
                continue
            raw_tokens.append(
                RawToken(
                    start=tok.idx,
                    end=tok.idx + len(tok.text),
                    pos=tok.tag_ or tok.pos_ or None,
                    ner=tok.ent_type_ or None,
                    lemma=tok.lemma_ or None,
                )
            )
        sentences.append(raw_tokens)
    return sentences


def _create_spacy_backend(
    *,
    language: Optional[str] = None,
    model_name: Optional[str] = None,
    download_model: bool = False,
    **kwargs: Any,
) -> SpacyPipeline:
    validate_backend_kwargs(kwargs, "SpaCy", allowed_extra=["verbose", "url", "timeout"])
    if not model_name:
        if not language:
            raise ValueError("SpaCy backend requires a model name or a language")
        model_name = SPACY_DEFAULT_MODELS.get(language.lower())
        if not model_name:
            raise ValueError(
                f"No default SpaCy model for language '{language}'. Provide --model to specify a model name."
            )
    return SpacyPipeline(model_name=model_name, download_model=download_model)


BACKEND_SPEC = BackendSpec(
    name="spacy",
    description="SpaCy - industrial-strength NLP with pretrained pipelines",
    factory=_create_spacy_backend,
    url="https://spacy.io",
    install_hint="pip install spacy",
)
