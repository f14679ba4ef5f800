"""Stanford CoreNLP server (REST) backend implementation and registry spec."""

from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional

import requests

from ..backend_spec import BackendSpec
from ..backend_utils import utf16_offset_converter, validate_backend_kwargs
from ..doc import RawSentence, RawToken

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "http://localhost:9000"
DEFAULT_ANNOTATORS = "tokenize,ssplit,pos,lemma,ner"
DEFAULT_TIMEOUT = 60.0


class CoreNLPServerPipeline:
    """Annotation pipeline that posts texts to a running CoreNLP server."""

    def __init__(
        self,
        endpoint_url: str = DEFAULT_ENDPOINT,
        *,
        language: Optional[str] = None,
        annotators: str = DEFAULT_ANNOTATORS,
        timeout: float = DEFAULT_TIMEOUT,
        session: Optional[requests.Session] = None,
        log_requests: bool = False,
    ):
        self.endpoint_url = endpoint_url.rstrip("/") + "/"
        self.language = language.lower() if language else None
        self.annotators = annotators
        self.timeout = timeout
        self.session = session or requests.Session()
        self.log_requests = log_requests

    def _properties(self) -> Dict[str, str]:
        return {"annotators": self.annotators, "outputFormat": "json"}

    def annotate(self, text: str) -> List[RawSentence]:
        params: Dict[str, str] = {"properties": json.dumps(self._properties())}
        if self.language:
            params["pipelineLanguage"] = self.language
        if self.log_requests:
            logger.info("POST %s (%d characters, language=%s)", self.endpoint_url, len(text), self.language)
        response = self.session.post(
            self.endpoint_url,
            params=params,
            data=text.encode("utf-8"),
            headers={"Content-Type": "text/plain; charset=utf-8"},
            timeout=self.timeout,
        )
        response.raise_for_status()
        try:
            payload = response.json()
        except ValueError as exc:
            raise RuntimeError(f"CoreNLP server returned invalid JSON: {exc}") from exc
        return corenlp_json_to_sentences(payload, text)


def corenlp_json_to_sentences(payload: Dict[str, Any], text: str) -> List[RawSentence]:
    """Convert a CoreNLP JSON response into raw sentences over ``text``."""
    to_index = utf16_offset_converter(text)
    sentences: List[RawSentence] = []
    for sentence in payload.get("sentences", []):
        raw_tokens: List[RawToken] = []
        for token in sentence.get("tokens", []):
            raw_tokens.append(
                RawToken(
                    start=to_index(int(token["characterOffsetBegin"])),
                    end=to_index(int(token["characterOffsetEnd"])),
                    pos=token.get("pos"),
                    ner=token.get("ner"),
                    lemma=token.get("lemma"),
                )
            )
        sentences.append(raw_tokens)
    return sentences


def _create_corenlp_backend(
    *,
    url: Optional[str] = None,
    language: Optional[str] = None,
    annotators: Optional[str] = None,
    timeout: Optional[float] = None,
    session: Optional[requests.Session] = None,
    log_requests: bool = False,
    **kwargs: Any,
) -> CoreNLPServerPipeline:
    validate_backend_kwargs(kwargs, "CoreNLP", allowed_extra=["model_name", "download_model", "verbose"])
    return CoreNLPServerPipeline(
        url or DEFAULT_ENDPOINT,
        language=language,
        annotators=annotators or DEFAULT_ANNOTATORS,
        timeout=timeout or DEFAULT_TIMEOUT,
        session=session,
        log_requests=log_requests,
    )


BACKEND_SPEC = BackendSpec(
    name="corenlp",
    description="Stanford CoreNLP server over HTTP",
    factory=_create_corenlp_backend,
    is_rest=True,
    url="https://stanfordnlp.github.io/CoreNLP/corenlp-server.html",
    install_hint="pip install requests",
)
