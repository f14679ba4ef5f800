"""
spanpipe: aligns the per-token output of NLP annotation pipelines into
span-indexed sentences, tokens and named entity chunks.

Supports several backends (stanza, spaCy, CoreNLP server) and maps their raw
POS/NER labels onto per-language canonical tag sets.
"""

__version__ = "1.0.0"

from spanpipe.analyzer import Analyzer
from spanpipe.config import AnalyzerConfig
from spanpipe.doc import AnalysedText, Chunk, MorphoFeatures, RawToken, Sentence, Token
from spanpipe.engine import align
from spanpipe.errors import (
    ConfigurationError,
    InvalidSpanError,
    PipelineCancelledError,
    PipelineExecutionError,
    SpanPipeError,
    UnsupportedLanguageError,
)
from spanpipe.gate import ExecutionGate
from spanpipe.pipeline_registry import AnnotationPipeline, PipelineDirectory
from spanpipe.tag_registry import TagSetRegistry
from spanpipe.tags import NerTag, PosTag, TagSet

__all__ = [
    'AnalysedText', 'Analyzer', 'AnalyzerConfig', 'AnnotationPipeline', 'Chunk',
    'ConfigurationError', 'ExecutionGate', 'InvalidSpanError', 'MorphoFeatures',
    'NerTag', 'PipelineCancelledError', 'PipelineDirectory', 'PipelineExecutionError',
    'PosTag', 'RawToken', 'Sentence', 'SpanPipeError', 'TagSet', 'TagSetRegistry',
    'Token', 'UnsupportedLanguageError', 'align', '__version__',
]
