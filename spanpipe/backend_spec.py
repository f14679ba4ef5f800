"""Definitions for pluggable spanpipe backends."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, Optional

if TYPE_CHECKING:  # pragma: no cover - satisfied at type-check time
    from .pipeline_registry import AnnotationPipeline

BackendFactory = Callable[..., "AnnotationPipeline"]


@dataclass(frozen=True)
class BackendSpec:
    """Specification describing how to instantiate and expose a backend."""

    name: str
    description: str
    factory: BackendFactory
    is_rest: bool = False
    url: Optional[str] = None
    """URL to the backend's homepage or project repository."""
    install_hint: Optional[str] = None
    """Command that installs the backend's optional dependencies."""
