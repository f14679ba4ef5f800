"""
Backend registry for spanpipe.

Backends are annotation pipelines that can be built by name. Built-in backends
live in ``spanpipe.backends`` and expose a ``BACKEND_SPEC``; third-party
packages register theirs through the ``spanpipe.backends`` entry point group.
"""

from __future__ import annotations

import importlib
import logging
import pkgutil
from importlib import metadata
from typing import Any, Dict, Iterator, List, Optional

from .backend_spec import BackendSpec
from .pipeline_registry import AnnotationPipeline

logger = logging.getLogger(__name__)

ENTRY_POINT_GROUP = "spanpipe.backends"

# Registry of all backends
_BACKEND_REGISTRY: Dict[str, BackendSpec] = {}


def register_backend_spec(spec: BackendSpec) -> None:
    """Register a backend in the registry."""
    _BACKEND_REGISTRY[spec.name.lower()] = spec


def _load_spec_from_module(module_name: str) -> Optional[BackendSpec]:
    try:
        module = importlib.import_module(module_name)
    except ImportError as exc:
        logger.debug("Failed to import backend module '%s': %s", module_name, exc)
        return None
    spec = getattr(module, "BACKEND_SPEC", None)
    if spec is None:
        logger.debug("Module '%s' does not define BACKEND_SPEC", module_name)
        return None
    if not isinstance(spec, BackendSpec):
        logger.warning("Module '%s' BACKEND_SPEC is not a BackendSpec instance", module_name)
        return None
    return spec


def _iter_builtin_backend_specs() -> Iterator[BackendSpec]:
    from . import backends as backend_pkg

    prefix = backend_pkg.__name__ + "."
    for module_info in pkgutil.iter_modules(backend_pkg.__path__, prefix):
        spec = _load_spec_from_module(module_info.name)
        if spec:
            yield spec


def _iter_entry_point_backend_specs() -> Iterator[BackendSpec]:
    try:
        backend_eps = metadata.entry_points().select(group=ENTRY_POINT_GROUP)
    except AttributeError:  # pragma: no cover - Python < 3.10
        backend_eps = metadata.entry_points().get(ENTRY_POINT_GROUP, [])
    for ep in backend_eps:
        try:
            spec = ep.load()
        except Exception as exc:
            logger.warning("Failed to load backend entry point '%s': %s", ep.name, exc)
            continue
        if not isinstance(spec, BackendSpec):
            logger.warning("Entry point '%s' did not return a BackendSpec instance", ep.name)
            continue
        yield spec


def _register_discovered_backends() -> None:
    for iterable in (_iter_builtin_backend_specs(), _iter_entry_point_backend_specs()):
        for spec in iterable:
            register_backend_spec(spec)


def get_backend_info(backend_name: str) -> Optional[BackendSpec]:
    """Get backend information by name."""
    return _BACKEND_REGISTRY.get(backend_name.lower())


def list_backends() -> Dict[str, BackendSpec]:
    """List all registered backends."""
    return _BACKEND_REGISTRY.copy()


def get_backend_choices() -> List[str]:
    """Get list of backend names for CLI choices (sorted)."""
    return sorted(_BACKEND_REGISTRY.keys())


def create_backend(backend_type: str, **kwargs: Any) -> AnnotationPipeline:
    """
    Create a pipeline instance using the registry.

    Args:
        backend_type: Type of backend (e.g., "stanza", "spacy", "corenlp")
        **kwargs: Backend-specific arguments (language, model_name, url, ...)

    Returns:
        Annotation pipeline handle
    """
    info = get_backend_info(backend_type)
    if not info:
        raise ValueError(
            f"Unknown backend type: {backend_type}. "
            f"Available backends: {', '.join(get_backend_choices())}"
        )
    try:
        return info.factory(**kwargs)
    except ImportError as e:
        hint = info.install_hint or f'pip install "spanpipe[{info.name}]"'
        raise RuntimeError(
            f"[spanpipe] Backend '{info.name}' requires a module that is not installed ({e}). "
            f"Please install it with: {hint}"
        ) from e


# Initialize registry on module import
_register_discovered_backends()
