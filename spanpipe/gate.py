"""
Execution gate for annotation pipelines.

Pipelines are run on a bounded worker pool. Invocations sharing a pipeline
handle are serialised with a per-handle lock, so a non-reentrant pipeline is
never entered twice at once even when the pool has several workers.
"""

from __future__ import annotations

import logging
import threading
import time
from concurrent.futures import CancelledError, Future, ThreadPoolExecutor
from concurrent.futures import TimeoutError as FuturesTimeoutError
from typing import Dict, List, Optional

from .doc import RawSentence
from .errors import ConfigurationError, PipelineCancelledError, PipelineExecutionError
from .pipeline_registry import AnnotationPipeline

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 0.05


class _HandleLock:
    """Lock of one pipeline handle plus the number of invocations using it."""

    __slots__ = ("lock", "users")

    def __init__(self) -> None:
        self.lock = threading.Lock()
        self.users = 0


class ExecutionGate:
    """Hands pipeline invocations to a worker and waits for the outcome."""

    def __init__(self, max_workers: int = 1, *, poll_interval: float = DEFAULT_POLL_INTERVAL) -> None:
        if max_workers < 1:
            raise ConfigurationError(f"max_workers must be at least 1 (got {max_workers})")
        if poll_interval <= 0:
            raise ConfigurationError(f"poll_interval must be positive (got {poll_interval})")
        self._executor = ThreadPoolExecutor(max_workers=max_workers, thread_name_prefix="spanpipe-gate")
        self._poll_interval = poll_interval
        # entries live only while an invocation of the handle is running or waiting for its lock
        self._handle_locks: Dict[int, _HandleLock] = {}
        self._locks_guard = threading.Lock()

    def _invoke(self, pipeline: AnnotationPipeline, text: str) -> List[RawSentence]:
        key = id(pipeline)
        with self._locks_guard:
            entry = self._handle_locks.get(key)
            if entry is None:
                entry = self._handle_locks[key] = _HandleLock()
            entry.users += 1
        try:
            with entry.lock:
                return [list(sentence) for sentence in pipeline.annotate(text)]
        finally:
            with self._locks_guard:
                entry.users -= 1
                if not entry.users:
                    del self._handle_locks[key]

    def run(
        self,
        pipeline: AnnotationPipeline,
        text: str,
        *,
        language: str = "",
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> List[RawSentence]:
        """
        Run ``pipeline`` over ``text`` on the worker pool and wait for the result.

        Args:
            pipeline: Pipeline handle to invoke
            text: Document text
            language: Language code, used in error messages
            timeout: Seconds to wait before giving up (``None`` waits forever)
            cancel_event: Event that abandons the wait when set

        Raises:
            PipelineExecutionError: If the pipeline raised
            PipelineCancelledError: If the wait was abandoned before completion,
                including a shutdown of the gate while the invocation was queued
        """
        future = self._executor.submit(self._invoke, pipeline, text)
        try:
            return self._wait(future, language, timeout, cancel_event)
        except CancelledError as exc:
            raise PipelineCancelledError(language, "task cancelled") from exc
        except KeyboardInterrupt as exc:
            future.cancel()
            raise PipelineCancelledError(language, "interrupted") from exc
        except PipelineCancelledError:
            raise
        except Exception as exc:
            raise PipelineExecutionError(language, exc) from exc

    def _wait(
        self,
        future: Future,
        language: str,
        timeout: Optional[float],
        cancel_event: Optional[threading.Event],
    ) -> List[RawSentence]:
        # Future.result() wakes up on cancellation too, unlike concurrent.futures.wait()
        if timeout is None and cancel_event is None:
            return future.result()
        deadline = None if timeout is None else time.monotonic() + timeout
        while True:
            if cancel_event is not None and cancel_event.is_set():
                future.cancel()
                raise PipelineCancelledError(language, "cancel requested")
            step = self._poll_interval
            if deadline is not None:
                remaining = deadline - time.monotonic()
                if remaining <= 0:
                    future.cancel()
                    logger.debug("Gave up waiting for a '%s' pipeline after %ss", language, timeout)
                    raise PipelineCancelledError(language, f"timed out after {timeout}s")
                step = min(step, remaining)
            try:
                return future.result(timeout=step)
            except FuturesTimeoutError:
                # a pipeline may itself raise TimeoutError
                if future.done():
                    return future.result()

    def shutdown(self, wait: bool = True) -> None:
        """Stop the workers; queued invocations are cancelled and their callers notified."""
        self._executor.shutdown(wait=wait, cancel_futures=True)

    def __enter__(self) -> "ExecutionGate":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
