# Copyright (c) 2026 ColorCall
# SPDX-License-Identifier: MIT

"""
Analysis session with stale-result protection.

One image is active at a time. Each submission is tagged with a
generation number; when an analysis finishes, its result is published
only if no newer submission (or reset) has happened since. In-flight work
is never cancelled, it is simply ignored when it lands late.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from typing import Any, Callable, Optional

from colorcall.schema import ColorCallAnalysis
from colorcall.measure.extract import analyze
from colorcall.measure.sampler import ImageInput

logger = logging.getLogger(__name__)


class AnalysisSession:
    """
    Runs analyses in the background and keeps only the newest result.

    Usage::

        with AnalysisSession() as session:
            session.submit("first.png")
            future = session.submit("second.png")
            future.result()
            session.result        # analysis of second.png, never first.png

    Args:
        analyzer: Callable taking an image and keyword options and
            returning a ColorCallAnalysis (defaults to ``analyze``)
        max_workers: Worker threads for concurrent submissions
        **options: Keyword options passed to every analyzer call
    """

    def __init__(
        self,
        analyzer: Callable[..., ColorCallAnalysis] = analyze,
        *,
        max_workers: int = 2,
        **options: Any,
    ) -> None:
        self._analyzer = analyzer
        self._options = options
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers, thread_name_prefix="colorcall-session",
        )
        self._lock = threading.Lock()
        self._generation = 0
        self._result: Optional[ColorCallAnalysis] = None
        self._error: Optional[BaseException] = None

    @property
    def generation(self) -> int:
        """Generation number of the latest submission or reset."""
        with self._lock:
            return self._generation

    @property
    def result(self) -> Optional[ColorCallAnalysis]:
        """Result of the latest submission, or None if not finished/reset."""
        with self._lock:
            return self._result

    @property
    def error(self) -> Optional[BaseException]:
        """Error raised by the latest submission, if it failed."""
        with self._lock:
            return self._error

    def submit(self, image: ImageInput) -> Future:
        """
        Start analyzing a new image.

        The previous result is cleared immediately. The returned future
        resolves to this run's analysis (or raises its error) whether or
        not it was published to the session.
        """
        with self._lock:
            self._generation += 1
            generation = self._generation
            self._result = None
            self._error = None
        return self._executor.submit(self._run, generation, image)

    def reset(self) -> None:
        """Forget the current result; in-flight runs become stale."""
        with self._lock:
            self._generation += 1
            self._result = None
            self._error = None

    def is_current(self, generation: int) -> bool:
        with self._lock:
            return generation == self._generation

    def close(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> AnalysisSession:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _run(self, generation: int, image: ImageInput) -> ColorCallAnalysis:
        try:
            analysis = self._analyzer(image, **self._options)
        except Exception as exc:
            self._publish(generation, error=exc)
            raise
        self._publish(generation, result=analysis)
        return analysis

    def _publish(
        self,
        generation: int,
        result: Optional[ColorCallAnalysis] = None,
        error: Optional[BaseException] = None,
    ) -> None:
        with self._lock:
            if generation != self._generation:
                logger.debug(
                    "Dropping stale result for generation %d (latest is %d)",
                    generation, self._generation,
                )
                return
            self._result = result
            self._error = error
