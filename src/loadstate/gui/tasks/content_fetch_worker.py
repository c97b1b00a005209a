"""Run blocking fetches on a QThreadPool and report through completions."""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable, Optional

from PySide6.QtCore import QRunnable, QThreadPool

from ...config import FETCH_POOL_MAX_THREADS
from ...core.provider import ContentProvider, LoadCompletion, SuccessCompletion
from ...errors import LoadCancelledError

_logger = logging.getLogger(__name__)


class ContentFetchWorker(QRunnable):
    """Background worker that runs a single fetch and reports the outcome.

    The completion is called from the pool thread; the loading manager's
    dispatcher moves it back onto the owner's thread.
    """

    def __init__(
        self,
        fetch: Callable[[], Any],
        completion: LoadCompletion,
        on_done: Optional[Callable[["ContentFetchWorker"], None]] = None,
    ) -> None:
        super().__init__()
        # The queue keeps the Python reference; Qt must not delete it
        self.setAutoDelete(False)
        self._fetch = fetch
        self._completion = completion
        self._on_done = on_done
        self._cancelled = threading.Event()
        self._reported = threading.Lock()
        self._has_reported = False

    @property
    def cancelled(self) -> bool:
        return self._cancelled.is_set()

    def cancel(self) -> None:
        self._cancelled.set()

    def report(self, error: Optional[BaseException], results: Any) -> None:
        """Call the completion once; later reports are ignored."""

        with self._reported:
            if self._has_reported:
                return
            self._has_reported = True
        try:
            self._completion(error, results)
        finally:
            if self._on_done is not None:
                self._on_done(self)

    def run(self) -> None:  # pragma: no cover - runs in background thread
        if self.cancelled:
            self.report(LoadCancelledError(), None)
            return
        try:
            results = self._fetch()
        except Exception as exc:
            _logger.warning("Fetch failed: %s", exc)
            self.report(exc, None)
            return
        if self.cancelled:
            self.report(LoadCancelledError(), None)
        else:
            self.report(None, results)


class ThreadPoolOperationQueue:
    """Operation queue backed by a dedicated :class:`QThreadPool`.

    ``cancel_all_operations`` removes workers that have not started yet and
    flags running ones; each reports a :class:`LoadCancelledError`.
    """

    def __init__(self, pool: Optional[QThreadPool] = None) -> None:
        if pool is None:
            pool = QThreadPool()
            pool.setMaxThreadCount(FETCH_POOL_MAX_THREADS)
        self._pool = pool
        self._workers: set[ContentFetchWorker] = set()
        self._lock = threading.Lock()

    @property
    def pool(self) -> QThreadPool:
        return self._pool

    def submit(self, fetch: Callable[[], Any], completion: LoadCompletion) -> ContentFetchWorker:
        worker = ContentFetchWorker(fetch, completion, on_done=self._forget)
        with self._lock:
            self._workers.add(worker)
        self._pool.start(worker)
        return worker

    def cancel_all_operations(self) -> None:
        with self._lock:
            workers = list(self._workers)
        if workers:
            _logger.debug("Cancelling %d outstanding fetch(es)", len(workers))
        for worker in workers:
            worker.cancel()
            if self._pool.tryTake(worker):
                # Never started, so run() will not report
                worker.report(LoadCancelledError(), None)

    def pending_count(self) -> int:
        with self._lock:
            return len(self._workers)

    def wait_for_done(self, msecs: int = -1) -> bool:
        return self._pool.waitForDone(msecs)

    def _forget(self, worker: ContentFetchWorker) -> None:
        with self._lock:
            self._workers.discard(worker)


class BackgroundContentProvider(ContentProvider):
    """Content provider whose fetch is a blocking call run on a thread pool.

    Subclasses implement :meth:`fetch`, which runs on a pool thread, and may
    override :meth:`process`, which runs on the owner's thread once the fetch
    succeeded.  Return :attr:`operation_queue` from the owner's
    ``network_operation_queue`` hook to cancel superseded fetches.
    """

    def __init__(self, operation_queue: Optional[ThreadPoolOperationQueue] = None) -> None:
        self.operation_queue = operation_queue or ThreadPoolOperationQueue()

    def fetch(self, ignore_cache: bool) -> Any:
        raise NotImplementedError

    def process(self, response: Any) -> bool:
        return True

    def load_content(self, ignore_cache: bool, completion: LoadCompletion) -> None:
        self.operation_queue.submit(lambda: self.fetch(ignore_cache), completion)

    def load_success(self, response: Any, completion: SuccessCompletion) -> None:
        completion(self.process(response))


__all__ = ["BackgroundContentProvider", "ContentFetchWorker", "ThreadPoolOperationQueue"]
