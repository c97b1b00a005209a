"""Background fetch workers for loading managers."""

from .content_fetch_worker import BackgroundContentProvider, ContentFetchWorker, ThreadPoolOperationQueue

__all__ = ["BackgroundContentProvider", "ContentFetchWorker", "ThreadPoolOperationQueue"]
