# script_scout/crawler/url_queue.py
"""
Shared FIFO of URLs waiting to be processed.
"""
from __future__ import annotations

import threading
from collections import deque
from typing import Deque, Iterable, Optional


class URLQueue:
    """Thread-safe FIFO. Duplicates are admitted; nothing is deduplicated.

    ``pop()`` returns ``None`` when the queue is empty, so an empty-string URL
    that was actually queued is still distinguishable from "nothing left".
    """

    def __init__(self, urls: Iterable[str] = ()) -> None:
        self._lock = threading.Lock()
        self._items: Deque[str] = deque(urls)

    def push(self, url: str) -> None:
        with self._lock:
            self._items.append(url)

    def pop(self) -> Optional[str]:
        with self._lock:
            if not self._items:
                return None
            return self._items.popleft()

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)
