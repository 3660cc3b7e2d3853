"""Descriptor file discovery below a catalogue root."""

from __future__ import annotations

import queue
import threading
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from ..utils.logging import get_logger
from ..utils.pathutils import should_include

LOGGER = get_logger()


def _iter_candidates(
    root: Path, include_globs: List[str], exclude_globs: List[str]
) -> Iterator[Path]:
    for candidate in root.rglob("*"):
        if not candidate.is_file():
            continue
        if should_include(candidate, include_globs, exclude_globs, root=root):
            yield candidate


class DescriptorDiscoverer(threading.Thread):
    """Background thread that walks the root and queues descriptor paths.

    ``None`` is queued once the walk finishes, successfully or not.
    """

    def __init__(
        self,
        root: Path,
        include_globs: Iterable[str],
        exclude_globs: Iterable[str],
        queue_obj: queue.Queue[Optional[Path]],
    ) -> None:
        super().__init__(name=f"DescriptorDiscovery-{root.name}")
        self._root = root
        self._include_globs = list(include_globs)
        self._exclude_globs = list(exclude_globs)
        self._queue = queue_obj
        self._total_found = 0
        self._lock = threading.Lock()
        self._stop_event = threading.Event()
        self.daemon = True

    @property
    def total_found(self) -> int:
        """Return the number of descriptor files discovered so far."""
        with self._lock:
            return self._total_found

    def stop(self) -> None:
        """Signal the thread to stop discovery."""
        self._stop_event.set()

    def run(self) -> None:
        try:
            for candidate in _iter_candidates(self._root, self._include_globs, self._exclude_globs):
                if self._stop_event.is_set():
                    break
                # A bounded put keeps the stop event responsive when the
                # consumer has gone away.
                while not self._stop_event.is_set():
                    try:
                        self._queue.put(candidate, timeout=0.1)
                    except queue.Full:
                        continue
                    with self._lock:
                        self._total_found += 1
                    break
        except OSError as exc:
            LOGGER.error("Descriptor discovery below %s failed: %s", self._root, exc)
        finally:
            while True:
                try:
                    self._queue.put(None, timeout=0.1)
                    break
                except queue.Full:
                    if self._stop_event.is_set():
                        LOGGER.debug("Dropping end-of-discovery marker; consumer stopped")
                        break


def gather_descriptor_paths(
    root: Path, include_globs: Iterable[str], exclude_globs: Iterable[str]
) -> List[Path]:
    """Collect every descriptor file below *root* in one synchronous walk."""

    return list(_iter_candidates(root, list(include_globs), list(exclude_globs)))


def iter_descriptor_paths(
    root: Path,
    include_globs: Iterable[str],
    exclude_globs: Iterable[str],
    *,
    parallel: bool = True,
) -> Iterator[Path]:
    """Yield descriptor files below *root*.

    With *parallel* the directory walk runs on a background thread so the
    caller can parse the first descriptors while the rest are still being
    found.
    """

    if not parallel:
        yield from gather_descriptor_paths(root, include_globs, exclude_globs)
        return

    path_queue: queue.Queue[Optional[Path]] = queue.Queue(maxsize=1000)
    discoverer = DescriptorDiscoverer(root, include_globs, exclude_globs, path_queue)
    discoverer.start()
    try:
        while True:
            try:
                path = path_queue.get(timeout=0.5)
            except queue.Empty:
                if discoverer.is_alive():
                    continue
                # The thread finished; anything it queued is still available.
                try:
                    path = path_queue.get_nowait()
                except queue.Empty:
                    return
            if path is None:
                return
            yield path
    finally:
        discoverer.stop()
        while discoverer.is_alive():
            try:
                path_queue.get_nowait()
            except queue.Empty:
                break
        discoverer.join(timeout=1.0)


__all__ = ["DescriptorDiscoverer", "gather_descriptor_paths", "iter_descriptor_paths"]
