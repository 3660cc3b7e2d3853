"""Tests for descriptor file discovery."""

from __future__ import annotations

import queue
from pathlib import Path

import pytest

from photoCatalogue.config import DEFAULT_EXCLUDE, DEFAULT_INCLUDE
from photoCatalogue.io.scanner import (
    DescriptorDiscoverer,
    gather_descriptor_paths,
    iter_descriptor_paths,
)


@pytest.fixture()
def tree(write_tree) -> Path:
    return write_tree(
        {
            "top.txt": "*\n",
            "2020/trip/list.txt": "*\n",
            "2020/trip/readme.md": "not a descriptor",
            ".cache/stale.txt": "*\n",
        }
    )


def _relative(paths, root: Path):
    return sorted(path.relative_to(root).as_posix() for path in paths)


def test_gather_finds_descriptors_and_skips_hidden(tree: Path) -> None:
    found = gather_descriptor_paths(tree, DEFAULT_INCLUDE, DEFAULT_EXCLUDE)
    assert _relative(found, tree) == ["2020/trip/list.txt", "top.txt"]


@pytest.mark.parametrize("parallel", [True, False])
def test_iter_descriptor_paths_matches_gather(tree: Path, parallel: bool) -> None:
    found = list(iter_descriptor_paths(tree, DEFAULT_INCLUDE, DEFAULT_EXCLUDE, parallel=parallel))
    assert _relative(found, tree) == ["2020/trip/list.txt", "top.txt"]


def test_iter_descriptor_paths_on_empty_root(tmp_path: Path) -> None:
    assert list(iter_descriptor_paths(tmp_path, DEFAULT_INCLUDE, DEFAULT_EXCLUDE)) == []


def test_abandoned_iteration_stops_the_thread(write_tree) -> None:
    root = write_tree({f"d{index}/list.txt": "*\n" for index in range(20)})
    iterator = iter_descriptor_paths(root, DEFAULT_INCLUDE, DEFAULT_EXCLUDE)
    assert next(iterator).name == "list.txt"
    iterator.close()


def test_discoverer_counts_and_terminates_with_sentinel(tree: Path) -> None:
    path_queue: "queue.Queue" = queue.Queue()
    discoverer = DescriptorDiscoverer(tree, DEFAULT_INCLUDE, DEFAULT_EXCLUDE, path_queue)
    discoverer.start()
    discoverer.join(timeout=5)

    items = []
    while True:
        item = path_queue.get_nowait()
        if item is None:
            break
        items.append(item)
    assert discoverer.total_found == 2
    assert _relative(items, tree) == ["2020/trip/list.txt", "top.txt"]
