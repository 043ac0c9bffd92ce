"""Parallel execution utilities for size probing."""

from __future__ import annotations

import os
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import TypeVar

T = TypeVar("T")
R = TypeVar("R")

# Default number of workers (use CPU count or fallback to 4)
DEFAULT_WORKERS = min(os.cpu_count() or 4, 8)

# Minimum items needed to benefit from parallel execution
MIN_PARALLEL_ITEMS = 2


@dataclass
class ParallelConfig:
    """Configuration for parallel execution."""

    enabled: bool = True
    max_workers: int = DEFAULT_WORKERS

    def __post_init__(self) -> None:
        if self.max_workers < 1:
            self.max_workers = 1
        elif self.max_workers > 32:
            self.max_workers = 32


def parallel_map_ordered(
    func: Callable[[T], R],
    items: list[T],
    config: ParallelConfig | None = None,
) -> list[tuple[T, R | None, Exception | None]]:
    """
    Apply a function to items in parallel, returning results in original order.

    Args:
        func: Function to apply to each item
        items: List of items to process
        config: Parallel execution configuration

    Returns:
        List of (item, result, error) tuples in the same order as input items.
        If successful, error is None. If failed, result is None.
    """
    if config is None:
        config = ParallelConfig()

    n = len(items)
    results: list[tuple[T, R | None, Exception | None] | None] = [None] * n

    if not config.enabled or n < MIN_PARALLEL_ITEMS:
        # Sequential fallback
        for i, item in enumerate(items):
            try:
                results[i] = (item, func(item), None)
            except Exception as e:
                results[i] = (item, None, e)
    else:
        with ThreadPoolExecutor(max_workers=config.max_workers) as executor:
            future_to_idx = {
                executor.submit(func, item): (i, item) for i, item in enumerate(items)
            }

            for future in as_completed(future_to_idx):
                idx, item = future_to_idx[future]
                try:
                    results[idx] = (item, future.result(), None)
                except Exception as e:
                    results[idx] = (item, None, e)

    return results  # type: ignore[return-value]


def get_sizes_ordered(
    paths: list[str],
    size_func: Callable[[str], int],
    config: ParallelConfig | None = None,
) -> list[int]:
    """Measure many paths at once, keeping input order; failures size to 0."""
    return [
        size if error is None and size is not None else 0
        for _, size, error in parallel_map_ordered(size_func, paths, config)
    ]
