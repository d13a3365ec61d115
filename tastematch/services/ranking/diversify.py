from collections.abc import Callable, Hashable
from typing import TypeVar

from tastematch.models.catalog import DiscoveryItem
from tastematch.services.ranking.constants import MAX_CATEGORY_RUN

T = TypeVar("T")


def _run_length(items: list[T], key: Callable[[T], Hashable]) -> int:
    if not items:
        return 0
    last = key(items[-1])
    count = 0
    for item in reversed(items):
        if key(item) != last:
            break
        count += 1
    return count


def diversify(items: list[T], key: Callable[[T], Hashable], max_run: int = MAX_CATEGORY_RUN) -> list[T]:
    """
    Break up long runs of one key in an already ranked list.

    Walks the list in order; once the last ``max_run`` emitted items share a
    key, the next item with a different key is promoted. The output is always
    a permutation of the input. A run can only exceed ``max_run`` when nothing
    with a different key is left.
    """
    result: list[T] = []
    remaining = list(items)
    while remaining:
        index = 0
        if _run_length(result, key) >= max_run:
            last = key(result[-1])
            index = next((i for i, item in enumerate(remaining) if key(item) != last), 0)
        result.append(remaining.pop(index))
    return result


def diversify_discovery(items: list[DiscoveryItem], max_type_run: int, max_cluster_run: int) -> list[DiscoveryItem]:
    """Like ``diversify``, but bounds runs of both type and primary cluster."""
    result: list[DiscoveryItem] = []
    remaining = list(items)
    while remaining:
        need_type = _run_length(result, lambda d: d.type) >= max_type_run
        need_cluster = _run_length(result, lambda d: d.primary_cluster) >= max_cluster_run
        index = 0
        if need_type or need_cluster:
            last = result[-1]

            def type_ok(item: DiscoveryItem) -> bool:
                return not need_type or item.type != last.type

            def cluster_ok(item: DiscoveryItem) -> bool:
                return not need_cluster or item.primary_cluster != last.primary_cluster

            index = next((i for i, item in enumerate(remaining) if type_ok(item) and cluster_ok(item)), None)
            if index is None:
                # type diversity wins over cluster diversity
                index = next((i for i, item in enumerate(remaining) if type_ok(item)), 0)
        result.append(remaining.pop(index))
    return result
