"""Helpers over protean QuerySets."""

from math import ceil

BATCH_SIZE = 100


def fetch_all(queryset) -> list:
    """Drain a QuerySet batch by batch, ignoring the provider's default limit."""
    items: list = []
    while True:
        batch = queryset.offset(len(items)).limit(BATCH_SIZE).all()
        items.extend(batch.items)
        if not batch.items or len(items) >= batch.total:
            return items


def fetch_page(queryset, page: int, size: int):
    """Return ``(items, total)`` for the zero-based ``page`` of ``size`` rows."""
    result = queryset.offset(page * size).limit(size).all()
    return list(result.items), result.total


def page_count(total: int, size: int) -> int:
    return ceil(total / size) if size else 0
