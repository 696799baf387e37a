"""Working sets of media items keyed by id."""

from __future__ import annotations

from typing import Any, Iterable, Iterator, Mapping, Optional


class MalformedItemError(ValueError):
    """Raised when a media item in a page has no usable `id`."""


def _item_ref(item: Mapping[str, Any]) -> tuple[str, str]:
    try:
        item_id = item["id"]
    except (KeyError, TypeError) as e:
        raise MalformedItemError(f"Media item without id: {item!r}") from e
    if not item_id:
        raise MalformedItemError(f"Media item without id: {item!r}")
    return str(item_id), str(item.get("productUrl") or "")


class MembershipSet:
    """
    Mapping of media item id to its product URL.

    Only page handlers of one audit run mutate an instance; callers must treat
    iteration order as meaningless.
    """

    def __init__(self) -> None:
        self._items: dict[str, str] = {}

    def store(self, items: Optional[Iterable[Mapping[str, Any]]]) -> None:
        """Insert or overwrite every item."""
        if not items:
            return
        for item in items:
            item_id, url = _item_ref(item)
            self._items[item_id] = url

    def forget(self, items: Optional[Iterable[Mapping[str, Any]]]) -> None:
        """Drop every item that is present; unknown ids are ignored."""
        if not items:
            return
        for item in items:
            item_id, _ = _item_ref(item)
            self._items.pop(item_id, None)

    def mark_if_present(
        self, items: Optional[Iterable[Mapping[str, Any]]], target: MembershipSet
    ) -> None:
        """Copy items already in this set into `target`, using the item's own URL."""
        if not items:
            return
        for item in items:
            item_id, url = _item_ref(item)
            if item_id in self._items:
                target._items[item_id] = url  # pylint: disable=protected-access

    def entries(self) -> Iterator[tuple[str, str]]:
        return iter(self._items.items())

    def urls(self) -> list[str]:
        return list(self._items.values())

    def __len__(self) -> int:
        return len(self._items)

    def __bool__(self) -> bool:
        return bool(self._items)

    def __contains__(self, item_id: object) -> bool:
        return item_id in self._items

    def __repr__(self) -> str:
        return f"MembershipSet({len(self._items)} item(s))"
