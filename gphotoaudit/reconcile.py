"""Album reconciliation: out-of-album photos and private-album leaks."""

from __future__ import annotations

from typing import Any, Callable, Optional, Union

from tqdm import tqdm

from gphotoaudit.membership import MalformedItemError, MembershipSet
from gphotoaudit.models import (
    NO_LEAKED_PRIVATE_PHOTOS,
    NO_OUT_OF_ALBUM_PHOTOS,
    AuditPhase,
    NoResults,
)
from gphotoaudit.paging import PageSource, walk_pages
from gphotoaudit.utils import PRIVATE_ALBUM, dbg

MEDIA_ITEMS_PATH = "/mediaItems?pageSize=100"
ALBUMS_PATH = "/albums?pageSize=50"
SHARED_ALBUMS_PATH = "/sharedAlbums?pageSize=50"
SEARCH_PATH = "/mediaItems:search"
SEARCH_PAGE_SIZE = 100

AuditResult = Union[MembershipSet, NoResults]


class AuditRun:
    """
    State owned by a single audit invocation.

    Holds the working sets and the progress bar so that repeated runs never
    share anything.
    """

    def __init__(self, client: PageSource, desc: str) -> None:
        self.client = client
        self.desc = desc
        self.phase = AuditPhase.NOT_STARTED
        self.base = MembershipSet()
        self.marked = MembershipSet()
        self.albums_scanned = 0
        # disable=None turns the bar off when stderr is not a TTY
        self.progress = tqdm(desc=desc, unit="item", leave=False, disable=None)

    def advance(self, phase: AuditPhase) -> None:
        dbg(f"{self.desc}: {self.phase.value} -> {phase.value}")
        self.phase = phase

    def seen(self, items: Optional[list]) -> None:
        if items:
            self.progress.update(len(items))

    async def walk_album_items(
        self, album: dict[str, Any], action: Callable[[Optional[list]], None]
    ) -> None:
        """Walk the media search of one album, applying `action` to each page's items."""
        album_id = album.get("id") if isinstance(album, dict) else None
        if not album_id:
            raise MalformedItemError(f"Album without id: {album!r}")

        async def on_page(page: dict) -> None:
            items = page.get("mediaItems")
            self.seen(items)
            action(items)

        self.albums_scanned += 1
        dbg(f"Album {album.get('title')!r} ({album.get('id')})")
        await walk_pages(
            self.client,
            "POST",
            SEARCH_PATH,
            {"albumId": album_id, "pageSize": SEARCH_PAGE_SIZE},
            on_page,
        )

    def close(self, failed: bool = False) -> None:
        self.progress.close()
        if failed:
            self.advance(AuditPhase.FAILED)


async def _forget_album_contents(run: AuditRun, albums_path: str, key: str) -> None:
    async def on_page(page: dict) -> None:
        for album in page.get(key) or ():
            await run.walk_album_items(album, run.base.forget)

    await walk_pages(run.client, "GET", albums_path, None, on_page)


async def find_out_of_album_photos(
    client: PageSource, include_shared: bool = False
) -> AuditResult:
    """
    Find media items that are not in any album.

    Every media item is stored first, then the contents of each album (and of
    each shared album when `include_shared` is set) are forgotten. Whatever
    survives is out of album.

    Args:
        client (PageSource): Remote page source.
        include_shared (bool): Also prune items found in shared albums.

    Returns:
        AuditResult: The surviving items, or `NO_OUT_OF_ALBUM_PHOTOS`.
    """
    run = AuditRun(client, "Out-of-album scan")
    try:
        run.advance(AuditPhase.COLLECTING_BASE)

        async def store_page(page: dict) -> None:
            items = page.get("mediaItems")
            run.seen(items)
            run.base.store(items)

        await walk_pages(client, "GET", MEDIA_ITEMS_PATH, None, store_page)
        dbg(f"Library holds {len(run.base)} media item(s)")

        run.advance(AuditPhase.PRUNING_OR_MARKING)
        await _forget_album_contents(run, ALBUMS_PATH, "albums")
        if include_shared:
            await _forget_album_contents(run, SHARED_ALBUMS_PATH, "sharedAlbums")
    except BaseException:
        run.close(failed=True)
        raise

    run.close()
    run.advance(AuditPhase.DONE)
    dbg(f"{run.albums_scanned} album(s) scanned, {len(run.base)} item(s) left")
    return run.base if run.base else NO_OUT_OF_ALBUM_PHOTOS


async def find_leaked_private_photos(
    client: PageSource, private_title: str = PRIVATE_ALBUM
) -> AuditResult:
    """
    Find items of the private album that also appear in other albums.

    The private album is read completely before any other album is checked,
    so two passes over the album list are made. Shared albums are not
    consulted.

    Args:
        client (PageSource): Remote page source.
        private_title (str): Exact title of the private album.

    Returns:
        AuditResult: The leaked items, or `NO_LEAKED_PRIVATE_PHOTOS`.
    """
    run = AuditRun(client, "Private album scan")
    try:
        run.advance(AuditPhase.COLLECTING_BASE)

        async def collect_private(page: dict) -> None:
            for album in page.get("albums") or ():
                if album.get("title") != private_title:
                    continue
                await run.walk_album_items(album, run.base.store)

        await walk_pages(client, "GET", ALBUMS_PATH, None, collect_private)
        dbg(f"Album {private_title!r} holds {len(run.base)} media item(s)")

        run.advance(AuditPhase.PRUNING_OR_MARKING)

        def mark(items: Optional[list]) -> None:
            run.base.mark_if_present(items, run.marked)

        async def check_others(page: dict) -> None:
            for album in page.get("albums") or ():
                if album.get("title") == private_title:
                    continue
                await run.walk_album_items(album, mark)

        await walk_pages(client, "GET", ALBUMS_PATH, None, check_others)
    except BaseException:
        run.close(failed=True)
        raise

    run.close()
    run.advance(AuditPhase.DONE)
    dbg(f"{len(run.marked)} private item(s) found in other albums")
    return run.marked if run.marked else NO_LEAKED_PRIVATE_PHOTOS
