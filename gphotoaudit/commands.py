"""Audit commands offered by the CLI menu."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Awaitable, Callable

from gphotoaudit.models import NoResults
from gphotoaudit.membership import MembershipSet
from gphotoaudit.paging import PageSource
from gphotoaudit.reconcile import find_leaked_private_photos, find_out_of_album_photos
from gphotoaudit.utils import PRIVATE_ALBUM, READONLY_SCOPE


@dataclass(frozen=True)
class Command:
    """One menu entry: display name, required OAuth scope and the audit to run."""

    name: str
    tag: str
    scopes: str
    audit: Callable[[PageSource], Awaitable[MembershipSet | NoResults]]

    async def run(self, client: PageSource) -> MembershipSet | NoResults:
        print(f"[*] {self.tag} : running")
        output = await self.audit(client)
        print(f"[*] {self.tag} : finished")
        return output


async def _out_of_album(client: PageSource) -> MembershipSet | NoResults:
    return await find_out_of_album_photos(client)


async def _out_of_album_with_shared(client: PageSource) -> MembershipSet | NoResults:
    return await find_out_of_album_photos(client, include_shared=True)


async def _private_leaks(client: PageSource) -> MembershipSet | NoResults:
    return await find_leaked_private_photos(client, PRIVATE_ALBUM)


COMMANDS: tuple[Command, ...] = (
    Command(
        name="Find out-of-album photos",
        tag="findOutOfAlbumPhotos",
        scopes=READONLY_SCOPE,
        audit=_out_of_album,
    ),
    Command(
        name='Find out-of-album photos (including "shared" albums)',
        tag="findOutOfAlbumPhotos(w/shared)",
        scopes=READONLY_SCOPE,
        audit=_out_of_album_with_shared,
    ),
    Command(
        name="Find private photos which are in other albums",
        tag="findPrivatePhotos",
        scopes=READONLY_SCOPE,
        audit=_private_leaks,
    ),
)


def get_command(choice: str) -> Command | None:
    """Resolve a 1-based menu number to its command."""
    try:
        index = int(choice.strip())
    except ValueError:
        return None
    if 1 <= index <= len(COMMANDS):
        return COMMANDS[index - 1]
    return None
