"""Sequential walker for token-paginated API collections."""

from typing import Any, Awaitable, Callable, Optional, Protocol

from gphotoaudit.utils import dbg

PageHandler = Callable[[dict], Awaitable[Any]]


class PageSource(Protocol):
    """Anything that can fetch one page; `PhotosClient` in production."""

    async def request(
        self, method: str, path: str, body: Optional[dict] = None
    ) -> dict: ...


def next_page_path(path: str, token: str) -> str:
    """
    Append `pageToken=<token>` to a read-style path.

    Uses `&` when the path already has a query string, `?` otherwise, and adds
    no separator when the path already ends in one.
    """
    if path.endswith("?") or path.endswith("&"):
        return f"{path}pageToken={token}"
    sep = "&" if "?" in path else "?"
    return f"{path}{sep}pageToken={token}"


def next_page_body(body: Optional[dict], token: str) -> dict:
    """Return a copy of a search-style body with `pageToken` set."""
    out = dict(body) if body else {}
    out["pageToken"] = token
    return out


async def walk_pages(
    client: PageSource,
    method: str,
    path: str,
    body: Optional[dict],
    on_page: PageHandler,
) -> None:
    """
    Fetch every page of a collection and hand each one to `on_page`.

    Pages are fetched strictly one after another: `on_page` (and any nested
    walk it starts) finishes before the next page is requested. Errors from the
    client or the handler propagate and stop the walk.

    Args:
        client (PageSource): Object exposing `request(method, path, body)`.
        method (str): "GET" puts the token in the query string, anything else
            merges it into the request body.
        path (str): API path for the first page.
        body (Optional[dict]): Request body for the first page, sent as is.
        on_page (PageHandler): Async callback receiving each page payload.

    Returns:
        None
    """
    read_style = method.upper() == "GET"
    url, payload = path, body
    pages = 0

    while True:
        page = await client.request(method, url, payload)
        pages += 1
        await on_page(page)

        token = page.get("nextPageToken") if page else None
        if not token:
            dbg(f"{method} {path}: done after {pages} page(s)")
            return

        if read_style:
            url = next_page_path(path, token)
        else:
            payload = next_page_body(body, token)
