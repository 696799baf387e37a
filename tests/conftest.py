"""Shared test helpers: an in-memory stand-in for the Photos Library API."""

from urllib.parse import parse_qsl, urlsplit


def media(item_id, url=None):
    return {"id": item_id, "productUrl": url or f"https://photos.example/{item_id}"}


class FakeLibrary:
    """
    Serves media items, albums and shared albums in small pages.

    Tokens are stringified offsets; keys for empty collections are omitted the
    way the real API omits them.
    """

    def __init__(self, media_items=(), albums=(), shared_albums=(), page_size=2):
        self.media_items = [media(i) if isinstance(i, str) else i for i in media_items]
        self.albums = list(albums)
        self.shared_albums = list(shared_albums)
        self.page_size = page_size
        self.calls = []

    def _album_items(self, album_id):
        for album in self.albums + self.shared_albums:
            if album["id"] == album_id:
                return [
                    media(i) if isinstance(i, str) else i for i in album.get("items", ())
                ]
        raise KeyError(album_id)

    def _page(self, key, rows, token):
        start = int(token or 0)
        chunk = rows[start : start + self.page_size]
        page = {}
        if chunk:
            page[key] = chunk
        if start + self.page_size < len(rows):
            page["nextPageToken"] = str(start + self.page_size)
        return page

    async def request(self, method, path, body=None):
        self.calls.append((method, path, dict(body) if body else body))
        parts = urlsplit(path)
        query = dict(parse_qsl(parts.query))

        if method == "GET" and parts.path == "/mediaItems":
            return self._page("mediaItems", self.media_items, query.get("pageToken"))
        if method == "GET" and parts.path in ("/albums", "/sharedAlbums"):
            source = self.albums if parts.path == "/albums" else self.shared_albums
            refs = [{"id": a["id"], "title": a["title"]} for a in source]
            key = "albums" if parts.path == "/albums" else "sharedAlbums"
            return self._page(key, refs, query.get("pageToken"))
        if method == "POST" and parts.path == "/mediaItems:search":
            items = self._album_items(body["albumId"])
            return self._page("mediaItems", items, body.get("pageToken"))
        raise AssertionError(f"unexpected call {method} {path}")
