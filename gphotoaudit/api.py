"""Google Photos Library API transport used by the audit commands."""

# pylint: disable=broad-exception-caught

import asyncio
from contextlib import asynccontextmanager
from typing import Any, AsyncIterator, Optional

from aiohttp import ClientSession, ClientTimeout, client_exceptions
from tqdm import tqdm

from gphotoaudit.utils import (
    API_URL,
    MAX_RETRIES,
    dbg,
    get_access_token,
    get_random_user_agent,
)


MAX_RETRY_DELAY = 60.0


class PhotosAPIError(RuntimeError):
    """Raised when a remote call fails (network, auth, malformed response)."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message)
        self.status = status


def _error_message(payload: Any, fallback: str) -> str:
    """Pull `error.message` out of a Google API error body when present."""
    if isinstance(payload, dict):
        error = payload.get("error")
        if isinstance(error, dict) and error.get("message"):
            return str(error["message"])
    return fallback


class PhotosClient:
    """Thin async client returning plain dict payloads for one API path."""

    def __init__(
        self,
        session: ClientSession,
        access_token: str,
        base_url: str = API_URL,
        max_retries: int = MAX_RETRIES,
        backoff_base: float = 1.5,
        max_delay: float = MAX_RETRY_DELAY,
    ) -> None:
        self.session = session
        self.access_token = access_token
        self.base_url = base_url.rstrip("/")
        self.max_retries = max(1, max_retries)
        self.backoff_base = backoff_base
        self.max_delay = max_delay

    def _delay(self, attempt: int, retry_after: Optional[str] = None) -> float:
        if retry_after and retry_after.isdigit():
            delay = float(retry_after)
        else:
            delay = self.backoff_base * (2**attempt)
        return min(delay, self.max_delay)

    def _headers(self) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {self.access_token}",
            "Accept": "application/json",
            "User-Agent": get_random_user_agent(),
        }

    async def request(
        self, method: str, path: str, body: Optional[dict] = None
    ) -> dict:
        """
        Issue one API call and return the decoded JSON object.

        Args:
            method (str): HTTP method, "GET" or "POST".
            path (str): Path relative to the API base, including any query string.
            body (Optional[dict]): JSON body for POST calls.

        Returns:
            dict: The decoded response payload.

        Raises:
            PhotosAPIError: On HTTP errors, client errors or a non-object body.
        """
        url = f"{self.base_url}{path}"
        last_exc: Exception | None = None

        for attempt in range(self.max_retries):
            final = attempt == self.max_retries - 1
            dbg(f"{method} {url} body={body} (attempt {attempt + 1})")
            try:
                async with self.session.request(
                    method, url, json=body, headers=self._headers()
                ) as resp:
                    if resp.status == 429 or resp.status >= 500:
                        last_exc = PhotosAPIError(
                            f"{method} {path} -> HTTP {resp.status}", resp.status
                        )
                        if final:
                            break
                        delay = self._delay(attempt, resp.headers.get("Retry-After"))
                        tqdm.write(
                            f"[~] HTTP {resp.status} on {path}, retrying in {delay:.1f}s"
                        )
                        await asyncio.sleep(delay)
                        continue

                    try:
                        payload = await resp.json(content_type=None)
                    except ValueError as e:
                        raise PhotosAPIError(
                            f"{method} {path} -> invalid JSON response", resp.status
                        ) from e

                    if resp.status >= 400:
                        raise PhotosAPIError(
                            f"{method} {path} -> HTTP {resp.status}: "
                            f"{_error_message(payload, resp.reason or 'error')}",
                            resp.status,
                        )
                    if payload is None:
                        return {}
                    if not isinstance(payload, dict):
                        raise PhotosAPIError(
                            f"{method} {path} -> unexpected payload type "
                            f"{type(payload).__name__}",
                            resp.status,
                        )
                    return payload
            except client_exceptions.ClientError as e:
                last_exc = e
                if final:
                    break
                delay = self._delay(attempt)
                dbg(f"Client error on {path}: {e}; sleeping {delay:.1f}s")
                await asyncio.sleep(delay)

        if isinstance(last_exc, PhotosAPIError):
            raise last_exc
        raise PhotosAPIError(f"{method} {path} failed: {last_exc}") from last_exc


@asynccontextmanager
async def open_client(
    access_token: Optional[str] = None, base_url: str = API_URL
) -> AsyncIterator[PhotosClient]:
    """Yield a `PhotosClient` bound to a fresh session for one command run."""
    token = access_token if access_token is not None else get_access_token()
    if not token:
        raise PhotosAPIError(
            "No access token: set GPHOTOS_ACCESS_TOKEN to an OAuth token "
            "with the photoslibrary.readonly scope"
        )
    timeout = ClientTimeout(total=None, connect=30, sock_connect=30, sock_read=120)
    async with ClientSession(timeout=timeout) as session:
        yield PhotosClient(session, token, base_url=base_url)
