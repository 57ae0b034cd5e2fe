"""HTTP fetching for the target page.

One GET with a browser user-agent. FETCH_TIMEOUT bounds every connect/read and
also the whole download, so a server trickling bytes cannot hold the fetch open.
Transport errors, timeouts and non-2xx responses all collapse into ScrapeFailed;
nothing is retried.
"""

import time

import httpx
from ..config import get_settings
from ..errors import ScrapeFailed
from ..log import get_logger

settings = get_settings()
logger = get_logger("fetch")

class Fetcher:
    def __init__(self):
        self.headers = {
            "User-Agent": settings.USER_AGENT
        }

    def fetch_url(self, url: str) -> str:
        """
        Fetches the content of a URL. Returns text/html content.
        Raises ScrapeFailed on any transport error, non-success status or
        when the download runs past FETCH_TIMEOUT in total.
        """
        limit = settings.FETCH_TIMEOUT
        deadline = time.monotonic() + limit
        try:
            with httpx.Client(timeout=limit, follow_redirects=True, headers=self.headers) as client:
                with client.stream("GET", url) as resp:
                    resp.raise_for_status()
                    chunks = []
                    for chunk in resp.iter_bytes():
                        chunks.append(chunk)
                        if time.monotonic() > deadline:
                            logger.warning(f"Fetch of {url} exceeded {limit}s")
                            raise ScrapeFailed(detail=f"download of {url} exceeded {limit}s")
                    return b"".join(chunks).decode(resp.encoding or "utf-8", errors="replace")
        except httpx.HTTPStatusError as e:
            logger.warning(f"Fetch of {url} returned HTTP {e.response.status_code}")
            raise ScrapeFailed(detail=f"HTTP {e.response.status_code} for {url}") from e
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.warning(f"Fetch of {url} failed: {e.__class__.__name__}: {e}")
            raise ScrapeFailed(detail=f"{e.__class__.__name__}: {e}") from e

fetcher = Fetcher()
