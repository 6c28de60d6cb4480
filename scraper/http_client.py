"""HTTP session setup shared by the sitemap reader and the article scraper."""

import time
import requests
from requests.adapters import HTTPAdapter

DEFAULT_USER_AGENT = 'Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36'
CHUNK_SIZE = 8192


def create_session(user_agent: str = DEFAULT_USER_AGENT, pool_size: int = 8) -> requests.Session:
    """
    Create a requests session with browser-like headers.

    Failed requests are not retried; the connection pool is sized so every
    worker of the batch runner can hold a connection at once.

    Args:
        user_agent: User-Agent header value
        pool_size: Maximum connections kept per host

    Returns:
        Configured requests Session
    """
    session = requests.Session()

    adapter = HTTPAdapter(pool_connections=pool_size, pool_maxsize=pool_size, max_retries=0)
    session.mount("http://", adapter)
    session.mount("https://", adapter)

    session.headers.update({
        'User-Agent': user_agent,
        'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
    })

    return session


def fetch_text(session: requests.Session, url: str, timeout: float) -> str:
    """
    GET a URL and return its decoded body.

    The timeout bounds the whole request: a server that keeps trickling
    bytes past it is cut off as if it had stopped answering.

    Raises:
        requests.exceptions.Timeout: If the server does not answer in time
        requests.exceptions.HTTPError: On a non-2xx status
        requests.exceptions.RequestException: On any other transport failure
    """
    deadline = time.monotonic() + timeout
    response = session.get(url, timeout=timeout, allow_redirects=True, stream=True)
    try:
        response.raise_for_status()

        chunks = []
        for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
            chunks.append(chunk)
            if time.monotonic() > deadline:
                raise requests.exceptions.ReadTimeout(f"Body of {url} not received within {timeout}s")
    finally:
        response.close()

    return _decode(b"".join(chunks), response.encoding)


def _decode(body: bytes, encoding) -> str:
    # requests reports latin-1 for text/* without a charset; prefer UTF-8 then
    if encoding is None or encoding.lower() == 'iso-8859-1':
        try:
            return body.decode('utf-8')
        except UnicodeDecodeError:
            return body.decode('cp1252', errors='replace')
    try:
        return body.decode(encoding, errors='replace')
    except LookupError:
        return body.decode('utf-8', errors='replace')
