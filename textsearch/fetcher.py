"""
Fetches HTML pages over HTTP(S).

Redirects are followed by hand so the number of hops can be bounded. Only a
200 response with an HTML content type produces a body; everything else,
including network errors, produces None.
"""

import logging
from urllib.parse import urljoin

import requests

from .config import FETCH_TIMEOUT, MAX_REDIRECTS, USER_AGENT

logger = logging.getLogger(__name__)


def is_html(headers) -> bool:
    return headers.get("Content-Type", "").lower().startswith("text/html")


def fetch_html(uri: str, redirects: int = MAX_REDIRECTS, timeout: float = FETCH_TIMEOUT) -> str | None:
    """
    Return the HTML body of uri, following at most `redirects` redirects,
    or None if the page is missing, not HTML or unreachable.
    """
    try:
        response = requests.get(
            uri,
            allow_redirects=False,
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
        )
    except requests.RequestException as e:
        logger.debug("fetch error %s: %s", uri, e)
        return None

    if 300 <= response.status_code < 400:
        location = response.headers.get("Location")
        if location and redirects > 0:
            return fetch_html(urljoin(uri, location), redirects - 1, timeout)
        logger.debug("%s redirected past the limit", uri)
        return None

    if response.status_code != 200 or not is_html(response.headers):
        logger.debug("%s was not a 200 HTML response (%s)", uri, response.status_code)
        return None
    return response.text
