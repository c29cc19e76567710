"""
Lightweight reachability check for a package feed.
"""

import logging
import traceback
from typing import Optional

import requests

from ..models import FeedResult
from ..version import get_user_agent

logger = logging.getLogger(__name__)


def probe(feed_url: str, session: Optional[requests.Session] = None, timeout: Optional[float] = None) -> FeedResult:
    """
    Check that a feed URL answers without downloading a body.

    Issues a HEAD request without following redirects. A 404 means the feed
    is unreachable; any other status counts as reachable. Transport failures
    are reported with the exception class name, message and traceback. No
    retry is attempted.

    Args:
        feed_url: Absolute, normalized feed URL
        session: Optional requests session to reuse
        timeout: Optional request timeout in seconds (None waits indefinitely)

    Returns:
        FeedResult with SUCCESS, UNREACHABLE or TRANSPORT_ERROR status
    """
    http = session or requests.Session()
    logger.debug(f"Probing feed {feed_url}")

    try:
        response = http.head(
            feed_url,
            allow_redirects=False,
            timeout=timeout,
            headers={'User-Agent': get_user_agent()}
        )
    except requests.RequestException as e:
        logger.warning(f"Probe of {feed_url} failed: {type(e).__name__}: {e}")
        return FeedResult.transport_error(type(e).__name__, str(e), traceback.format_exc())
    finally:
        if session is None:
            http.close()

    logger.debug(f"Probe of {feed_url} answered with HTTP {response.status_code}")

    if response.status_code == requests.codes.not_found:
        return FeedResult.unreachable(f"HTTP {response.status_code} from {feed_url}")

    return FeedResult.success()
