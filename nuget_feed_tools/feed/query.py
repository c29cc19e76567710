"""
Package query engine.

Chooses between a find-by-id query and a full listing depending on the
filter, and reports the outcome as a FeedResult instead of raising.
"""

import logging
import traceback
from typing import Optional

import requests

from ..exceptions import FeedParseError, FeedQueryError
from ..models import FeedResult, QueryFilter
from .repository import PackageRepository, create_repository

logger = logging.getLogger(__name__)


def query(feed_url: str, query_filter: Optional[QueryFilter] = None,
          repository: Optional[PackageRepository] = None, feed_config=None) -> FeedResult:
    """
    Retrieve package descriptors from a feed.

    A non-empty filter id returns every version of that package (pre-release
    and delisted included) at or above the filter's minimum version. An empty
    id returns the feed's full, unfiltered package set. Feed order is kept.
    An empty result is still a success.

    Args:
        feed_url: Absolute, normalized feed URL
        query_filter: Filter options; unfiltered when None
        repository: Repository to query; created for feed_url when None
        feed_config: Optional FeedConfig used when creating the repository

    Returns:
        FeedResult carrying the packages, or the failure classification
    """
    query_filter = query_filter or QueryFilter()
    repo = repository or create_repository(feed_url, feed_config)

    try:
        if query_filter.is_filtered:
            package_id = query_filter.package_id.strip()
            logger.info(f"Finding versions of {package_id} at {feed_url}")
            packages = repo.find_packages(
                package_id,
                min_version=query_filter.min_version,
                min_inclusive=query_filter.min_inclusive,
                include_prerelease=query_filter.include_prerelease,
                include_delisted=query_filter.include_delisted
            )
        else:
            logger.info(f"Listing all packages at {feed_url}")
            packages = repo.get_packages()
    except FeedQueryError as e:
        if e.status_code == requests.codes.not_found:
            logger.warning(f"Feed query returned not found: {e}")
            return FeedResult.unreachable(str(e))
        logger.error(f"Feed query failed: {e}")
        return FeedResult.transport_error(type(e).__name__, str(e), traceback.format_exc())
    except (requests.RequestException, FeedParseError) as e:
        logger.error(f"Feed query failed: {type(e).__name__}: {e}")
        return FeedResult.transport_error(type(e).__name__, str(e), traceback.format_exc())

    logger.info(f"Found {len(packages)} package version(s)")
    return FeedResult.success(packages)
