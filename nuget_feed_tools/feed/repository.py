"""
NuGet v2 OData package repository.

Reads the Atom feeds exposed by NuGet Server 2.x (``Packages()`` and
``FindPackagesById()``), following server-side paging links, and turns each
entry into a PackageDescriptor.
"""

import logging
from abc import ABC, abstractmethod
from typing import Dict, Iterator, List, Optional, Tuple
from urllib.parse import urljoin

import defusedxml.ElementTree as ET
import requests

from ..exceptions import FeedParseError, FeedQueryError
from ..models import PackageDescriptor
from ..version import get_user_agent
from ..versioning import satisfies_minimum

logger = logging.getLogger(__name__)

ATOM_NS = 'http://www.w3.org/2005/Atom'
DATA_NS = 'http://schemas.microsoft.com/ado/2007/08/dataservices'
METADATA_NS = 'http://schemas.microsoft.com/ado/2007/08/dataservices/metadata'

NAMESPACES = {
    'atom': ATOM_NS,
    'd': DATA_NS,
    'm': METADATA_NS,
}

# nuget.org marks unlisted packages with this publish year
UNLISTED_PUBLISH_YEAR = '1900'


class PackageRepository(ABC):
    """Abstract base class for a source of package descriptors."""

    @abstractmethod
    def get_packages(self) -> List[PackageDescriptor]:
        """
        Return every package version the feed exposes, unfiltered.

        Returns:
            Descriptors in the order the feed returned them
        """
        pass

    @abstractmethod
    def find_packages(self, package_id: str, min_version: str = "0.0.0", min_inclusive: bool = True,
                      include_prerelease: bool = True, include_delisted: bool = True) -> List[PackageDescriptor]:
        """
        Return every version of a single package.

        Args:
            package_id: Package identifier to match
            min_version: Lowest version to return
            min_inclusive: Whether min_version itself is returned
            include_prerelease: Return pre-release versions
            include_delisted: Return delisted versions

        Returns:
            Matching descriptors in feed order
        """
        pass


class ODataPackageRepository(PackageRepository):
    """Package repository backed by a NuGet v2 OData feed."""

    def __init__(self, feed_url: str, session: Optional[requests.Session] = None,
                 timeout: Optional[float] = None, page_limit: Optional[int] = None,
                 user_agent: Optional[str] = None):
        """
        Initialize the repository.

        Args:
            feed_url: Absolute feed URL, e.g. https://nuget.example.com/nuget/
            session: Optional requests session to reuse
            timeout: Optional request timeout in seconds
            page_limit: Maximum number of pages to follow; None follows all
            user_agent: User-Agent header value
        """
        self.feed_url = feed_url if feed_url.endswith('/') else f"{feed_url}/"
        self.timeout = timeout
        self.page_limit = page_limit
        self.session = session or requests.Session()
        self.session.headers.update({
            'User-Agent': user_agent or get_user_agent(),
            'Accept': 'application/atom+xml,application/xml',
            'DataServiceVersion': '2.0',
        })

    def get_packages(self) -> List[PackageDescriptor]:
        url = urljoin(self.feed_url, 'Packages()')
        packages = list(self._iter_feed(url))
        logger.debug(f"Feed {self.feed_url} returned {len(packages)} package versions")
        return packages

    def find_packages(self, package_id: str, min_version: str = "0.0.0", min_inclusive: bool = True,
                      include_prerelease: bool = True, include_delisted: bool = True) -> List[PackageDescriptor]:
        url = urljoin(self.feed_url, 'FindPackagesById()')
        params = {'id': f"'{package_id}'"}

        matches = []
        for package in self._iter_feed(url, params):
            # Package ids are case-insensitive on NuGet feeds
            if package.id.lower() != package_id.lower():
                continue
            if not include_prerelease and package.is_prerelease:
                continue
            if not include_delisted and not package.is_listed:
                continue
            if not satisfies_minimum(package.version, min_version, min_inclusive):
                continue
            matches.append(package)

        logger.debug(f"Feed {self.feed_url} returned {len(matches)} versions of {package_id}")
        return matches

    def _iter_feed(self, url: str, params: Optional[Dict[str, str]] = None) -> Iterator[PackageDescriptor]:
        """Yield descriptors from a feed URL, following rel="next" links."""
        pages = 0
        while url:
            pages += 1
            logger.debug(f"Fetching feed page {pages}: {url}")
            content, response_url = self._fetch(url, params)
            packages, next_link = parse_feed(content, response_url)
            yield from packages

            if next_link and self.page_limit is not None and pages >= self.page_limit:
                logger.warning(f"Stopped following feed pages after {pages} page(s) at {response_url}")
                break

            # The next link already carries the query
            url, params = next_link, None

    def _fetch(self, url: str, params: Optional[Dict[str, str]]) -> Tuple[bytes, str]:
        response = self.session.get(url, params=params, timeout=self.timeout)
        if response.status_code != 200:
            logger.debug(f"Response content: {response.text[:200]}")
            raise FeedQueryError(
                response.reason or "unexpected response",
                url=response.url or url,
                status_code=response.status_code
            )
        return response.content, response.url or url


def parse_feed(content: bytes, base_url: str) -> Tuple[List[PackageDescriptor], Optional[str]]:
    """
    Parse one page of an OData Atom feed.

    Args:
        content: Raw XML of the page
        base_url: URL the page was fetched from, for resolving relative links

    Returns:
        Tuple of (descriptors in document order, absolute next-page URL or None)

    Raises:
        FeedParseError: If the content is not a well-formed Atom feed
    """
    try:
        root = ET.fromstring(content)
    except (ET.ParseError, ValueError) as e:
        # defusedxml reports forbidden constructs as ValueError subclasses
        raise FeedParseError(str(e), url=base_url)

    if root.tag != f'{{{ATOM_NS}}}feed':
        raise FeedParseError(f"expected an Atom feed, got <{root.tag}>", url=base_url)

    packages = []
    for entry in root.findall('atom:entry', NAMESPACES):
        package = _parse_entry(entry)
        if package is None:
            logger.debug(f"Skipping feed entry without id or version in {base_url}")
            continue
        packages.append(package)

    next_link = None
    for link in root.findall('atom:link', NAMESPACES):
        if link.get('rel') == 'next' and link.get('href'):
            xml_base = root.get('{http://www.w3.org/XML/1998/namespace}base') or base_url
            next_link = urljoin(urljoin(base_url, xml_base), link.get('href'))
            break

    return packages, next_link


def _parse_entry(entry) -> Optional[PackageDescriptor]:
    properties = entry.find('m:properties', NAMESPACES)
    if properties is None:
        # Some servers put the properties inside <content>
        properties = entry.find('atom:content/m:properties', NAMESPACES)

    def prop(name: str) -> Optional[str]:
        if properties is None:
            return None
        element = properties.find(f'd:{name}', NAMESPACES)
        return element.text.strip() if element is not None and element.text else None

    package_id = prop('Id')
    if not package_id:
        title = entry.find('atom:title', NAMESPACES)
        package_id = title.text.strip() if title is not None and title.text else None

    version = prop('Version')
    if not package_id or not version:
        return None

    is_prerelease = prop('IsPrerelease')
    if is_prerelease is None:
        is_prerelease = 'true' if '-' in version.split('+', 1)[0] else 'false'

    listed = prop('Listed')
    published = prop('Published') or ""
    is_listed = (listed or 'true').lower() == 'true' and not published.startswith(UNLISTED_PUBLISH_YEAR)

    return PackageDescriptor(
        id=package_id,
        version=version,
        is_prerelease=is_prerelease.lower() == 'true',
        is_listed=is_listed
    )


def create_repository(feed_url: str, feed_config=None, session: Optional[requests.Session] = None) -> PackageRepository:
    """
    Create the repository used to query a feed.

    Args:
        feed_url: Absolute feed URL
        feed_config: Optional FeedConfig section
        session: Optional requests session to reuse

    Returns:
        PackageRepository for the feed
    """
    if feed_config is None:
        return ODataPackageRepository(feed_url, session=session)

    return ODataPackageRepository(
        feed_url,
        session=session,
        timeout=feed_config.timeout,
        page_limit=feed_config.page_limit,
        user_agent=feed_config.user_agent
    )
