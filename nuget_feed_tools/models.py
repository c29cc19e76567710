"""
Core data models for NuGet Feed Tools.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional, Tuple

from .validation import feed_host_url


class FeedStatus(Enum):
    """Enumeration of possible outcomes of a feed probe or query."""
    SUCCESS = "success"
    UNREACHABLE = "unreachable"
    TRANSPORT_ERROR = "transport_error"


@dataclass(frozen=True)
class PackageDescriptor:
    """A single package version as returned by the feed."""
    id: str
    version: str
    is_prerelease: bool = field(default=False, compare=False)
    is_listed: bool = field(default=True, compare=False)

    @property
    def display_name(self) -> str:
        """Render the descriptor the way both export files list it."""
        return f"{self.id} {self.version}"


@dataclass(frozen=True)
class QueryFilter:
    """Options for a package query. An empty package_id means no filter."""
    package_id: str = ""
    include_prerelease: bool = True
    include_delisted: bool = True
    all_versions: bool = True
    min_version: str = "0.0.0"
    min_inclusive: bool = True

    @property
    def is_filtered(self) -> bool:
        return bool(self.package_id and self.package_id.strip())


@dataclass(frozen=True)
class DeletionBatch:
    """Ordered package tokens read from a batch file."""
    source_path: str
    package_ids: Tuple[str, ...] = ()

    def __len__(self) -> int:
        return len(self.package_ids)

    def __iter__(self) -> Iterator[str]:
        return iter(self.package_ids)


@dataclass(frozen=True)
class FeedResult:
    """Outcome of a probe or query against a feed."""
    status: FeedStatus
    packages: Tuple[PackageDescriptor, ...] = ()
    error_kind: Optional[str] = None
    error_message: Optional[str] = None
    error_detail: Optional[str] = None  # Formatted traceback, when available

    @property
    def is_success(self) -> bool:
        return self.status == FeedStatus.SUCCESS

    @classmethod
    def success(cls, packages=()) -> 'FeedResult':
        return cls(status=FeedStatus.SUCCESS, packages=tuple(packages))

    @classmethod
    def unreachable(cls, message: Optional[str] = None) -> 'FeedResult':
        return cls(status=FeedStatus.UNREACHABLE, error_message=message)

    @classmethod
    def transport_error(cls, kind: str, message: str, detail: Optional[str] = None) -> 'FeedResult':
        return cls(
            status=FeedStatus.TRANSPORT_ERROR,
            error_kind=kind,
            error_message=message,
            error_detail=detail
        )


@dataclass(frozen=True)
class ExportPaths:
    """Locations of the files written by an export."""
    text_path: str
    csv_path: str


@dataclass(frozen=True)
class ListerConfiguration:
    """Run configuration gathered by the package lister prompts."""
    feed_url: str
    package_id: str = ""

    @property
    def query_filter(self) -> QueryFilter:
        return QueryFilter(package_id=self.package_id)


@dataclass(frozen=True)
class DeleterConfiguration:
    """Run configuration gathered by the package deleter prompts."""
    batch_file: str
    feed_url: str
    api_key: str

    @property
    def feed_host_url(self) -> str:
        """Scheme, host and port of the feed URL; path and userinfo are discarded."""
        return feed_host_url(self.feed_url)
