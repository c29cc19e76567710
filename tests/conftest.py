"""Pytest configuration and shared fixtures."""
import io
from typing import List, Optional
from unittest.mock import Mock

import pytest

from nuget_feed_tools.console import ConsoleHelper
from nuget_feed_tools.feed.repository import PackageRepository
from nuget_feed_tools.models import PackageDescriptor


class ScriptedInput:
    """Line reader that replays canned answers, then behaves like a closed stdin."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.calls = 0

    def __call__(self) -> str:
        self.calls += 1
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


class FakeRepository(PackageRepository):
    """In-memory repository recording how it was queried."""

    def __init__(self, packages: Optional[List[PackageDescriptor]] = None, error: Optional[Exception] = None):
        self.packages = list(packages or [])
        self.error = error
        self.calls = []

    def get_packages(self):
        self.calls.append(('get_packages',))
        if self.error:
            raise self.error
        return list(self.packages)

    def find_packages(self, package_id, min_version="0.0.0", min_inclusive=True,
                      include_prerelease=True, include_delisted=True):
        self.calls.append(('find_packages', package_id, min_version, min_inclusive,
                           include_prerelease, include_delisted))
        if self.error:
            raise self.error
        return [p for p in self.packages if p.id == package_id]


@pytest.fixture
def make_console():
    """Build a colourless console writing to a buffer and reading scripted lines."""
    def _make(*lines):
        output = io.StringIO()
        reader = ScriptedInput(lines)
        console = ConsoleHelper(output=output, read_line=reader, use_colors=False)
        return console, output, reader
    return _make


@pytest.fixture
def make_response():
    """Build a stand-in for requests.Response."""
    def _make(status_code=200, content=b"", url="http://example.com/nuget/", reason="OK"):
        response = Mock()
        response.status_code = status_code
        response.content = content
        response.text = content.decode('utf-8', errors='replace') if isinstance(content, bytes) else content
        response.url = url
        response.reason = reason
        return response
    return _make


@pytest.fixture
def mock_session():
    session = Mock()
    session.headers = {}
    return session


@pytest.fixture
def sample_packages():
    return [
        PackageDescriptor(id="A", version="1.0.0"),
        PackageDescriptor(id="B", version="2.0.0"),
    ]


def atom_entry(package_id: str, version: str, is_prerelease: Optional[bool] = None,
               listed: Optional[bool] = None, published: Optional[str] = None, with_id_property: bool = True) -> str:
    """Render one OData Atom entry the way NuGet Server does."""
    properties = [f"<d:Version>{version}</d:Version>"]
    if with_id_property:
        properties.insert(0, f"<d:Id>{package_id}</d:Id>")
    if is_prerelease is not None:
        properties.append(f'<d:IsPrerelease m:type="Edm.Boolean">{str(is_prerelease).lower()}</d:IsPrerelease>')
    if listed is not None:
        properties.append(f'<d:Listed m:type="Edm.Boolean">{str(listed).lower()}</d:Listed>')
    if published is not None:
        properties.append(f'<d:Published m:type="Edm.DateTime">{published}</d:Published>')
    return (
        "<entry>"
        f"<id>http://example.com/nuget/Packages(Id='{package_id}',Version='{version}')</id>"
        f'<title type="text">{package_id}</title>'
        f"<m:properties>{''.join(properties)}</m:properties>"
        "</entry>"
    )


def atom_feed(*entries: str, next_href: Optional[str] = None) -> bytes:
    """Wrap entries in an OData Atom feed document."""
    next_link = f'<link rel="next" href="{next_href}" />' if next_href else ""
    return (
        '<?xml version="1.0" encoding="utf-8"?>'
        '<feed xml:base="http://example.com/nuget/" xmlns="http://www.w3.org/2005/Atom" '
        'xmlns:d="http://schemas.microsoft.com/ado/2007/08/dataservices" '
        'xmlns:m="http://schemas.microsoft.com/ado/2007/08/dataservices/metadata">'
        '<title type="text">Packages</title>'
        f"{''.join(entries)}"
        f"{next_link}"
        "</feed>"
    ).encode('utf-8')
