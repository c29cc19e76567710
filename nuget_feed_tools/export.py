"""
Writers for the package list produced by the lister.

Both files list one ``"{id} {version}"`` entry per package: the text file
joins them with CRLF and the CSV file with commas. Neither has a header,
quoting or a trailing delimiter.
"""

import logging
import os
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import List, Optional, Sequence

from .exceptions import ExportError
from .models import ExportPaths, PackageDescriptor

logger = logging.getLogger(__name__)

BASE_NAME_PREFIX = "packages-list"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H-%M-%SZ"


class ListExporter(ABC):
    """Abstract base class for package list writers."""

    def __init__(self, delimiter: str):
        self.delimiter = delimiter

    @property
    @abstractmethod
    def file_extension(self) -> str:
        """File extension written by this exporter, without the dot."""
        pass

    def render(self, entries: Sequence[str]) -> str:
        return self.delimiter.join(entries)

    def write(self, entries: Sequence[str], output_dir: str, base_name: str) -> str:
        """
        Write the rendered entries, replacing any existing file.

        Args:
            entries: Formatted package entries
            output_dir: Directory to write into
            base_name: File name without extension

        Returns:
            Path of the written file

        Raises:
            ExportError: If the file cannot be written
        """
        file_path = os.path.join(output_dir, f"{base_name}.{self.file_extension}")
        try:
            # newline='' keeps the CRLF delimiter byte-exact on every platform
            with open(file_path, 'w', encoding='utf-8', newline='') as f:
                f.write(self.render(entries))
        except OSError as e:
            raise ExportError(str(e), file_path=file_path)

        logger.debug(f"Wrote {len(entries)} entries to {file_path}")
        return file_path


class TextListExporter(ListExporter):
    """Newline-delimited package list."""

    def __init__(self, delimiter: str = "\r\n"):
        super().__init__(delimiter)

    @property
    def file_extension(self) -> str:
        return "txt"


class CsvListExporter(ListExporter):
    """Comma-delimited package list on a single line."""

    def __init__(self, delimiter: str = ","):
        super().__init__(delimiter)

    @property
    def file_extension(self) -> str:
        return "csv"


def format_entries(descriptors: Sequence[PackageDescriptor]) -> List[str]:
    return [descriptor.display_name for descriptor in descriptors]


def build_base_name(package_id: str = "", now: Optional[datetime] = None) -> str:
    """
    File name, without extension, for an export.

    Args:
        package_id: Filter id; included in the name only when non-empty
        now: Time to stamp the name with (default: the current UTC time)

    Returns:
        e.g. "packages-list-for-Foo.Bar-at-2024-01-01T00-00-00Z"
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is not None:
        now = now.astimezone(timezone.utc)

    name = BASE_NAME_PREFIX
    if package_id and package_id.strip():
        name += f"-for-{package_id.strip()}"
    return f"{name}-at-{now.strftime(TIMESTAMP_FORMAT)}"


def export(descriptors: Sequence[PackageDescriptor], output_dir: str, base_name: str) -> ExportPaths:
    """
    Write the text and CSV package lists.

    Existing files with the same name are overwritten.

    Args:
        descriptors: Packages to write, in display order
        output_dir: Directory to write into; created when missing
        base_name: File name without extension

    Returns:
        ExportPaths with the text and CSV file locations

    Raises:
        ExportError: If the directory or either file cannot be written
    """
    text_exporter = TextListExporter()
    csv_exporter = CsvListExporter()

    try:
        os.makedirs(output_dir, exist_ok=True)
    except OSError as e:
        raise ExportError(str(e), file_path=output_dir)

    entries = format_entries(descriptors)
    text_path = text_exporter.write(entries, output_dir, base_name)
    csv_path = csv_exporter.write(entries, output_dir, base_name)

    logger.info(f"Exported {len(entries)} package(s) to {output_dir}")
    return ExportPaths(text_path=text_path, csv_path=csv_path)
