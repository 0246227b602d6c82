"""Data persistence utilities for crawled pages.

Each accepted page is written as soon as the crawler hands it over, so a
run that dies midway still leaves every finished page on disk:

- {output_dir}/{M-D-YY}-{ZIP}-{page}.json (one file per page)
- {output_dir}/{M-D-YY}-{ZIP}.json (all records, written at the end)
"""

import json
from datetime import date
from pathlib import Path
from typing import Any, Optional

from src.utils import get_logger

from .models import ContactRecord, PageBundle
from .navigator import query_value

logger = get_logger(__name__)

NO_ZIP_LABEL = "no-zip"


def write_json(file_path: Path, data: Any) -> None:
    """Write data as indented JSON, creating parent directories."""
    file_path.parent.mkdir(parents=True, exist_ok=True)
    with open(file_path, 'w', encoding='utf-8') as f:
        json.dump(data, f, indent=2, ensure_ascii=False)


def read_json(file_path: Path) -> Optional[Any]:
    """Read a JSON file.

    Returns:
        Parsed content, or None if the file does not exist

    Raises:
        json.JSONDecodeError: If the file is not valid JSON
    """
    try:
        with open(file_path, 'r', encoding='utf-8') as f:
            return json.load(f)
    except FileNotFoundError:
        return None


def date_stamp(day: Optional[date] = None) -> str:
    """Format a date as M-D-YY without zero padding (e.g. 3-7-25)."""
    day = day or date.today()
    return f"{day.month}-{day.day}-{day.strftime('%y')}"


def zip_label(base_url: str, zip_param: str = "zip_code") -> str:
    """Read the ZIP code used to label output files from a results URL."""
    return query_value(base_url, zip_param) or NO_ZIP_LABEL


def load_records(file_path: Path) -> list[ContactRecord]:
    """Load records previously written by PageFileSink."""
    data = read_json(file_path)
    if data is None:
        raise FileNotFoundError(f"Records file not found: {file_path}")
    return [ContactRecord.model_validate(entry) for entry in data]


class PageFileSink:
    """Page sink writing one JSON file per accepted page.

    Pass the instance as the crawler's on_page callback, then call
    write_combined() once the crawl returns.

    Attributes:
        output_dir: Directory receiving the JSON files.
        label: ZIP label embedded in file names.
        stamp: Date stamp embedded in file names.
        records: Every record written so far, in page order.
        written: Paths of the per-page files, in page order.
    """

    def __init__(self, output_dir: Path, label: str = NO_ZIP_LABEL, stamp: Optional[str] = None):
        self.output_dir = Path(output_dir)
        self.label = label
        self.stamp = stamp or date_stamp()
        self.records: list[ContactRecord] = []
        self.written: list[Path] = []

    def page_path(self, page_number: int) -> Path:
        return self.output_dir / f"{self.stamp}-{self.label}-{page_number}.json"

    def combined_path(self) -> Path:
        return self.output_dir / f"{self.stamp}-{self.label}.json"

    async def __call__(self, bundle: PageBundle) -> None:
        path = self.page_path(bundle.page_number)
        write_json(path, [record.to_json_dict() for record in bundle.records])

        self.records.extend(bundle.records)
        self.written.append(path)
        logger.info(f"Saved page {bundle.page_number} ({len(bundle.records)} records) to {path}")

    def write_combined(self) -> Path:
        """Write every record seen so far to the combined file."""
        path = self.combined_path()
        write_json(path, [record.to_json_dict() for record in self.records])
        logger.info(f"Saved combined file ({len(self.records)} records) to {path}")
        return path
