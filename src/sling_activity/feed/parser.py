import csv
from datetime import datetime
from pathlib import Path
from typing import List, Optional, Union

import pandas as pd

from sling_activity.domain.models import ActivityRecord
from sling_activity.utils.logging_config import get_logger

logger = get_logger(__name__)


class ActivityFeedParser:
    """
    Parser for activity feed CSV exports.

    Handles the feed format with:
    - One header row
    - Columns in fixed order: avatar, title left, subtitle left,
      title right, subtitle right, and an optional date
    - Dates as DD/MM/YYYY or DD/MM/YY
    """

    REQUIRED_COLUMNS = 5
    DATE_COLUMN_INDEX = 5
    DATE_FORMATS = ["%d/%m/%Y", "%d/%m/%y"]

    def validate_file(self, filepath: Union[str, Path]) -> None:
        """
        Check the file exists, is a CSV, and has enough columns.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is invalid
        """
        path = Path(filepath)

        if not path.exists():
            raise FileNotFoundError(f"File does not exist on path {path}")

        if path.suffix.lower() != ".csv":
            raise ValueError(f"File must be .csv, got {path.suffix}")

        try:
            header = pd.read_csv(path, nrows=0)
        except (pd.errors.EmptyDataError, pd.errors.ParserError) as e:
            raise ValueError(f"Could not read feed header: {e}")

        if len(header.columns) < self.REQUIRED_COLUMNS:
            raise ValueError(
                f"Feed must have at least {self.REQUIRED_COLUMNS} columns, "
                f"got {len(header.columns)}"
            )

    def parse(self, filepath: Union[str, Path]) -> List[ActivityRecord]:
        """
        Parse an activity feed CSV.

        Rows with fewer than five fields, or with no amount, are skipped.
        A sixth field is read as the date whether or not the header names
        it. The result is sorted newest first, undated rows last.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is invalid
        """
        self.validate_file(filepath)

        df = self._read_rows(filepath)

        logger.debug("Read %d rows from %s", len(df), filepath)

        records = []
        for row in df.itertuples(index=False):
            record = self._parse_row(list(row))
            if record is not None:
                records.append(record)

        records.sort(key=lambda r: (r.date is not None, r.date or datetime.min), reverse=True)

        logger.info("Parsed %d activity records from %s", len(records), filepath)
        return records

    def _read_rows(self, filepath: Union[str, Path]) -> pd.DataFrame:
        """
        Read the data rows positionally, ignoring the header's width.

        Each row keeps its own field count: columns a row doesn't have are
        None, while fields present but empty are ''. pd.read_csv pads short
        rows with '' and drops fields beyond the header, so it can't be
        used directly here.
        """
        with open(filepath, newline="", encoding="utf-8") as f:
            try:
                rows = [
                    row for row in csv.reader(f, skipinitialspace=True)
                    if any(field.strip() for field in row)
                ]
            except csv.Error as e:
                raise ValueError(f"Invalid file: {e}")

        return pd.DataFrame(rows[1:])

    def _parse_row(self, columns: List) -> Optional[ActivityRecord]:
        text_columns = columns[:self.REQUIRED_COLUMNS]
        if len(text_columns) < self.REQUIRED_COLUMNS or any(pd.isna(c) for c in text_columns):
            logger.debug("Skipping short row: %s", columns)
            return None

        avatar, title_left, subtitle_left, title_right, subtitle_right = (
            str(c).strip() for c in text_columns
        )
        if not title_right:
            logger.debug("Skipping row without an amount: %s", columns)
            return None

        date_value = None
        if len(columns) > self.DATE_COLUMN_INDEX and not pd.isna(columns[self.DATE_COLUMN_INDEX]):
            date_value = self._parse_date(str(columns[self.DATE_COLUMN_INDEX]).strip())

        return ActivityRecord(
            avatar=avatar,
            title_left=title_left,
            subtitle_left=subtitle_left,
            title_right=title_right,
            subtitle_right=subtitle_right,
            date=date_value,
        )

    def _parse_date(self, value: str) -> Optional[datetime]:
        """Try 4-digit year first, then 2-digit (always 20xx)"""
        if not value:
            return None

        for date_format in self.DATE_FORMATS:
            try:
                parsed = datetime.strptime(value, date_format)
            except ValueError:
                continue

            if date_format.endswith("%y") and parsed.year < 2000:
                parsed = parsed.replace(year=parsed.year + 100)
            return parsed

        logger.warning("Unrecognised date '%s', leaving record undated", value)
        return None
