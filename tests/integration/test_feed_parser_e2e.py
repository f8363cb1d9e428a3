import pytest
from datetime import datetime
from decimal import Decimal
from pathlib import Path

from sling_activity.domain.enums import TransactionType
from sling_activity.feed.parser import ActivityFeedParser
from sling_activity.services.activity_service import ActivityService


@pytest.mark.integration
class TestActivityFeedParserE2E:
    """End-to-end tests with a real CSV export"""

    def test_parse_complete_feed(self, feed_parser: ActivityFeedParser, sample_feed_file: Path):
        # Act
        records = feed_parser.parse(sample_feed_file)

        # Assert - the short row is skipped
        assert len(records) == 5

        for record in records:
            assert record.title_left, "All records must have a title"
            assert record.title_right[0] in "+-", "All amounts must be signed"

    def test_records_sorted_newest_first_undated_last(self, feed_parser, sample_feed_file):
        records = feed_parser.parse(sample_feed_file)

        assert [r.title_left for r in records] == [
            "Uber",
            "Boots",
            "Agustin Alvarez",
            "Apple",
            "Main account",
        ]
        assert records[-1].date is None

    def test_two_and_four_digit_years(self, feed_parser, sample_feed_file):
        records = {r.title_left: r for r in feed_parser.parse(sample_feed_file)}

        assert records["Boots"].date == datetime(2026, 1, 24)
        assert records["Agustin Alvarez"].date == datetime(2026, 1, 23)

    def test_quoted_fields_and_empty_columns(self, feed_parser, sample_feed_file):
        records = {r.title_left: r for r in feed_parser.parse(sample_feed_file)}

        assert records["Main account"].subtitle_left == "Moved from Main to Joint"
        assert records["Uber"].signed_amount == Decimal("-1250.00")
        assert records["Boots"].subtitle_right == ""
        assert records["Apple"].subtitle_right == "+0.50 AAPL"

    def test_import_and_describe_feed(self, sample_feed_file):
        result = ActivityService().import_feed(sample_feed_file)

        descriptions = {d.record.title_left: d for d in result.descriptions}
        assert descriptions["Boots"].headline == "You spent £100.00 at Boots"
        assert descriptions["Apple"].type == TransactionType.STOCK_SELL
        assert descriptions["Main account"].headline == "You moved £10.00 Moved from Main to Joint"
        assert descriptions["Uber"].category.name == "Transport"


@pytest.mark.integration
class TestActivityFeedParserValidation:

    def test_validate_file_does_not_exist(self, feed_parser: ActivityFeedParser):
        with pytest.raises(FileNotFoundError):
            feed_parser.validate_file("non_existent.csv")

    def test_validate_file_incorrect_extension(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.txt"
        path.write_text("a,b,c,d,e\n")

        with pytest.raises(ValueError, match="File must be .csv, got .txt"):
            feed_parser.validate_file(path)

    def test_validate_file_too_few_columns(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text("Avatar,Title,Amount\nboots.com,Boots,-£1.00\n", encoding="utf-8")

        with pytest.raises(ValueError, match="at least 5 columns"):
            feed_parser.validate_file(path)

    def test_validate_empty_file(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text("")

        with pytest.raises(ValueError, match="Could not read feed header"):
            feed_parser.validate_file(path)

    def test_header_only_feed_is_empty(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text("Avatar,Title-left,Subtitle-left,Title-right,Subtitle-right,Date\n")

        assert feed_parser.parse(path) == []

    def test_unrecognised_date_leaves_record_undated(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text(
            "Avatar,Title-left,Subtitle-left,Title-right,Subtitle-right,Date\n"
            "E,Emma,,-£5.00,,2026-01-24\n",
            encoding="utf-8",
        )

        records = feed_parser.parse(path)

        assert len(records) == 1
        assert records[0].date is None

    def test_row_with_four_fields_is_skipped(self, feed_parser, tmp_path: Path):
        # Arrange - an amount is present but subtitle_right is missing entirely
        path = tmp_path / "feed.csv"
        path.write_text(
            "a,b,c,d,e,f\n"
            "x,y,,-£2.00\n",
            encoding="utf-8",
        )

        # Act
        records = feed_parser.parse(path)

        # Assert
        assert records == []

    def test_empty_fields_are_not_missing_fields(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text(
            "a,b,c,d,e,f\n"
            "x,y,,-£2.00,\n"
            "x,y,,-£3.00\n",
            encoding="utf-8",
        )

        records = feed_parser.parse(path)

        assert [r.title_right for r in records] == ["-£2.00"]
        assert records[0].subtitle_left == ""
        assert records[0].subtitle_right == ""

    def test_date_read_when_header_has_five_columns(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text(
            "a,b,c,d,e\n"
            "boots.com,Boots,Card payment,-£1.00,,24/01/2026\n",
            encoding="utf-8",
        )

        records = feed_parser.parse(path)

        assert len(records) == 1
        assert records[0].date == datetime(2026, 1, 24)
        assert records[0].subtitle_right == ""

    def test_extra_fields_after_date_are_ignored(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text(
            "Avatar,Title-left,Subtitle-left,Title-right,Subtitle-right,Date\n"
            "boots.com,Boots,Card payment,-£1.00,,24/01/26,extra,fields\n",
            encoding="utf-8",
        )

        records = feed_parser.parse(path)

        assert records[0].title_left == "Boots"
        assert records[0].date == datetime(2026, 1, 24)

    def test_blank_lines_are_ignored(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text(
            "Avatar,Title-left,Subtitle-left,Title-right,Subtitle-right,Date\n"
            "\n"
            "E,Emma,,-£5.00,,\n"
            "   \n",
            encoding="utf-8",
        )

        records = feed_parser.parse(path)

        assert [r.title_left for r in records] == ["Emma"]

    def test_feed_without_date_column(self, feed_parser, tmp_path: Path):
        path = tmp_path / "feed.csv"
        path.write_text(
            "Avatar,Title-left,Subtitle-left,Title-right,Subtitle-right\n"
            "E,Emma,,-£5.00,\n",
            encoding="utf-8",
        )

        records = feed_parser.parse(path)

        assert records[0].avatar == "E"
        assert records[0].date is None
