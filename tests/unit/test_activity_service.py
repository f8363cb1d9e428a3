import pytest
from decimal import Decimal
from typing import List

from sling_activity.domain.enums import TransactionType
from sling_activity.domain.models import ActivityRecord, CategoryInfo
from sling_activity.feed.parser import ActivityFeedParser
from sling_activity.services.activity_service import ActivityService
from sling_activity.services.models import FeedImportResult

@pytest.fixture
def mock_parser(mocker) -> ActivityFeedParser:
    """Create a mock parser"""
    return mocker.Mock()

@pytest.fixture
def service(mock_parser) -> ActivityService:
    """Create service with mocked parser"""
    return ActivityService(parser=mock_parser)

@pytest.fixture
def sample_records(card_payment_record, p2p_received_record, stock_sell_record) -> List[ActivityRecord]:
    return [
        card_payment_record,
        p2p_received_record,
        stock_sell_record,
        ActivityRecord("uber.com", "Uber", "Card payment", "-£12.40"),
        ActivityRecord("E", "Emma", "", "-£20.00"),
    ]


@pytest.mark.unit
class TestActivityServiceDescribe:

    def test_describe_card_payment(self, service: ActivityService, card_payment_record):
        description = service.describe(card_payment_record)

        assert description.type == TransactionType.CARD_PAYMENT
        assert description.headline == "You spent £100.00 at Boots"
        assert description.category == CategoryInfo("Shopping", "bag.fill")
        assert description.actions == ("Split the cost",)
        assert not description.is_subscription

    def test_describe_p2p_received(self, service: ActivityService, p2p_received_record):
        description = service.describe(p2p_received_record)

        assert description.headline == "You received £100.00 from Agustin Alvarez"
        assert description.category.name == "Transfers"
        assert description.actions == ("Send", "Request")

    def test_describe_p2p_sent_actions(self, service: ActivityService):
        description = service.describe(ActivityRecord("E", "Emma", "", "-£20.00"))

        assert description.actions == ("Send again", "Request")

    def test_describe_stock_sell(self, service: ActivityService, stock_sell_record):
        description = service.describe(stock_sell_record)

        assert description.type == TransactionType.STOCK_SELL
        assert description.headline == "You sold £50.00 of AAPL"
        assert description.actions == ()

    def test_describe_subscription(self, service: ActivityService):
        description = service.describe(ActivityRecord("spotify.com", "Spotify", "Card payment", "-£10.99"))

        assert description.is_subscription
        assert description.category.name == "Subscriptions"

    def test_describe_uses_injected_collaborators(self, mocker, card_payment_record):
        # Arrange
        classifier = mocker.Mock()
        narrative_builder = mocker.Mock()
        category_resolver = mocker.Mock()
        classification = mocker.Mock(type=TransactionType.OTHER)
        classifier.classify_detailed.return_value = classification
        service = ActivityService(
            classifier=classifier,
            narrative_builder=narrative_builder,
            category_resolver=category_resolver,
        )

        # Act
        description = service.describe(card_payment_record)

        # Assert
        classifier.classify_detailed.assert_called_once_with(card_payment_record)
        narrative_builder.build.assert_called_once_with(card_payment_record, classification)
        category_resolver.resolve.assert_called_once_with(card_payment_record, classification)
        assert description.type == TransactionType.OTHER

    def test_describe_many(self, service: ActivityService, sample_records):
        descriptions = service.describe_many(sample_records)

        assert [d.record for d in descriptions] == sample_records


@pytest.mark.unit
class TestActivityServiceImport:

    def test_import_feed_delegates_to_parser(self, service, mock_parser, sample_records):
        # Arrange
        mock_parser.parse.return_value = sample_records

        # Act
        result = service.import_feed("feed.csv")

        # Assert
        mock_parser.parse.assert_called_once_with("feed.csv")
        assert isinstance(result, FeedImportResult)
        assert result.total_records == 5
        assert result.counts_by_type[TransactionType.CARD_PAYMENT] == 2
        assert result.counts_by_type[TransactionType.P2P_SENT] == 1
        assert "Records: 5" in str(result)

    def test_import_feed_propagates_parser_errors(self, service, mock_parser):
        mock_parser.parse.side_effect = ValueError("Invalid file")

        with pytest.raises(ValueError, match="Invalid file"):
            service.import_feed("feed.csv")


@pytest.mark.unit
class TestActivityServiceSummary:

    def test_summarize_totals(self, service: ActivityService, sample_records):
        # Arrange
        descriptions = service.describe_many(sample_records)

        # Act
        summary = service.summarize(descriptions)

        # Assert
        assert summary.total_records == 5
        assert summary.total_out == Decimal("132.40")
        assert summary.total_in == Decimal("150.00")
        assert summary.net_flow == Decimal("17.60")

    def test_spending_by_category(self, service: ActivityService, sample_records):
        summary = service.summarize(service.describe_many(sample_records))

        assert summary.spending_by_category == {
            "Shopping": Decimal("100.00"),
            "Transport": Decimal("12.40"),
            "Transfers": Decimal("20.00"),
        }
        assert summary.top_spending_categories[0] == ("Shopping", Decimal("100.00"))

    def test_unreadable_amounts_count_as_zero(self, service: ActivityService):
        descriptions = service.describe_many([ActivityRecord("a.com", "A", "", "-£")])

        summary = service.summarize(descriptions)

        assert summary.total_out == Decimal("0")

    def test_empty_summary(self, service: ActivityService):
        summary = service.summarize([])

        assert summary.total_records == 0
        assert summary.net_flow == Decimal("0")
        assert summary.spending_by_category == {}
