import pytest
from pathlib import Path

from sling_activity.categorization import CategoryResolver
from sling_activity.classification import TransactionClassifier
from sling_activity.domain.models import ActivityRecord
from sling_activity.feed.parser import ActivityFeedParser
from sling_activity.narrative import NarrativeBuilder

FIXTURES_DIR = Path(__file__).parent / "fixtures"

@pytest.fixture
def classifier() -> TransactionClassifier:
    return TransactionClassifier()

@pytest.fixture
def narrative_builder() -> NarrativeBuilder:
    return NarrativeBuilder()

@pytest.fixture
def category_resolver() -> CategoryResolver:
    """Resolver with the category tables shipped in the package"""
    return CategoryResolver()

@pytest.fixture
def feed_parser() -> ActivityFeedParser:
    return ActivityFeedParser()

@pytest.fixture
def sample_feed_file() -> Path:
    """Provide a path to a sample activity feed export"""
    return FIXTURES_DIR / "sample_activity.csv"

@pytest.fixture
def card_payment_record() -> ActivityRecord:
    return ActivityRecord(
        avatar="boots.com",
        title_left="Boots",
        subtitle_left="Card payment",
        title_right="-£100.00",
    )

@pytest.fixture
def p2p_received_record() -> ActivityRecord:
    return ActivityRecord(
        avatar="Avatar2",
        title_left="Agustin Alvarez",
        subtitle_left="Received",
        title_right="+£100.00",
    )

@pytest.fixture
def stock_sell_record() -> ActivityRecord:
    return ActivityRecord(
        avatar="StockApple",
        title_left="Apple",
        subtitle_left="",
        title_right="+£50.00",
        subtitle_right="+0.50 AAPL",
    )
