from pathlib import Path
from typing import Dict, List, Optional, Tuple, Union

from sling_activity.categorization import CategoryResolver
from sling_activity.classification import TransactionClassifier
from sling_activity.domain.enums import TransactionType
from sling_activity.domain.models import ActivityRecord
from sling_activity.feed.parser import ActivityFeedParser
from sling_activity.narrative import NarrativeBuilder
from sling_activity.services.models import ActivityDescription, FeedImportResult, FeedSummary
from sling_activity.utils.logging_config import get_logger

logger = get_logger(__name__)

# Follow-up actions offered on the transaction detail drawer
ACTIONS_BY_TYPE: Dict[TransactionType, Tuple[str, ...]] = {
    TransactionType.CARD_PAYMENT: ("Split the cost",),
    TransactionType.P2P_SENT: ("Send again", "Request"),
    TransactionType.P2P_RECEIVED: ("Send", "Request"),
}


class ActivityService:
    """
    Composes classification, narrative and category into render-ready
    descriptions of activity records.
    """

    def __init__(
        self,
        classifier: Optional[TransactionClassifier] = None,
        narrative_builder: Optional[NarrativeBuilder] = None,
        category_resolver: Optional[CategoryResolver] = None,
        parser: Optional[ActivityFeedParser] = None,
    ):
        self.classifier = classifier or TransactionClassifier()
        self.narrative_builder = narrative_builder or NarrativeBuilder()
        self._category_resolver = category_resolver
        self.parser = parser or ActivityFeedParser()

    @property
    def category_resolver(self) -> CategoryResolver:
        """Lazy-load category resolver"""
        if self._category_resolver is None:
            self._category_resolver = CategoryResolver()
        return self._category_resolver

    def describe(self, record: ActivityRecord) -> ActivityDescription:
        """
        Describe a single record.

        Example:
            ```
            >>> service = ActivityService()
            >>> description = service.describe(record)
            >>> description.headline
            'You spent £100.00 at Boots'
            ```
        """
        classification = self.classifier.classify_detailed(record)

        return ActivityDescription(
            record=record,
            type=classification.type,
            narrative=self.narrative_builder.build(record, classification),
            category=self.category_resolver.resolve(record, classification),
            is_subscription=self.category_resolver.is_subscription(record),
            actions=ACTIONS_BY_TYPE.get(classification.type, ()),
        )

    def describe_many(self, records: List[ActivityRecord]) -> List[ActivityDescription]:
        return [self.describe(record) for record in records]

    def import_feed(self, filepath: Union[str, Path]) -> FeedImportResult:
        """
        Parse a feed CSV and describe every record in it.

        Raises:
            FileNotFoundError: If file doesn't exist
            ValueError: If file format is invalid
        """
        records = self.parser.parse(filepath)
        descriptions = self.describe_many(records)

        logger.info("Described %d records from %s", len(descriptions), filepath)

        return FeedImportResult(
            filepath=str(filepath),
            descriptions=descriptions,
        )

    def summarize(self, descriptions: List[ActivityDescription]) -> FeedSummary:
        """Split described records into money out and money in"""
        money_out = [d for d in descriptions if d.record.is_outgoing]
        money_in = [d for d in descriptions if not d.record.is_outgoing]

        return FeedSummary(money_out=money_out, money_in=money_in)
