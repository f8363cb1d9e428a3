from sling_activity.feed.activity_feed import ActivityFeed, format_amount
from sling_activity.feed.parser import ActivityFeedParser

__all__ = [
    "ActivityFeed",
    "ActivityFeedParser",
    "format_amount",
]
