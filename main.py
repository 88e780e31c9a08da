import logging
import os

from dotenv import load_dotenv

from feed import get_feed
from hn_client import HN_ENDPOINT, HNClient, HNError
from models import Feed, FetchMode

# Setup
logging.basicConfig(level=logging.INFO)
load_dotenv()

# Parameters
DEFAULT_LIMIT = 5  # Number of stories to show
DEFAULT_MODE = FetchMode.CONCURRENT


def render_feed(feed: Feed) -> str:
    lines = []
    for rank, story in enumerate(feed, start=1):
        line = f"{rank}. {story.title}"
        if story.host:
            line += f" ({story.host})"
        line += f" - {story.score} points by {story.by} | {story.descendants} comments"
        lines.append(line)
    lines.append(f"Fetched {len(feed)} stories in {feed.elapsed:.2f}s")
    return "\n".join(lines)


def _parse_positive_int(value: str | None, default: int) -> int | None:
    if value is None or value == "":
        return default
    try:
        parsed = int(value)
    except ValueError:
        return None
    return parsed if parsed >= 1 else None


def main():
    HN_ENDPOINT_URL = os.getenv("HN_ENDPOINT", HN_ENDPOINT)
    FEED_LIMIT = _parse_positive_int(os.getenv("FEED_LIMIT"), DEFAULT_LIMIT)
    FEED_ALL_AT_ONCE = os.getenv("FEED_ALL_AT_ONCE", "false").lower() == "true"
    try:
        FEED_MODE = FetchMode(os.getenv("FEED_MODE", DEFAULT_MODE.value).lower())
    except ValueError:
        FEED_MODE = None

    # Validate configuration
    invalid = []
    if FEED_LIMIT is None:
        invalid.append("FEED_LIMIT")
    if FEED_MODE is None:
        invalid.append("FEED_MODE")
    if invalid:
        logging.error(f"Invalid environment variables: {', '.join(invalid)}")
        return

    with HNClient(HN_ENDPOINT_URL) as client:
        try:
            feed = get_feed(client, FEED_MODE, FEED_LIMIT, all_at_once=FEED_ALL_AT_ONCE)
        except HNError as e:
            logging.error(f"Failed to fetch feed: {e}")
            return

    if len(feed) < FEED_LIMIT:
        logging.info(f"Only {len(feed)} of {FEED_LIMIT} requested stories were found")
    print(render_feed(feed))


if __name__ == "__main__":
    main()
