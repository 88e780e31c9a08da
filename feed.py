import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import Sequence

from hn_client import HNClient, HNError
from models import Feed, FetchMode, FetchResult, Item


def is_story_link(item: Item) -> bool:
    return item.type == "story" and bool(item.url)


def fetch_sequential(client: HNClient, ids: Sequence[int], target_count: int) -> list[Item]:
    stories = []
    for item_id in ids:
        try:
            item = client.fetch_item(item_id, use_cache=False)
        except HNError as e:
            logging.warning(f"Skipping item {item_id}: {e}")
            continue
        if is_story_link(item):
            stories.append(item)
            if len(stories) >= target_count:
                break
    return stories


def _fetch_one(client: HNClient, item_id: int, position: int, use_cache: bool) -> FetchResult:
    logging.debug(f"[{item_id}] fetching item")
    try:
        item = client.fetch_item(item_id, use_cache=use_cache)
    except HNError as e:
        logging.warning(f"Skipping item {item_id}: {e}")
        return FetchResult(position, error=e)
    logging.debug(f"[{item_id}] done")
    return FetchResult(position, item=item)


def _fetch_window(
    client: HNClient,
    ids: Sequence[int],
    start: int,
    end: int,
    use_cache: bool,
) -> list[Item]:
    """Fetch ``ids[start:end]`` in parallel and return the qualifying stories.

    One thread per id, so the whole window is in flight at once. Returns
    only after every fetch in the window has finished. Results are put back
    in rank order by the position each task was dispatched with, since
    completion order is arbitrary.
    """
    with ThreadPoolExecutor(max_workers=end - start) as executor:
        futures = [
            executor.submit(_fetch_one, client, ids[position], position, use_cache)
            for position in range(start, end)
        ]
        results = [future.result() for future in as_completed(futures)]

    results.sort(key=lambda result: result.position)
    return [result.item for result in results if result.ok and is_story_link(result.item)]


def fetch_concurrent(
    client: HNClient,
    ids: Sequence[int],
    target_count: int,
    use_cache: bool = False,
    all_at_once: bool = False,
) -> list[Item]:
    """Collect up to ``target_count`` stories from ``ids`` in rank order.

    Each window covers exactly the remaining shortfall, so no more items are
    requested than would be needed if every one of them were a story. When
    some are not, the next window picks up where the last one ended. With
    ``all_at_once`` the whole remaining sequence is a single window.
    """
    stories: list[Item] = []
    start = 0
    while len(stories) < target_count and start < len(ids):
        needed = target_count - len(stories)
        end = len(ids) if all_at_once else min(start + needed, len(ids))
        logging.info(f"Fetching window {start}:{end} ({needed} stories still needed)")
        stories.extend(_fetch_window(client, ids, start, end, use_cache))
        start = end
    if len(stories) < target_count:
        logging.info(f"Ranked list exhausted with {len(stories)} of {target_count} stories")
    return stories[:target_count]


def get_feed(
    client: HNClient,
    mode: FetchMode,
    target_count: int,
    all_at_once: bool = False,
) -> Feed:
    """Fetch the ranked list and assemble the first ``target_count`` stories.

    Raises HNError if the ranked list cannot be fetched. Individual item
    failures only shorten the pool of candidates.
    """
    if target_count < 1:
        raise ValueError(f"target_count must be at least 1, got {target_count}")
    start = time.perf_counter()
    ids = client.fetch_top_ids()
    if mode is FetchMode.SEQUENTIAL:
        stories = fetch_sequential(client, ids, target_count)
    else:
        stories = fetch_concurrent(
            client,
            ids,
            target_count,
            use_cache=mode is FetchMode.CONCURRENT_WITH_CACHE,
            all_at_once=all_at_once,
        )
    return Feed(stories=tuple(stories), elapsed=time.perf_counter() - start)
