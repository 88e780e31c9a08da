from dataclasses import dataclass
from enum import Enum
from typing import Optional
from urllib.parse import urlparse


class FetchMode(Enum):
    SEQUENTIAL = "sequential"
    CONCURRENT = "concurrent"
    CONCURRENT_WITH_CACHE = "cached"


@dataclass(frozen=True)
class Item:
    id: int
    type: str = ""
    by: str = ""
    title: str = ""
    # Only one of these should be set on a story
    url: str = ""
    text: str = ""
    score: int = 0
    descendants: int = 0
    time: int = 0
    kids: tuple[int, ...] = ()

    @classmethod
    def from_json(cls, data) -> "Item":
        if not isinstance(data, dict):
            raise ValueError(f"Expected an item object, got {type(data).__name__}")
        return cls(
            id=data.get("id") or 0,
            type=data.get("type") or "",
            by=data.get("by") or "",
            title=data.get("title") or "",
            url=data.get("url") or "",
            text=data.get("text") or "",
            score=data.get("score") or 0,
            descendants=data.get("descendants") or 0,
            time=data.get("time") or 0,
            kids=tuple(data.get("kids") or ()),
        )

    @property
    def host(self) -> str:
        if not self.url:
            return ""
        try:
            hostname = urlparse(self.url).hostname or ""
        except ValueError:
            return ""
        return hostname.removeprefix("www.")


@dataclass
class FetchResult:
    position: int
    item: Optional[Item] = None
    error: Optional[Exception] = None

    @property
    def ok(self) -> bool:
        return self.item is not None


@dataclass(frozen=True)
class Feed:
    stories: tuple[Item, ...]
    elapsed: float

    def __len__(self) -> int:
        return len(self.stories)

    def __iter__(self):
        return iter(self.stories)
