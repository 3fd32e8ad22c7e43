"""Static knowledge base of supportive content for the chat endpoint."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)

CHATBOT_INFO_NAME = "Chatbot Information"

PROJECT_ROOT = Path(__file__).resolve().parent.parent.parent


def tokenize(text: str) -> frozenset[str]:
    """Lowercase *text* and split it on whitespace into a set of tokens."""
    return frozenset(text.lower().split())


@dataclass(frozen=True)
class ContentItem:
    """A named piece of content that can be injected into the LLM context.

    Attributes:
        name: Unique human-readable label.
        tags: Normalized lowercase tokens matched against prompt keywords.
        content: Text sent to the model as a system message.
    """

    name: str
    tags: frozenset[str]
    content: str

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> ContentItem:
        """Build an item from a ``{name, tags, content}`` mapping.

        ``tags`` may be a whitespace-separated string, a list of strings,
        or missing entirely.
        """
        name = str(record.get("name") or "").strip()
        if not name:
            raise ValueError("Knowledge base item is missing a name")

        raw_tags = record.get("tags") or ""
        if isinstance(raw_tags, str):
            tags = tokenize(raw_tags)
        else:
            tags = tokenize(" ".join(str(tag) for tag in raw_tags))

        return cls(name=name, tags=tags, content=str(record.get("content") or ""))

    def matches(self, keywords: frozenset[str]) -> bool:
        return not self.tags.isdisjoint(keywords)


class KnowledgeBase:
    """Ordered, read-only collection of ContentItems.

    Built once at startup and shared by every request. Item order is the
    order selected content is presented to the model.
    """

    def __init__(self, items: Iterable[ContentItem]) -> None:
        self._items: tuple[ContentItem, ...] = tuple(items)

        seen: set[str] = set()
        for item in self._items:
            if item.name in seen:
                raise ValueError(f"Duplicate knowledge base item name: {item.name!r}")
            seen.add(item.name)

        self._chatbot_info = next(
            (item.content for item in self._items if item.name == CHATBOT_INFO_NAME),
            "",
        )

    @classmethod
    def from_records(cls, records: Iterable[dict[str, Any]]) -> KnowledgeBase:
        return cls(ContentItem.from_record(record) for record in records)

    @property
    def items(self) -> tuple[ContentItem, ...]:
        return self._items

    @property
    def chatbot_info(self) -> str:
        """Content of the designated introductory item, or empty string."""
        return self._chatbot_info

    def contents(self) -> list[str]:
        """Every item's content, in knowledge base order."""
        return [item.content for item in self._items]

    def __iter__(self) -> Iterator[ContentItem]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


def load_knowledge_base(path: Path) -> KnowledgeBase:
    """Read a YAML knowledge base file.

    The file holds either a top-level list of items or a mapping with an
    ``items`` list. Relative paths resolve against the project root.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If the file is empty, malformed, or has duplicate names.
    """
    if not path.is_absolute():
        path = PROJECT_ROOT / path
    if not path.exists():
        raise FileNotFoundError(f"Knowledge base not found at {path}")

    data = yaml.safe_load(path.read_text(encoding="utf-8"))
    records = data.get("items") if isinstance(data, dict) else data
    if not records or not isinstance(records, list):
        raise ValueError(f"Knowledge base at {path} has no items")

    kb = KnowledgeBase.from_records(records)
    logger.info(
        "Loaded knowledge base: %d items (chatbot info: %s)",
        len(kb),
        "yes" if kb.chatbot_info else "no",
    )
    return kb
