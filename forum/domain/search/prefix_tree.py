"""Prefix index over Redis sorted sets.

Each indexed text is split into words, and every prefix of every word (up to
``MAX_PREFIX_LENGTH`` characters) gets a sorted set keyed
``prefixy:{namespace}:{prefix}``. The members are JSON completions carrying
the original text and caller metadata; the member score is its popularity.
"""

import json
import re
import time
import unicodedata
from typing import Any, Optional

import logfire
from pydantic import BaseModel, Field

from forum.domain.cache.store import CacheStore

KEY_PREFIX = "prefixy"
MAX_PREFIX_LENGTH = 10
MIN_WORD_LENGTH = 3

STOPWORDS = frozenset(
    {
        "the", "is", "a", "an", "and", "or", "but", "in", "on", "at", "to",
        "for", "of", "with", "by", "from", "as", "be", "are", "was", "were",
        "been", "have", "has", "had", "do", "does", "did", "will", "would",
        "should", "could", "can", "may", "might", "must", "shall", "this",
        "that", "these", "those", "i", "you", "he", "she", "it", "we", "they",
        "my", "your", "his", "her", "its", "our", "their",
    }
)  # fmt: skip

_NON_WORD = re.compile(r"[^\w\s]", flags=re.ASCII)


class Completion(BaseModel):
    """One member of a prefix sorted set."""

    text: str
    metadata: dict[str, Any] = Field(default_factory=dict)
    score: float = 1
    timestamp: int = 0

    @property
    def normalized_text(self) -> str:
        return normalize_text(self.text)


def normalize_text(text: str) -> str:
    return text.strip().lower()


def split_words(text: str) -> list[str]:
    """Lowercase, strip accents and split on anything that isn't a word character."""
    decomposed = unicodedata.normalize("NFD", text.lower())
    stripped = "".join(ch for ch in decomposed if not unicodedata.combining(ch))
    cleaned = _NON_WORD.sub(" ", stripped)
    return cleaned.split()


def tokenize(text: str) -> list[str]:
    """Split text into indexable words.

    Words of two characters or fewer and stopwords are dropped.
    """
    return [
        word
        for word in split_words(text)
        if len(word) >= MIN_WORD_LENGTH and word not in STOPWORDS
    ]


def prefixes(word: str) -> list[str]:
    return [word[:length] for length in range(1, min(len(word), MAX_PREFIX_LENGTH) + 1)]


class PrefixTree:
    """Autocomplete index for one namespace (``posts``, ``users`` or ``tags``)."""

    def __init__(self, store: CacheStore, namespace: str) -> None:
        self.store = store
        self.namespace = namespace

    def key(self, prefix: str) -> str:
        return f"{KEY_PREFIX}:{self.namespace}:{prefix.lower()}"

    @property
    def pattern(self) -> str:
        return f"{KEY_PREFIX}:{self.namespace}:*"

    def _keys_for(self, text: str) -> list[str]:
        keys: list[str] = []
        for word in tokenize(text):
            for prefix in prefixes(word):
                key = self.key(prefix)
                if key not in keys:
                    keys.append(key)
        return keys

    async def add(self, text: str, metadata: Optional[dict[str, Any]] = None) -> bool:
        """Index a text under every prefix of its words.

        Returns:
            False if the text has no indexable words or the write failed
        """
        keys = self._keys_for(text)
        if not keys:
            logfire.debug("Nothing to index", namespace=self.namespace, text=text)
            return False

        member = json.dumps(
            {
                "text": text,
                "metadata": metadata or {},
                "score": 1,
                "timestamp": int(time.time() * 1000),
            }
        )
        return await self.store.zadd_many((key, member, 1) for key in keys)

    async def _matching_members(
        self, text: str, match: Optional[dict[str, Any]] = None
    ) -> list[tuple[str, str]]:
        """Find ``(key, member)`` pairs whose completion text equals ``text``.

        When ``match`` is given, the completion metadata must also contain
        every one of its items.
        """
        target = normalize_text(text)
        wanted = (match or {}).items()
        matches: list[tuple[str, str]] = []
        for key in self._keys_for(text):
            for member in await self.store.zrange_all(key):
                completion = self._parse(member)
                if (
                    completion is not None
                    and completion.normalized_text == target
                    and wanted <= completion.metadata.items()
                ):
                    matches.append((key, member))
        return matches

    async def increment_score(self, text: str, amount: float = 1) -> int:
        """Raise the score of every completion of ``text``.

        Returns:
            Number of sorted set members updated
        """
        matches = await self._matching_members(text)
        for key, member in matches:
            await self.store.zincrby(key, member, amount)
        return len(matches)

    async def remove(self, text: str, match: Optional[dict[str, Any]] = None) -> int:
        """Remove every completion of ``text``.

        ``match`` narrows the removal to completions whose metadata contains
        its items, so one post's tag leaves other posts' tags alone.

        Returns:
            Number of sorted set members removed
        """
        removed = 0
        for key, member in await self._matching_members(text, match):
            removed += await self.store.zrem(key, member)
        return removed

    async def search(
        self, query: str, limit: int = 10, unique: bool = True
    ) -> list[Completion]:
        """Find completions whose words start with every word of the query.

        With ``unique``, completions sharing the same text are collapsed to
        the highest scored one.

        The sorted set of the longest query word is scanned, since it is the
        smallest candidate set, and the other words filter the candidates.
        """
        words = split_words(query)
        if not words or limit < 1:
            return []
        meaningful = [word for word in words if word not in STOPWORDS]
        words = meaningful or words

        anchor = max(words, key=len)[:MAX_PREFIX_LENGTH]
        members = await self.store.zrevrange(self.key(anchor), 0, limit * 3 - 1)

        seen: set[str] = set()
        results: list[Completion] = []
        for member in members:
            completion = self._parse(member)
            if completion is None:
                continue
            text_words = split_words(completion.text)
            if not all(
                any(candidate.startswith(word) for candidate in text_words)
                for word in words
            ):
                continue
            identifier = completion.normalized_text
            if unique and identifier in seen:
                continue
            seen.add(identifier)
            results.append(completion)
            if len(results) >= limit:
                break
        return results

    async def clear(self) -> int:
        return await self.store.delete_pattern(self.pattern)

    async def is_empty(self) -> bool:
        return not await self.store.scan_keys(self.pattern)

    async def stats(self) -> dict[str, Any]:
        total_keys = len(await self.store.scan_keys(self.pattern))
        return {
            "namespace": self.namespace,
            "total_keys": total_keys,
            "estimated_memory_mb": round(total_keys * 0.001, 2),
        }

    def _parse(self, member: str) -> Optional[Completion]:
        try:
            return Completion.model_validate_json(member)
        except ValueError:
            logfire.warn(
                "Skipping malformed completion", namespace=self.namespace, member=member
            )
            return None
