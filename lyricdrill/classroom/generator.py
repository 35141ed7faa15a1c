"""
Lesson generator - Build practice items from a song's lyrics.

Provides:
- Request-scoped random sources (time-seeded or fixed-seed)
- Line classification into fill / arrange candidate pools
- Vocabulary and distractor options for fill-in-the-blank items
- ItemBuilder: primary pass plus signature-deduplicated fallback pass
"""

import random
import time
from collections import deque
from dataclasses import dataclass
from typing import Callable, Optional, Sequence, Union

from lyricdrill.errors import ValidationError
from lyricdrill.schemas import (
    BLANK_MARKER,
    LESSON_SIZE,
    OPTION_COUNT,
    ArrangeItem,
    FillBlankItem,
    Song,
)


FILL_TARGET = 3
ARRANGE_TARGET = 3

RandomProvider = Callable[[], random.Random]
Item = Union[FillBlankItem, ArrangeItem]


# -----------------------------------------------------------------------------
# Random sources
# -----------------------------------------------------------------------------

def time_seeded_random() -> random.Random:
    """New generator seeded from the wall clock. Not for security use."""
    return random.Random(time.time_ns())


def seeded_random(seed: int) -> RandomProvider:
    """Provider returning a fresh generator with a fixed seed on every call."""
    return lambda: random.Random(seed)


# -----------------------------------------------------------------------------
# Song selection and line classification
# -----------------------------------------------------------------------------

def choose_song(songs: Sequence[Song], rng: random.Random) -> Song:
    """Pick a song uniformly at random; it must have at least one line."""
    if not songs:
        raise ValidationError("no songs available")
    song = songs[rng.randrange(len(songs))]
    if not song.lyrics:
        raise ValidationError(f"chosen song has no lines: {song.id}")
    return song


@dataclass
class CandidatePools:
    """Shuffled line indices eligible for each item type, consumed FIFO."""
    fill: deque
    arrange: deque


def classify_lines(lines: Sequence[Sequence[str]], rng: random.Random) -> CandidatePools:
    """
    Partition line indices into candidate pools.

    Lines with two or more words can hold a blank; any non-empty line can
    be arranged. Each pool is shuffled independently.
    """
    fill = [i for i, words in enumerate(lines) if len(words) >= 2]
    arrange = [i for i, words in enumerate(lines) if len(words) >= 1]
    rng.shuffle(fill)
    rng.shuffle(arrange)
    return CandidatePools(fill=deque(fill), arrange=deque(arrange))


# -----------------------------------------------------------------------------
# Distractors
# -----------------------------------------------------------------------------

def build_vocabulary(lines: Sequence[Sequence[str]]) -> list[str]:
    """Unique, lower-cased, trimmed, non-empty words across all lines."""
    seen = set()
    vocab = []
    for words in lines:
        for word in words:
            normalized = word.strip().lower()
            if normalized and normalized not in seen:
                seen.add(normalized)
                vocab.append(normalized)
    return vocab


def build_options(rng: random.Random, correct: str, vocab: Sequence[str]) -> list[str]:
    """
    Build the answer options for a blank.

    Up to three distractors are drawn from the vocabulary (never the
    correct word, compared lower-cased). A short vocabulary is padded by
    repeating the correct word. The final list is shuffled so the correct
    answer has no fixed position.
    """
    correct_lower = correct.lower()
    candidates = [word for word in vocab if word != correct_lower]
    rng.shuffle(candidates)

    options = [correct] + candidates[:OPTION_COUNT - 1]
    while len(options) < OPTION_COUNT:
        options.append(correct)

    rng.shuffle(options)
    return options


def render_blank(words: Sequence[str], hidden_index: int) -> str:
    """Join the line with one word replaced by the blank marker."""
    shown = list(words)
    shown[hidden_index] = BLANK_MARKER
    return " ".join(shown)


def item_signature(item: Item) -> str:
    """Dedup key: rendered text for fill items, line index for arrange items."""
    if isinstance(item, FillBlankItem):
        return f"F:{item.rendered_line}"
    return f"A:{item.line_index}"


# -----------------------------------------------------------------------------
# Item builder
# -----------------------------------------------------------------------------

class ItemBuilder:
    """
    Assemble up to LESSON_SIZE items for one song.

    The primary pass takes FILL_TARGET fill items and ARRANGE_TARGET arrange
    items from the shuffled pools without reusing a line. If the song is too
    short for that, a fallback pass walks a fresh permutation of all lines,
    alternating item types and rejecting any item whose signature is already
    present. The fallback may reuse a line under the other item type.
    """

    def __init__(self, lines: Sequence[Sequence[str]], rng: random.Random):
        self.lines = [list(words) for words in lines]
        self.rng = rng
        self.vocab = build_vocabulary(self.lines)
        self.used_fallback = False

    def build(self) -> list[Item]:
        items = self._primary_pass()
        if len(items) < LESSON_SIZE:
            self.used_fallback = True
            self._fallback_pass(items)
        return items

    def _primary_pass(self) -> list[Item]:
        pools = classify_lines(self.lines, self.rng)
        used: set[int] = set()
        items: list[Item] = []

        for _ in range(FILL_TARGET):
            index = self._take(pools.fill, used)
            if index is None:
                break
            items.append(self._fill_item(index))

        for _ in range(ARRANGE_TARGET):
            index = self._take(pools.arrange, used)
            if index is None:
                break
            items.append(self._arrange_item(index))

        return items

    def _fallback_pass(self, items: list[Item]):
        order = list(range(len(self.lines)))
        self.rng.shuffle(order)
        seen = {item_signature(item) for item in items}

        for index in order:
            if len(items) >= LESSON_SIZE:
                break
            words = self.lines[index]
            if not words:
                continue
            if len(items) % 2 == 0 and len(words) >= 2:
                candidate = self._fill_item(index)
            else:
                candidate = self._arrange_item(index)
            signature = item_signature(candidate)
            if signature in seen:
                continue
            seen.add(signature)
            items.append(candidate)

    @staticmethod
    def _take(pool: deque, used: set[int]) -> Optional[int]:
        """Pop the next unused index from a pool and mark it used."""
        while pool:
            index = pool.popleft()
            if index in used:
                continue
            used.add(index)
            return index
        return None

    def _fill_item(self, index: int) -> FillBlankItem:
        words = self.lines[index]
        hidden = self.rng.randrange(len(words))
        correct = words[hidden]
        return FillBlankItem(
            line_index=index,
            rendered_line=render_blank(words, hidden),
            options=build_options(self.rng, correct, self.vocab),
            correct_word=correct,
        )

    def _arrange_item(self, index: int) -> ArrangeItem:
        return ArrangeItem(line_index=index, words=list(self.lines[index]))


def build_lesson_items(lines: Sequence[Sequence[str]], rng: random.Random) -> list[Item]:
    """Convenience wrapper around ItemBuilder.build()."""
    return ItemBuilder(lines, rng).build()
