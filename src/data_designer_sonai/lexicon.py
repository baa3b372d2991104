from __future__ import annotations

import re
from dataclasses import dataclass
from functools import lru_cache
from typing import Iterable


class LexiconError(ValueError):
    """Raised when a matcher cannot be built from its pattern list."""


# ---------------------------------------------------------------------------
# Phrase lists
#
# All patterns are lowercase: they are matched against lowercased text.
# Negative lists hold benign phrases that contain a positive pattern.
# ---------------------------------------------------------------------------

_BUZZWORDS = [
    "seamless", "cutting-edge", "state-of-the-art", "robust", "leverag",
    "empower", "revolutioniz", "game-changer", "game changer", "innovative",
    "next-level", "next-generation", "unlock", "elevate", "streamline",
    "harness", "user-friendly", "intuitive", "comprehensive", "powerful",
    "delve", "tapestry", "modern", "sleek", "scalable", "effortless",
    "blazing fast", "immersive", "dive into", "journey", "whether you're",
    "all-in-one", "designed to", "enhance", "showcase", "crafted",
    "ensuring", "engaging", "dynamic", "vibrant",
]
_NEGATIVE_BUZZWORDS = [
    "modern english", "modern art", "modern warfare", "modern history",
    "not very powerful", "not powerful", "unlock the door", "unlocked the door",
    "robust enough", "designed to be played",
]

_NOT_JUST = [
    "it's not just", "it\u2019s not just", "isn't just", "isn\u2019t just",
    "not just a", "not just an", "not only", "more than just",
    "not merely", "isn't merely", "it's not about", "it\u2019s not about",
]

_DEVLOG = [
    "devlog #", "dev log #", "update #", "progress update", "key features",
    "what i did", "what's next", "what\u2019s next", "next steps",
    "challenges faced", "lessons learned", "changelog", "tech stack",
]

_IRREGULAR_ELLIPSIS = ["\u2026", "..."]

_BACKSTORY = [
    "i built this", "i made this because", "i created this", "as a student",
    "i noticed that", "i realized that", "i wanted to create", "my goal was",
    "inspired by", "the idea came", "born out of", "this project was born",
    "for the people of", "i've always wanted", "i have always wanted",
]
_NEGATIVE_BACKSTORY = [
    "i built this in", "i made this because i was bored",
    "inspired by a friend", "i noticed that the bug",
]

_INCORRECT_PERSPECTIVE = [
    " we ", "we've", "we're", "your ", "our ", "users can", "you can",
    "allows users", "allows you", "lets you", "they can",
]

_BROKEN_ENGLISH = [
    " im ", " dont ", " cant ", " didnt ", " wont ", " doesnt ", "alot",
    " u ", " ur ", " gonna", " wanna", " kinda", " lol", " idk", " tbh",
    "!!", "??", " thx", " pls",
]

_OVERLY_FORMAL = ["(e.g.", "(formerly", "role- "]


# ---------------------------------------------------------------------------
# Matchers
# ---------------------------------------------------------------------------


class LexiconMatcher:
    """Counts non-overlapping occurrences of a fixed set of phrases.

    Patterns are joined into one compiled alternation. Scanning is
    leftmost-first: at the leftmost position where any pattern matches, the
    pattern listed first wins, and scanning resumes after that match.
    """

    __slots__ = ("name", "patterns", "_regex")

    def __init__(self, name: str, patterns: Iterable[str]) -> None:
        patterns = tuple(patterns)
        if not patterns:
            raise LexiconError(f"lexicon {name!r} has no patterns")
        for pattern in patterns:
            if not isinstance(pattern, str) or not pattern:
                raise LexiconError(f"lexicon {name!r} contains an empty or non-string pattern: {pattern!r}")
            if pattern != pattern.lower():
                raise LexiconError(f"lexicon {name!r} pattern {pattern!r} is not lowercase")
        self.name = name
        self.patterns = patterns
        self._regex = re.compile("|".join(re.escape(p) for p in patterns))

    def count(self, haystack: str) -> int:
        return sum(1 for _ in self._regex.finditer(haystack))

    def __repr__(self) -> str:
        return f"LexiconMatcher({self.name!r}, {len(self.patterns)} patterns)"


@dataclass(frozen=True)
class LexiconSet:
    """The full set of matchers used by the metric aggregator."""

    buzzword: LexiconMatcher
    negative_buzzword: LexiconMatcher
    not_just: LexiconMatcher
    devlog: LexiconMatcher
    irregular_ellipsis: LexiconMatcher
    backstory: LexiconMatcher
    negative_backstory: LexiconMatcher
    incorrect_perspective: LexiconMatcher
    broken_english: LexiconMatcher
    overly_formal: LexiconMatcher


def build_lexicons() -> LexiconSet:
    """Compile every phrase list. Raises ``LexiconError`` on a bad list."""
    return LexiconSet(
        buzzword=LexiconMatcher("buzzword", _BUZZWORDS),
        negative_buzzword=LexiconMatcher("negative_buzzword", _NEGATIVE_BUZZWORDS),
        not_just=LexiconMatcher("not_just", _NOT_JUST),
        devlog=LexiconMatcher("devlog", _DEVLOG),
        irregular_ellipsis=LexiconMatcher("irregular_ellipsis", _IRREGULAR_ELLIPSIS),
        backstory=LexiconMatcher("backstory", _BACKSTORY),
        negative_backstory=LexiconMatcher("negative_backstory", _NEGATIVE_BACKSTORY),
        incorrect_perspective=LexiconMatcher("incorrect_perspective", _INCORRECT_PERSPECTIVE),
        broken_english=LexiconMatcher("broken_english", _BROKEN_ENGLISH),
        overly_formal=LexiconMatcher("overly_formal", _OVERLY_FORMAL),
    )


@lru_cache(maxsize=1)
def default_lexicons() -> LexiconSet:
    return build_lexicons()
