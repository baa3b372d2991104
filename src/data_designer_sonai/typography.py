from __future__ import annotations

from dataclasses import dataclass

import emoji
import regex

from data_designer_sonai.normalizer import collapse_whitespace

# Emoji common enough in human writing that they carry no signal.
HUMAN_EMOJI = frozenset({"\U0001f62d", "\U0001f609", "\U0001fae3"})

_DASHES = frozenset(
    "\u2013\u2014\u2012\u2015\u2e3b\u2e3a\u2212\ufe58\uff0d\u2011\u2010\u1806\u05be\u058a"
)
_ARROWS = frozenset(
    "\u2192\u2191\u2193\u2194\u2195\u21d2\u21d0\u21d1\u21d3\u2794\u279c"
)
_QUOTES = frozenset("\u201c\u201d\u2018\u2019")

_GRAPHEME_RE = regex.compile(r"\X")
_URL_SCHEMES = frozenset({"http", "https"})


@dataclass(frozen=True)
class TypographyCounts:
    emoji: int
    irregular_dashes: int
    irregular_arrows: int
    irregular_quotes: int
    labels: int
    hashtags: int


def count_labels(text: str) -> int:
    """Count lines that are a bare heading such as ``day:``."""
    labels = 0
    for line in text.split("\n"):
        if line.count(":") != 1:
            continue
        label, after = line.split(":")
        if after.strip():
            continue
        label = label.strip()
        if not label or label in _URL_SCHEMES:
            continue
        if all(c.isalpha() or c.isspace() for c in label):
            labels += 1
    return labels


def count_hashtags(collapsed: str) -> int:
    return sum(1 for word in collapsed.split() if word.startswith("#") and len(word) > 1)


def scan(text: str, allowed_emoji: frozenset[str] = HUMAN_EMOJI) -> TypographyCounts:
    """Scan lowercased text for emoji, irregular glyphs, labels and hashtags.

    Emoji are matched per grapheme cluster so a multi-code-point sequence
    counts once. A plain ``-`` counts as a dash only when the next character
    exists and is not whitespace.
    """
    labels = count_labels(text)
    collapsed = collapse_whitespace(text)
    hashtags = count_hashtags(collapsed)

    emoji_count = dashes = arrows = quotes = 0
    graphemes = _GRAPHEME_RE.findall(collapsed)
    for index, grapheme in enumerate(graphemes):
        if grapheme not in allowed_emoji and emoji.is_emoji(grapheme):
            emoji_count += 1
            continue

        for offset, char in enumerate(grapheme):
            if char in _DASHES:
                dashes += 1
            elif char in _ARROWS:
                arrows += 1
            elif char in _QUOTES:
                quotes += 1
            elif char == "-":
                following = grapheme[offset + 1 : offset + 2]
                if not following and index + 1 < len(graphemes):
                    following = graphemes[index + 1][:1]
                if following and not following.isspace():
                    dashes += 1

    return TypographyCounts(
        emoji=emoji_count,
        irregular_dashes=dashes,
        irregular_arrows=arrows,
        irregular_quotes=quotes,
        labels=labels,
        hashtags=hashtags,
    )
