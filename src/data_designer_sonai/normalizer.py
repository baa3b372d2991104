from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Iterable, Iterator

from markdown_it import MarkdownIt
from markdown_it.token import Token

# Bullet glyphs pasted in place of markdown list syntax.
MARKDOWN_BULLETS = "\u2022\u25cf"

_STRUCTURE_TOKENS = frozenset({
    "hr", "blockquote_open", "em_open", "strong_open", "s_open", "sub_open",
    "sup_open", "heading_open", "link_open", "image",
})
_TEXT_TOKENS = frozenset({"text", "text_special"})
_LINE_TOKENS = frozenset({"softbreak", "hardbreak", "paragraph_close", "heading_close"})
_CODE_TOKENS = frozenset({"fence", "code_block", "code_inline"})

_SENTENCE_SPLIT_RE = re.compile(r"[.!?\n]")


@dataclass(frozen=True)
class NormalizedText:
    markdown_count: int
    cleaned_text: str
    sentence_count: int
    noncap_sentence_count: int
    lowered: str

    @property
    def collapsed(self) -> str:
        return collapse_whitespace(self.lowered)


def collapse_whitespace(text: str) -> str:
    return text.replace("\n", " ").replace("  ", " ")


def _walk(tokens: Iterable[Token]) -> Iterator[Token]:
    for token in tokens:
        yield token
        if token.children:
            yield from _walk(token.children)


def _is_noncap(sentence: str) -> bool:
    first = sentence[0]
    return first.isascii() and first.isalpha() and not first.isupper()


class TextNormalizer:
    """Turns raw markdown into plain text plus structural and sentence counts.

    Code blocks and inline code are dropped from the plain text. Line breaks
    and block ends become newlines so line-oriented scans still see the
    author's line structure.
    """

    def __init__(self, bullets: str = MARKDOWN_BULLETS) -> None:
        self.bullets = bullets
        # The preset's nesting limit of 20 silently drops everything past it.
        self._markdown = MarkdownIt("commonmark", {"maxNesting": 1000}).enable("strikethrough")

    def normalize(self, text: str) -> NormalizedText:
        markdown_count = sum(text.count(b) for b in self.bullets)

        try:
            tokens = self._markdown.parse(text)
        except RecursionError:
            # Nesting deeper than the interpreter stack: read it as plain text.
            tokens = [Token("text", "", 0, content=text)]

        parts: list[str] = []
        for token in _walk(tokens):
            if token.type in _STRUCTURE_TOKENS:
                markdown_count += 1
            if token.type in _CODE_TOKENS:
                continue
            if token.type in _TEXT_TOKENS:
                parts.append(token.content)
            elif token.type in _LINE_TOKENS:
                parts.append("\n")

        cleaned = "".join(parts).strip().replace("\n\n", "\n")

        sentences = [s.strip() for s in _SENTENCE_SPLIT_RE.split(cleaned)]
        sentences = [s for s in sentences if s]
        noncap = sum(1 for s in sentences if _is_noncap(s))

        return NormalizedText(
            markdown_count=markdown_count,
            cleaned_text=cleaned,
            sentence_count=max(len(sentences), 1),
            noncap_sentence_count=noncap,
            lowered=cleaned.lower(),
        )
