from __future__ import annotations

from dataclasses import asdict, dataclass, field, fields
from typing import Iterable, Iterator

from data_designer_sonai.lexicon import LexiconSet, default_lexicons
from data_designer_sonai.normalizer import MARKDOWN_BULLETS, TextNormalizer
from data_designer_sonai.typography import HUMAN_EMOJI, scan

# ---------------------------------------------------------------------------
# Hyperparameters
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Hyperparameters:
    """Constants of the metric aggregator.

    Changing any of these changes the feature vectors, so a model trained
    under one set is only valid for that set.
    """

    noncap_sentence_weight: float = 1.5
    trailing_comma_bonus: float = 1.0
    markdown_bullets: str = MARKDOWN_BULLETS
    allowed_emoji: frozenset[str] = field(default_factory=lambda: HUMAN_EMOJI)


DEFAULT_HYPERPARAMETERS = Hyperparameters()


# ---------------------------------------------------------------------------
# Dataclasses
# ---------------------------------------------------------------------------

# Short names used by ``TextMetrics.__str__``.
_DISPLAY_NAMES = [
    ("emoji", "emoji_rate"),
    ("not_just", "not_just_count"),
    ("buzzword", "buzzword_rate"),
    ("html", "html_escape_count"),
    ("irr_ell", "irregular_ellipsis"),
    ("irr_quote", "irregular_quotations"),
    ("irr_dash", "irregular_dashes"),
    ("irr_arr", "irregular_arrows"),
    ("irr_md", "irregular_markdown"),
    ("informal", "human_informality"),
    ("bad_per", "incorrect_perspective"),
    ("devlog", "devlog_count"),
    ("labels", "labels"),
    ("hashtags", "hashtags"),
    ("backstory", "backstory_count"),
]
_DISPLAY_COLUMNS = 2


@dataclass(frozen=True)
class TextMetrics:
    """Stylistic fingerprint of one text. Higher values are more AI-like.

    Rate fields are divided by the sentence count; every other field is a raw
    count. All fields are non-negative.
    """

    emoji_rate: float
    buzzword_rate: float
    not_just_count: float
    html_escape_count: float
    devlog_count: float
    backstory_count: float
    incorrect_perspective: float
    human_informality: float
    irregular_ellipsis: float
    irregular_quotations: float
    irregular_dashes: float
    irregular_markdown: float
    irregular_arrows: float
    labels: float
    hashtags: float

    @classmethod
    def field_names(cls) -> tuple[str, ...]:
        return tuple(f.name for f in fields(cls))

    def to_payload(self) -> dict[str, float]:
        return asdict(self)

    def __str__(self) -> str:
        out = []
        cell = 0
        for name, attr in _DISPLAY_NAMES:
            value = getattr(self, attr)
            if value == 0:
                continue

            row, col = divmod(cell, _DISPLAY_COLUMNS)
            if col > 0:
                out.append("\t\t")
            elif row > 0:
                out.append(" " * 10)
            out.append(f"{name:<10}")
            out.append(f"{int(value)}" if float(value).is_integer() else f"{value:.1f}")
            if col + 1 == _DISPLAY_COLUMNS:
                out.append("\n")
            cell += 1

        return "".join(out)


@dataclass(frozen=True)
class LexicalCounts:
    """Lexicon results before rate normalisation.

    ``buzzwords``, ``backstory`` and ``informality`` are signed: negative
    matches and formal phrasing are subtracted and may outweigh the positives.
    """

    buzzwords: int
    not_just: int
    devlog: int
    backstory: int
    incorrect_perspective: int
    irregular_ellipsis: int
    informality: float


# ---------------------------------------------------------------------------
# Aggregation
# ---------------------------------------------------------------------------


class TextMetricFactory:
    """Computes ``TextMetrics`` from raw text.

    Holds the compiled lexicons and the markdown parser; build one per
    process and share it. ``calculate`` has no side effects.
    """

    def __init__(self, lexicons: LexiconSet | None = None, hyperparameters: Hyperparameters | None = None) -> None:
        self.lexicons = lexicons or default_lexicons()
        self.hp = hyperparameters or DEFAULT_HYPERPARAMETERS
        self.normalizer = TextNormalizer(bullets=self.hp.markdown_bullets)

    def lexical_counts(self, collapsed: str, noncap_sentences: int) -> LexicalCounts:
        lex = self.lexicons
        trailing = self.hp.trailing_comma_bonus if collapsed.endswith(",") else 0.0
        informality = (
            trailing
            + lex.broken_english.count(collapsed)
            - lex.overly_formal.count(collapsed)
            + self.hp.noncap_sentence_weight * noncap_sentences
        )
        return LexicalCounts(
            buzzwords=lex.buzzword.count(collapsed) - lex.negative_buzzword.count(collapsed),
            not_just=lex.not_just.count(collapsed),
            devlog=lex.devlog.count(collapsed),
            backstory=lex.backstory.count(collapsed) - lex.negative_backstory.count(collapsed),
            incorrect_perspective=lex.incorrect_perspective.count(collapsed),
            irregular_ellipsis=lex.irregular_ellipsis.count(collapsed),
            informality=informality,
        )

    def calculate(self, text: str) -> TextMetrics:
        html_escapes = text.count("&amp;")
        normalized = self.normalizer.normalize(text)
        typo = scan(normalized.lowered, allowed_emoji=self.hp.allowed_emoji)
        lexical = self.lexical_counts(normalized.collapsed, normalized.noncap_sentence_count)

        sc = float(normalized.sentence_count)
        return TextMetrics(
            emoji_rate=typo.emoji / sc,
            buzzword_rate=max(lexical.buzzwords, 0) / sc,
            not_just_count=float(lexical.not_just),
            html_escape_count=float(html_escapes),
            devlog_count=float(lexical.devlog),
            backstory_count=float(max(lexical.backstory, 0)),
            incorrect_perspective=lexical.incorrect_perspective / sc,
            human_informality=max(lexical.informality, 0.0) / sc,
            irregular_ellipsis=float(lexical.irregular_ellipsis),
            irregular_quotations=typo.irregular_quotes / sc,
            irregular_dashes=float(typo.irregular_dashes),
            irregular_markdown=float(normalized.markdown_count),
            irregular_arrows=float(typo.irregular_arrows),
            labels=float(typo.labels),
            hashtags=float(typo.hashtags),
        )

    def calculate_iter(self, texts: Iterable[str]) -> Iterator[TextMetrics]:
        return (self.calculate(text) for text in texts)
