import pytest

from data_designer_sonai.typography import count_hashtags, count_labels, scan


class TestLabels:
    def test_single_label_line(self):
        assert count_labels("day:\nrest of text") == 1

    @pytest.mark.parametrize("text", ["https:\n", "http:", "a: b", "note 2:", "a:b:", ":", "   :"])
    def test_not_labels(self, text):
        assert count_labels(text) == 0

    def test_multi_word_label(self):
        assert count_labels("what i did today:\nstuff\nnext steps :  ") == 2

    @pytest.mark.parametrize("text", ["day:\x0brest", "day:\u2028rest", "note:\x0cday"])
    def test_only_newline_separates_lines(self, text):
        assert count_labels(text) == 0


class TestHashtags:
    def test_counts_tags(self):
        assert count_hashtags("shipped it #gamedev #rust today") == 2

    def test_bare_hash_ignored(self):
        assert count_hashtags("issue # 4") == 0


class TestScan:
    def test_plain_text_is_clean(self):
        counts = scan("i fixed the jump bug today.")
        assert counts.emoji == 0
        assert counts.irregular_dashes == 0
        assert counts.irregular_arrows == 0
        assert counts.irregular_quotes == 0

    def test_emoji_with_modifier_counts_once(self):
        assert scan("nice \U0001f44d\U0001f3fd").emoji == 1

    def test_zwj_sequence_counts_once(self):
        family = "\U0001f468\u200d\U0001f469\u200d\U0001f467"
        assert scan(f"my {family} played it").emoji == 1

    def test_allowlisted_emoji_ignored(self):
        assert scan("this bug \U0001f62d").emoji == 0

    def test_custom_allowlist(self):
        assert scan("this bug \U0001f62d", allowed_emoji=frozenset()).emoji == 1

    def test_unicode_dashes(self):
        assert scan("a—b – c − d").irregular_dashes == 3

    def test_hyphen_before_non_space_counts(self):
        assert scan("well-known").irregular_dashes == 1

    @pytest.mark.parametrize("text", ["- item", "the end -", "a - b"])
    def test_hyphen_before_space_or_end_ignored(self, text):
        assert scan(text).irregular_dashes == 0

    def test_arrows(self):
        assert scan("input → output ⇒ done").irregular_arrows == 2

    def test_curly_quotes(self):
        assert scan("“hi” it’s").irregular_quotes == 3

    def test_labels_and_hashtags_reported(self):
        counts = scan("features:\nfast loading #speed")
        assert counts.labels == 1
        assert counts.hashtags == 1
