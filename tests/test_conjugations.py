"""
Tests for conjugations.py - inflection patterns and highlighting.
"""

import re

import pytest

from kotoba.conjugations import (
    GODAN_ENDINGS,
    ICHIDAN_SUFFIXES,
    IKU_ENDINGS,
    IRREGULAR_PATTERNS,
    ConjugationType,
    UnsupportedInflectionEnding,
    get_conjugation_type,
    get_find_regex,
    highlight_word,
)


def matches(word, tags, text):
    return re.search(get_find_regex(word, tags), text) is not None


# =============================================================================
# Classification
# =============================================================================

class TestConjugationType:
    """Tests for get_conjugation_type."""

    @pytest.mark.parametrize("word,tags,expected", [
        ("作る", {"v5る", "vt"}, ConjugationType.GODAN),
        ("食べる", {"v1", "vt"}, ConjugationType.ICHIDAN),
        ("高い", {"adj-い"}, ConjugationType.I_ADJECTIVE),
        ("いい", {"adj-いx"}, ConjugationType.IX_ADJECTIVE),
        ("きれい", {"adj-な"}, ConjugationType.NA_ADJECTIVE),
        ("ある", {"v5る-i"}, ConjugationType.ARU),
        ("来る", {"vくる"}, ConjugationType.KURU),
        ("する", {"vする-i"}, ConjugationType.SURU),
        ("犬", {"n"}, ConjugationType.NONE),
    ])
    def test_classification(self, word, tags, expected):
        assert get_conjugation_type(word, tags) == expected

    def test_non_inflecting_ending_ignores_tags(self):
        assert get_conjugation_type("静か", {"adj-な", "v5る"}) == ConjugationType.NONE

    def test_irregular_tags_win(self):
        assert get_conjugation_type("ある", {"v5る", "v5る-i"}) == ConjugationType.ARU

    def test_empty_word(self):
        assert get_conjugation_type("", {"v5る"}) == ConjugationType.NONE


# =============================================================================
# Catalogs
# =============================================================================

GODAN_TABLES = {
    'う': "っていませんでした|わなかったでしょう|いませんでしたら|わなかっただろう|わないでください|わないでしょう|いませんでした|ったでしょう|っていました|ってください|わないだろう|っていません|わなかったら|うでしょう|っています|わなければ|わなかった|われません|っただろう|わせません|いましょう|いましたら|えません|っている|わせない|っていた|いました|うだろう|いません|われます|わせます|われない|ったら|えます|えない|わせる|われる|います|わない|った|おう|える|うな|えば|う|え",
    'く': "いていませんでした|かなかったでしょう|きませんでしたら|かなかっただろう|かないでください|かないでしょう|きませんでした|いたでしょう|いていました|いてください|かないだろう|いていません|かなかったら|くでしょう|いています|かなければ|かなかった|かれません|いただろう|かせません|きましょう|きましたら|けません|いている|かせない|いていた|きました|くだろう|きません|かれます|かせます|かれない|いたら|けます|けない|かせる|かれる|きます|かない|いた|こう|ける|くな|けば|く|け",
    'ぐ': "いでいませんでした|がなかったでしょう|ぎませんでしたら|がなかっただろう|がないでください|がないでしょう|ぎませんでした|いだでしょう|いでいました|いでください|がないだろう|いでいません|がなかったら|ぐでしょう|いでいます|がなかった|がなければ|がせません|がれません|ぎましょう|いだだろう|ぎましたら|がせます|げません|いでいる|いでいた|ぎました|ぐだろう|ぎません|がれます|がれない|げます|いだら|がない|がせる|がれる|げない|ぎます|いだ|げる|ぐな|げば|ぐ|ご|げ",
    'す': "していませんでした|さなかったでしょう|しませんでしたら|さなかっただろう|さないでください|しませんでした|さないでしょう|してください|したでしょう|していません|さないだろう|さなかったら|していました|しただろう|すでしょう|さなかった|しています|されません|しましょう|さなければ|させません|しましたら|せません|されます|されない|していた|すだろう|しました|しません|している|させます|さない|せます|させる|される|します|したら|せない|せば|そう|すな|した|せる|せ|す",
    'つ': "っていませんでした|たなかったでしょう|たないでください|ちませんでしたら|たなかっただろう|たないでしょう|ちませんでした|たなかったら|っていません|ったでしょう|ってください|っていました|たないだろう|っただろう|ちましたら|たれません|たなければ|たせません|たなかった|ちましょう|つでしょう|っています|たれます|ちました|たれない|てません|たせます|つだろう|っている|ちません|たせない|っていた|てます|ちます|たせる|たれる|たない|てない|ったら|つな|てば|った|てる|とう|て|つ",
    'づ': "っていませんでした|だなかったでしょう|だないでください|ぢませんでしたら|だなかっただろう|だないでしょう|ぢませんでした|だなかったら|っていません|ったでしょう|ってください|っていました|だないだろう|っただろう|ぢましたら|だれません|だなければ|だせません|だなかった|ぢましょう|づでしょう|っています|だれます|ぢました|だれない|でません|だせます|づだろう|っている|ぢません|だせない|っていた|でます|ぢます|だせる|だれる|だない|でない|ったら|づな|でば|った|でる|どう|で|づ",
    'ぬ': "んでいませんでした|ななかったでしょう|にませんでしたら|ななかっただろう|なないでください|なないでしょう|にませんでした|んでいません|ななかったら|んでください|なないだろう|んでいました|んだでしょう|なれません|にましたら|んでいます|ななければ|なせません|ななかった|にましょう|んだだろう|ぬでしょう|にました|んでいる|なれます|なれない|ねません|なせます|んでいた|なせない|にません|ぬだろう|ねます|なない|なれる|ねない|んだら|にます|なせる|ねば|んだ|ぬな|のう|ねる|ぬ|ね",
    'ぶ': "んでいませんでした|ばなかったでしょう|びませんでしたら|ばなかっただろう|ばないでください|ばないでしょう|びませんでした|んでいません|ばなかったら|んでください|ばないだろう|んでいました|んだでしょう|ばれません|びましたら|んでいます|ばなければ|ばせません|ばなかった|びましょう|ぶでしょう|んだだろう|びました|んでいる|ばれない|ばれます|んでいた|べません|ばせます|びません|ぶだろう|ばない|べます|ばれる|べない|んだら|ばせる|びます|べば|んだ|ぶな|べる|ぶ|ぼ|べ",
    'む': "んでいませんでした|まなかったでしょう|みませんでしたら|まなかっただろう|まないでください|まないでしょう|みませんでした|んでいません|まなかったら|んでください|まないだろう|んでいました|んだでしょう|まれません|みましたら|んでいます|まなければ|ませません|まなかった|みましょう|んだだろう|むでしょう|みました|んでいる|まれます|まれない|めません|ませます|んでいた|ませない|みません|むだろう|めます|まない|まれる|めない|んだら|みます|ませる|めば|んだ|むな|もう|める|む|め",
    'る': "っていませんでした|らなかったでしょう|りませんでしたら|らなかっただろう|らないでください|らないでしょう|りませんでした|ったでしょう|っていました|ってください|らないだろう|っていません|らなかったら|るでしょう|っています|らなければ|らなかった|られません|っただろう|らせません|りましょう|りましたら|れません|っている|らせない|っていた|りました|るだろう|りません|られます|らせます|られない|ったら|れます|れない|らせる|られる|ります|らない|った|ろう|れる|るな|れば|る|れ",
}


class TestCatalogs:
    """Tests for the static suffix catalogs."""

    def test_godan_tables_cover_regular_endings(self):
        assert set(GODAN_ENDINGS) == set("うくぐすつづぬぶむる")

    @pytest.mark.parametrize("ending", list(GODAN_TABLES))
    def test_godan_suffixes(self, ending):
        expected = GODAN_TABLES[ending].split("|")
        assert set(GODAN_ENDINGS[ending]) == set(expected)
        assert len(GODAN_ENDINGS[ending]) == len(expected)

    def test_u_verbs_use_wa_row(self):
        endings = GODAN_ENDINGS["う"]
        assert "わない" in endings
        assert "らない" not in endings

    def test_dzu_verbs_use_da_row(self):
        endings = GODAN_ENDINGS["づ"]
        assert "だない" in endings
        assert "たない" not in endings

    def test_iku_sound_change(self):
        iku = set(IKU_ENDINGS)
        regular = set(GODAN_ENDINGS["く"])
        assert iku - regular == {s.replace("い", "っ", 1) for s in regular - iku}
        assert "った" in iku
        assert "いた" not in iku

    def test_plain_te_form_not_listed(self):
        assert "て" not in ICHIDAN_SUFFIXES
        assert "いて" not in GODAN_ENDINGS["く"]

    def test_longest_first(self):
        for endings in (*GODAN_ENDINGS.values(), IKU_ENDINGS, ICHIDAN_SUFFIXES):
            lengths = [len(e) for e in endings]
            assert lengths == sorted(lengths, reverse=True)

    def test_irregular_patterns_compile(self):
        for pattern in IRREGULAR_PATTERNS.values():
            re.compile(pattern)


# =============================================================================
# Patterns
# =============================================================================

class TestFindRegex:
    """Tests for get_find_regex."""

    def test_godan(self):
        assert matches("作る", {"v5る"}, "作った")
        assert matches("作る", {"v5る"}, "作りません")
        assert matches("作る", {"v5る"}, "作ろう")
        assert not matches("作る", {"v5る"}, "作く")

    def test_iku(self):
        assert matches("行く", {"v5く-s"}, "行った")
        assert not matches("行く", {"v5く"}, "行った")
        assert matches("行く", {"v5く"}, "行いた")

    def test_ichidan(self):
        assert matches("食べる", {"v1"}, "食べた")
        assert matches("食べる", {"v1"}, "食べられない")

    def test_i_adjective(self):
        assert matches("高い", {"adj-い"}, "高かった")
        assert matches("高い", {"adj-い"}, "高くない")

    def test_na_adjective(self):
        assert matches("きれい", {"adj-な"}, "きれいだった")
        assert matches("きれい", {"adj-な"}, "きれい")

    def test_irregular_words(self):
        assert matches("いい", {"adj-いx"}, "よかった")
        assert matches("いい", {"adj-いx"}, "いいです")
        assert matches("ある", {"v5る-i"}, "あった")
        assert matches("ある", {"v5る-i"}, "ない")
        assert matches("来る", {"vくる"}, "来ない")
        assert matches("来る", {"vくる"}, "来[く]る")
        assert matches("する", {"vする-s"}, "しました")

    def test_noun(self):
        assert get_find_regex("犬", {"n"}) == " ?犬"

    def test_furigana_word(self):
        assert matches("作[つく]る", {"v5る"}, "ケーキを 作[つく]った。")

    @pytest.mark.parametrize("word,ending", [("遊ふ", "ふ"), ("飲ず", "ず"), ("あい", "い")])
    def test_unsupported_ending(self, word, ending):
        with pytest.raises(UnsupportedInflectionEnding) as exc_info:
            get_find_regex(word, {"v5"})
        assert exc_info.value.ending == ending

    def test_unsupported_ending_messages(self):
        assert "no godan verb ending" in str(UnsupportedInflectionEnding("遊ふ", "ふ"))
        assert "Unknown godan verb" in str(UnsupportedInflectionEnding("あい", "い"))


class TestHighlightWord:
    """Tests for highlight_word."""

    def test_inflected(self):
        assert highlight_word("ケーキを作った。", "作る", {"v5る"}) == "ケーキを<b>作った</b>。"

    def test_every_occurrence(self):
        result = highlight_word("犬と犬", "犬", {"n"})
        assert result == "<b>犬</b>と<b>犬</b>"

    def test_furigana_sentence(self):
        result = highlight_word("ケーキを 作[つく]った。", "作[つく]る", {"v5る"})
        assert result == "ケーキを<b> 作[つく]った</b>。"

    def test_not_found(self):
        assert highlight_word("猫がいる。", "犬", {"n"}) is None

    def test_empty_word(self):
        assert highlight_word("猫がいる。", "", {"n"}) is None
