"""
Inflection patterns for highlighting words in example sentences.

Given a dictionary form and its part-of-speech tags, builds one regular
expression that matches the common inflected surface forms of the word
(negative, polite, past, te-form, potential, passive, causative, volitional,
conditional, imperative). The pattern is used to wrap the word in ``<b>``
tags inside example sentences.

Conjugation Types:
    NONE          - Not inflected (nouns, adverbs, unknown endings)
    I_ADJECTIVE   - い-adjectives (adj-い)
    IX_ADJECTIVE  - いい/よい (adj-いx)
    NA_ADJECTIVE  - な-adjectives (adj-な)
    ICHIDAN       - 一段 verbs (v1*)
    GODAN         - 五段 verbs (v5*)
    ARU           - ある (v5る-i)
    KURU          - 来る (vくる)
    SURU          - する (vする-i, vする-s)

Words may be given in furigana notation (``作[つく]る``); brackets are
escaped so that the pattern matches furigana sentences as well.
"""

import re
from enum import Enum
from typing import Dict, Iterable, Optional, Sequence, Tuple


class UnsupportedInflectionEnding(ValueError):
    """A godan verb ends in a character with no conjugation table."""

    def __init__(self, word: str, ending: str):
        self.word = word
        self.ending = ending
        if ending in NO_GODAN_ENDINGS:
            message = f"There is no godan verb ending with '{ending}'! ({word})"
        else:
            message = f"Unknown godan verb \"{word}\" ending '{ending}'!"
        super().__init__(message)


class ConjugationType(Enum):
    """Inflection class of a word."""
    NONE = "none"
    I_ADJECTIVE = "i-adjective"
    IX_ADJECTIVE = "ix-adjective"
    NA_ADJECTIVE = "na-adjective"
    ICHIDAN = "ichidan"
    GODAN = "godan"
    ARU = "aru"
    KURU = "kuru"
    SURU = "suru"


# Final characters that can belong to an inflecting word
INFLECTING_ENDINGS = "いうくすつぬふむるぐずづぶぷ"

# Kana endings that appear in the table above but have no godan class
NO_GODAN_ENDINGS = "ふずぷ"


# ============================================================================
# Godan (五段) Verbs
# ============================================================================

def _longest_first(suffixes: Iterable[str]) -> Tuple[str, ...]:
    """Deduplicate keeping first occurrences, then order by descending length."""
    unique = list(dict.fromkeys(suffixes))
    return tuple(sorted(unique, key=len, reverse=True))


# Inflected endings of each godan class, relative to the verb stem
GODAN_ENDINGS: Dict[str, Tuple[str, ...]] = {
    'う': _longest_first((
        "っていませんでした", "わなかったでしょう", "いませんでしたら", "わなかっただろう",
        "わないでください", "わないでしょう", "いませんでした", "ったでしょう", "っていました",
        "ってください", "わないだろう", "っていません", "わなかったら", "うでしょう",
        "っています", "わなければ", "わなかった", "われません", "っただろう", "わせません",
        "いましょう", "いましたら", "えません", "っている", "わせない", "っていた", "いました",
        "うだろう", "いません", "われます", "わせます", "われない", "ったら", "えます", "えない",
        "わせる", "われる", "います", "わない", "った", "おう", "える", "うな", "えば", "う", "え",
    )),
    'く': _longest_first((
        "いていませんでした", "かなかったでしょう", "きませんでしたら", "かなかっただろう",
        "かないでください", "かないでしょう", "きませんでした", "いたでしょう", "いていました",
        "いてください", "かないだろう", "いていません", "かなかったら", "くでしょう",
        "いています", "かなければ", "かなかった", "かれません", "いただろう", "かせません",
        "きましょう", "きましたら", "けません", "いている", "かせない", "いていた", "きました",
        "くだろう", "きません", "かれます", "かせます", "かれない", "いたら", "けます", "けない",
        "かせる", "かれる", "きます", "かない", "いた", "こう", "ける", "くな", "けば", "く", "け",
    )),
    'ぐ': _longest_first((
        "いでいませんでした", "がなかったでしょう", "ぎませんでしたら", "がなかっただろう",
        "がないでください", "がないでしょう", "ぎませんでした", "いだでしょう", "いでいました",
        "いでください", "がないだろう", "いでいません", "がなかったら", "ぐでしょう",
        "いでいます", "がなかった", "がなければ", "がせません", "がれません", "ぎましょう",
        "いだだろう", "ぎましたら", "がせます", "げません", "いでいる", "いでいた", "ぎました",
        "ぐだろう", "ぎません", "がれます", "がれない", "げます", "いだら", "がない", "がせる",
        "がれる", "げない", "ぎます", "いだ", "げる", "ぐな", "げば", "ぐ", "ご", "げ",
    )),
    'す': _longest_first((
        "していませんでした", "さなかったでしょう", "しませんでしたら", "さなかっただろう",
        "さないでください", "しませんでした", "さないでしょう", "してください", "したでしょう",
        "していません", "さないだろう", "さなかったら", "していました", "しただろう",
        "すでしょう", "さなかった", "しています", "されません", "しましょう", "さなければ",
        "させません", "しましたら", "せません", "されます", "されない", "していた", "すだろう",
        "しました", "しません", "している", "させます", "さない", "せます", "させる", "される",
        "します", "したら", "せない", "せば", "そう", "すな", "した", "せる", "せ", "す",
    )),
    'つ': _longest_first((
        "っていませんでした", "たなかったでしょう", "たないでください", "ちませんでしたら",
        "たなかっただろう", "たないでしょう", "ちませんでした", "たなかったら", "っていません",
        "ったでしょう", "ってください", "っていました", "たないだろう", "っただろう",
        "ちましたら", "たれません", "たなければ", "たせません", "たなかった", "ちましょう",
        "つでしょう", "っています", "たれます", "ちました", "たれない", "てません", "たせます",
        "つだろう", "っている", "ちません", "たせない", "っていた", "てます", "ちます", "たせる",
        "たれる", "たない", "てない", "ったら", "つな", "てば", "った", "てる", "とう", "て", "つ",
    )),
    'づ': _longest_first((
        "っていませんでした", "だなかったでしょう", "だないでください", "ぢませんでしたら",
        "だなかっただろう", "だないでしょう", "ぢませんでした", "だなかったら", "っていません",
        "ったでしょう", "ってください", "っていました", "だないだろう", "っただろう",
        "ぢましたら", "だれません", "だなければ", "だせません", "だなかった", "ぢましょう",
        "づでしょう", "っています", "だれます", "ぢました", "だれない", "でません", "だせます",
        "づだろう", "っている", "ぢません", "だせない", "っていた", "でます", "ぢます", "だせる",
        "だれる", "だない", "でない", "ったら", "づな", "でば", "った", "でる", "どう", "で", "づ",
    )),
    'ぬ': _longest_first((
        "んでいませんでした", "ななかったでしょう", "にませんでしたら", "ななかっただろう",
        "なないでください", "なないでしょう", "にませんでした", "んでいません", "ななかったら",
        "んでください", "なないだろう", "んでいました", "んだでしょう", "なれません",
        "にましたら", "んでいます", "ななければ", "なせません", "ななかった", "にましょう",
        "んだだろう", "ぬでしょう", "にました", "んでいる", "なれます", "なれない", "ねません",
        "なせます", "んでいた", "なせない", "にません", "ぬだろう", "ねます", "なない", "なれる",
        "ねない", "んだら", "にます", "なせる", "ねば", "んだ", "ぬな", "のう", "ねる", "ぬ", "ね",
    )),
    'ぶ': _longest_first((
        "んでいませんでした", "ばなかったでしょう", "びませんでしたら", "ばなかっただろう",
        "ばないでください", "ばないでしょう", "びませんでした", "んでいません", "ばなかったら",
        "んでください", "ばないだろう", "んでいました", "んだでしょう", "ばれません",
        "びましたら", "んでいます", "ばなければ", "ばせません", "ばなかった", "びましょう",
        "ぶでしょう", "んだだろう", "びました", "んでいる", "ばれない", "ばれます", "んでいた",
        "べません", "ばせます", "びません", "ぶだろう", "ばない", "べます", "ばれる", "べない",
        "んだら", "ばせる", "びます", "べば", "んだ", "ぶな", "べる", "ぶ", "ぼ", "べ",
    )),
    'む': _longest_first((
        "んでいませんでした", "まなかったでしょう", "みませんでしたら", "まなかっただろう",
        "まないでください", "まないでしょう", "みませんでした", "んでいません", "まなかったら",
        "んでください", "まないだろう", "んでいました", "んだでしょう", "まれません",
        "みましたら", "んでいます", "まなければ", "ませません", "まなかった", "みましょう",
        "んだだろう", "むでしょう", "みました", "んでいる", "まれます", "まれない", "めません",
        "ませます", "んでいた", "ませない", "みません", "むだろう", "めます", "まない", "まれる",
        "めない", "んだら", "みます", "ませる", "めば", "んだ", "むな", "もう", "める", "む", "め",
    )),
    'る': _longest_first((
        "っていませんでした", "らなかったでしょう", "りませんでしたら", "らなかっただろう",
        "らないでください", "らないでしょう", "りませんでした", "ったでしょう", "っていました",
        "ってください", "らないだろう", "っていません", "らなかったら", "るでしょう",
        "っています", "らなければ", "らなかった", "られません", "っただろう", "らせません",
        "りましょう", "りましたら", "れません", "っている", "らせない", "っていた", "りました",
        "るだろう", "りません", "られます", "らせます", "られない", "ったら", "れます", "れない",
        "らせる", "られる", "ります", "らない", "った", "ろう", "れる", "るな", "れば", "る", "れ",
    )),
}

# 行く and its compounds (v5く-s) take the っ sound change in te/ta forms
IKU_TAG = "v5く-s"
IKU_ENDINGS = _longest_first((
    "っていませんでした", "かなかったでしょう", "きませんでしたら", "かなかっただろう",
    "かないでください", "かないでしょう", "きませんでした", "ったでしょう", "っていました",
    "ってください", "かないだろう", "っていません", "かなかったら", "くでしょう",
    "っています", "かなければ", "かなかった", "かれません", "っただろう", "かせません",
    "きましょう", "きましたら", "けません", "っている", "かせない", "っていた", "きました",
    "くだろう", "きません", "かれます", "かせます", "かれない", "ったら", "けます", "けない",
    "かせる", "かれる", "きます", "かない", "った", "こう", "ける", "くな", "けば", "く", "け",
))


# ============================================================================
# Ichidan (一段) Verbs and Adjectives
# ============================================================================

ICHIDAN_SUFFIXES = _longest_first((
    "ていませんでした", "なかったでしょう", "ませんでしたら", "なかっただろう",
    "ないでください", "ないでしょう", "ませんでした", "ないだろう", "てください",
    "させません", "たでしょう", "ていました", "ていません", "なかったら", "られません",
    "るでしょう", "られます", "られない", "させない", "ています", "るだろう",
    "ただろう", "なかった", "ましょう", "なければ", "させます", "ましたら", "ている",
    "ていた", "ません", "ました", "させる", "たろう", "られる", "れば", "ない", "たら",
    "よう", "ます", "るな", "る", "た", "ろ",
))

I_ADJECTIVE_SUFFIXES = _longest_first((
    "くありませんでした", "くないでしょう", "くないだろう", "くありません",
    "くなかった", "いでしょう", "かったです", "くなければ", "いだろう", "くない",
    "いです", "かった", "ければ", "い",
))

NA_ADJECTIVE_SUFFIXES = _longest_first((
    "ではありませんでした", "ではありません", "ではなかった", "ではない", "だった",
    "でした", "であれ", "です", "なれ", "だろ", "では", "なら", "なり", "なる", "で",
    "だ", "に", "な", "",
))


# ============================================================================
# Irregular Words
# ============================================================================

# Written forms of the irregular stems, with and without furigana
IX_ADJECTIVE_STEM = r"(?: ?良\[よ\]|良|よ)"
ARU_STEM = r"(?: ?有\[あ\]|有|あ)"
KURU_STEM = r"(?: ?来\[く\]|来|く)"
SURU_STEM = "[為す]"

IX_ADJECTIVE_SUFFIXES = _longest_first((
    "くありませんでした", "くありません", "くなかった", "かったです", "ければ",
    "かった", "くない", "くて",
))
IX_ADJECTIVE_FORMS = ("いいです", "いい")

ARU_SUFFIXES = _longest_first((
    "りませんでした", "ってください", "らせません", "られません", "りましょう",
    "りました", "られない", "られます", "らせない", "らせます", "りません", "れません",
    "れない", "らせる", "られる", "れます", "ります", "ったら", "って", "ろう", "るな",
    "れば", "った", "れる", "れ", "る",
))
# Negative forms of ある are built on ない
ARU_FORMS = ("ないでください", "なかったら", "なかった", "なければ", "なくて", "ない")

KURU_SUFFIXES = _longest_first((
    "なかったでしょう", "なかっただろう", "ませんでしたら", "ないでください",
    "ないでしょう", "ませんでした", "させません", "るでしょう", "ませんなら",
    "てください", "なかったら", "たでしょう", "られません", "ないだろう", "させない",
    "なかった", "させます", "なければ", "られない", "られます", "ますれば", "ましたら",
    "られる", "させる", "ました", "ません", "れば", "ない", "るな", "よう", "たら",
    "ます", "い", "る", "た",
))
KURU_FORMS = ("きませば",)

SURU_FORMS = _longest_first((
    "していませんでした", "しなかっただろう", "しないでください", "しなかったでしょう",
    "しませんでしたら", "しませんでした", "しないでしょう", SURU_STEM + "るでしょう",
    "しましたろう", "していません", "しませんなら", "しないだろう", "しなかったら",
    "していました", "してください", "しなければ", "しましたら", "しなかった",
    "しますれば", SURU_STEM + "るだろう", "しましょう", "できません", "しています",
    "しただろう", "したろう", "しました", "できます", "しません", "しませば", "できない",
    "したら", "させる", "される", "できる", SURU_STEM + "れば", SURU_STEM + "るな",
    "します", "しよう", "しない", SURU_STEM + "る", "した", "しろ",
))


def _alternation(items: Sequence[str]) -> str:
    return "|".join(items)


def _irregular(stem: str, suffixes: Sequence[str], forms: Sequence[str] = ()) -> str:
    """Pattern for an irregular word: stem + suffix, or one of the full forms."""
    alternatives = [f"{stem}{suffix}" for suffix in suffixes]
    alternatives.extend(forms)
    return _alternation(alternatives)


IRREGULAR_PATTERNS = {
    ConjugationType.IX_ADJECTIVE: _irregular(IX_ADJECTIVE_STEM, IX_ADJECTIVE_SUFFIXES, IX_ADJECTIVE_FORMS),
    ConjugationType.ARU: _irregular(ARU_STEM, ARU_SUFFIXES, ARU_FORMS),
    ConjugationType.KURU: _irregular(KURU_STEM, KURU_SUFFIXES, KURU_FORMS),
    ConjugationType.SURU: _alternation(SURU_FORMS),
}


# ============================================================================
# Pattern Construction
# ============================================================================

def get_conjugation_type(word: str, tags: Iterable[str]) -> ConjugationType:
    """
    Determine the inflection class of a word.

    Args:
        word: Dictionary form, optionally in furigana notation.
        tags: Tags of the word (normalized spelling, e.g. 'v5る', 'adj-い').

    Returns:
        The first matching class in priority order, or NONE.

    Examples:
        >>> get_conjugation_type("作る", {"v5る"})
        <ConjugationType.GODAN: 'godan'>
        >>> get_conjugation_type("犬", {"n"})
        <ConjugationType.NONE: 'none'>
    """
    if not word or word[-1] not in INFLECTING_ENDINGS:
        return ConjugationType.NONE

    tags = set(tags)

    if "adj-いx" in tags:
        return ConjugationType.IX_ADJECTIVE
    if "adj-い" in tags:
        return ConjugationType.I_ADJECTIVE
    if "adj-な" in tags:
        return ConjugationType.NA_ADJECTIVE
    if "v5る-i" in tags:
        return ConjugationType.ARU
    if "vくる" in tags:
        return ConjugationType.KURU
    if "vする-i" in tags or "vする-s" in tags:
        return ConjugationType.SURU
    if any(tag.startswith("v5") for tag in tags):
        return ConjugationType.GODAN
    if any(tag.startswith("v1") for tag in tags):
        return ConjugationType.ICHIDAN

    return ConjugationType.NONE


def get_find_regex(word: str, tags: Iterable[str]) -> str:
    """
    Build the regular expression matching the inflected forms of a word.

    Args:
        word: Dictionary form, optionally in furigana notation.
        tags: Tags of the word.

    Returns:
        A regular expression string.

    Raises:
        UnsupportedInflectionEnding: For godan verbs whose ending has no
            conjugation table.

    Example:
        >>> bool(re.search(get_find_regex("作る", {"v5る"}), "作った"))
        True
    """
    tags = set(tags)
    conj_type = get_conjugation_type(word, tags)

    escaped = re.escape(word)
    ending = word[-1] if word else ""
    stem = re.escape(word[:-1])

    if conj_type == ConjugationType.NONE:
        return f" ?{escaped}"

    if conj_type == ConjugationType.I_ADJECTIVE:
        return f"{stem}(?:{_alternation(I_ADJECTIVE_SUFFIXES)})"

    if conj_type == ConjugationType.NA_ADJECTIVE:
        return f"{escaped}(?:{_alternation(NA_ADJECTIVE_SUFFIXES)})"

    if conj_type == ConjugationType.ICHIDAN:
        return f"{stem}(?:{_alternation(ICHIDAN_SUFFIXES)})"

    if conj_type == ConjugationType.GODAN:
        if ending not in GODAN_ENDINGS:
            raise UnsupportedInflectionEnding(word, ending)
        if ending == 'く' and IKU_TAG in tags:
            endings = IKU_ENDINGS
        else:
            endings = GODAN_ENDINGS[ending]
        return f" ?{stem}(?:{_alternation(endings)})"

    return IRREGULAR_PATTERNS[conj_type]


def highlight_word(text: str, word: str, tags: Iterable[str]) -> Optional[str]:
    """
    Wrap every occurrence of a word's inflected forms in ``<b>`` tags.

    Args:
        text: Sentence to highlight.
        word: Dictionary form of the word.
        tags: Tags of the word.

    Returns:
        The highlighted sentence, or None if the word does not occur.

    Example:
        >>> highlight_word("ケーキを作った。", "作る", {"v5る"})
        'ケーキを<b>作った</b>。'
    """
    if not word:
        return None

    highlighted, count = re.subn(get_find_regex(word, tags), r"<b>\g<0></b>", text)
    if count == 0:
        return None
    return highlighted
