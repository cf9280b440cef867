"""Divergence between an original text and one of its back-translations.

Score = Jaccard distance between the content-word sets of the two texts,
as an integer percentage. 0 means every content word survived, 100 means
none did.

Normalization, per text:
  1. Unicode NFKC, then casefold
  2. Every punctuation (P*) or symbol (S*) code point becomes a space
  3. Whitespace split into a set of tokens
  4. Tokens in STOP_WORDS are dropped

Stop words and normalization form a versioned contract. Any change to
either MUST bump DIVERGENCE_POLICY_VERSION so scores from different
versions are never compared silently.
"""

from __future__ import annotations

import math
import unicodedata

DIVERGENCE_POLICY_VERSION = "3"

# Short function words per catalog language, space separated. Negations
# are content and never listed. Japanese, Chinese and Korean attach their
# particles to words, so whitespace tokens carry no stand-alone function
# words for them.
FUNCTION_WORDS_BY_LANGUAGE: dict[str, str] = {
    "EN": (
        "a an and are as at be been but by can could did do does for from "
        "had has have he her him his how i if in into is it its may me might "
        "must my of on or our shall she should so than that the their them "
        "then there these they this those to us was we were what when where "
        "which who why will with would you your"
    ),
    "DE": (
        "der die das den dem des ein eine einen einem einer eines und ist "
        "sind mit zu zum zur im in von auf aus bei nach für es er sie ich wir "
        "ihr ihre sich auch als wie dass"
    ),
    "FR": (
        "le la les un une et est du de des au aux ce cette il ils elle elles "
        "je tu on nous vous en pour dans que qui sur par se sa ses lui leur "
        "mais ou avec"
    ),
    "ES": (
        "el la los las un una y de del al en es por que su sus para como "
        "pero yo tú él ella nosotros ellos lo se con"
    ),
    "IT": (
        "il lo la i gli le un uno una di del della dei e è che in con per su "
        "da al alla ma io lui lei noi"
    ),
    "PT": (
        "o a os as um uma de do da dos das em na nas ao que é com para por "
        "se eu ele ela nós eles mas ou"
    ),
    "NL": (
        "de het een en van in op is dat die te met voor zijn ik je hij zij "
        "wij maar of aan als er om"
    ),
    "PL": (
        "i w we z ze na do o się że jest to jak ale od po za dla ten ta jej "
        "jego ja ty on ona my wy oni"
    ),
    "RU": (
        "и в во на с со к ко по за из от до о об у что это как а но да же "
        "бы он она оно они я ты мы вы его её ее их"
    ),
    "UK": (
        "і й та в у на з із до по за від що це як а але він вона воно вони "
        "я ти ми ви його її їх"
    ),
    "BG": (
        "и в във на за от с със да е се че по до към той тя то те аз ти ние "
        "вие това този тази"
    ),
    "EL": (
        "και το τα ο η οι του της των τον την τους τις ένα ένας μια μία σε "
        "στο στη στην στον στα στις στους με από για να θα είναι που ότι "
        "αυτό αυτή αυτός"
    ),
    "SV": (
        "och i är det en ett som på till av med för jag han hon vi de den "
        "har var att"
    ),
    "DA": (
        "og i er det en et som på til af med for jeg han hun vi de den har "
        "var at"
    ),
    "NB": (
        "og i er det en et som på til av med for jeg han hun vi de den har "
        "var å"
    ),
    "FI": "ja on se että kun hän minä sinä me te he tämä oli",
    "CS": "a i v ve na se s z ze do k o je to že jak ale by si",
    "SK": "a aj v vo na sa s z zo do k o je to že ako ale by som",
    "SL": (
        "in je v na z s za da so se pa ki to ta jaz ti on ona mi vi oni od "
        "do po pri ali"
    ),
    "HU": "a az egy és is hogy van volt de meg ez azt csak mint",
    "RO": "și şi în la de cu pe un o este că din care sau ce",
    "TR": "ve bir bu da de ile için ki ben sen o biz siz onlar mi mı mu mü",
    "ID": (
        "dan yang di ke dari ini itu dengan untuk adalah saya dia kami kita "
        "mereka akan pada"
    ),
    "LT": "ir į yra kad su iš ant per tai jis ji aš tu mes jūs bet o kaip",
    "LV": "un ir ar uz par ka kā bet tas tā viņš viņa es tu mēs jūs pie lai",
    "ET": "ja on et ka see ta ma sa me te nad kui aga või oli ning",
    "AR": "و في من على إلى عن مع هذا هذه ذلك التي الذي أن إن أو ثم هو هي كان قد",
}

_DROPPED_CATEGORIES = ("P", "S")


def _fold(text: str) -> str:
    return unicodedata.normalize("NFKC", text).casefold()


# Folded the same way as input text: Greek final sigma casefolds to σ.
STOP_WORDS: frozenset[str] = frozenset(
    _fold(word)
    for words in FUNCTION_WORDS_BY_LANGUAGE.values()
    for word in words.split()
)


def _strip_punctuation_and_symbols(text: str) -> str:
    return "".join(
        " " if unicodedata.category(ch)[0] in _DROPPED_CATEGORIES else ch
        for ch in text
    )


def normalize(text: str) -> str:
    """Apply steps 1-2 of the policy and collapse whitespace."""
    text = _strip_punctuation_and_symbols(_fold(text))
    return " ".join(text.split())


def content_words(text: str) -> frozenset[str]:
    """Set of normalized tokens of *text* with stop words removed."""
    return frozenset(
        token for token in normalize(text).split() if token not in STOP_WORDS
    )


def compute_divergence(original: str, back_translated: str) -> int:
    """Divergence score in [0, 100] between *original* and *back_translated*.

    Symmetric in its arguments. Two texts with no content words at all
    score 0; if only one side has content words the score is 100.
    """
    words_a = content_words(original)
    words_b = content_words(back_translated)

    if not words_a and not words_b:
        return 0
    if not words_a or not words_b:
        return 100

    similarity = len(words_a & words_b) / len(words_a | words_b)
    # Half-up rounding; round() would use banker's rounding on .5
    divergence = math.floor((1 - similarity) * 100 + 0.5)
    return max(0, min(100, divergence))
