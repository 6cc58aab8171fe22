import re

from lexicon.translations import translate_token

# \w is unicode-aware, so Cyrillic letters survive alongside Latin ones.
_PUNCTUATION = re.compile(r"[^\w\s]")


def tokenize(text: str) -> list[str]:
    """Lower-case, strip punctuation, split on whitespace, drop 1-char tokens."""
    cleaned = _PUNCTUATION.sub(" ", text.lower())
    return [word for word in cleaned.split() if len(word) > 1]


def translate_tokens(tokens: list[str]) -> list[str]:
    return [translate_token(token) for token in tokens]


def prepare_tokens(text: str) -> list[str]:
    """Tokenize and map Russian terms to canonical English keywords."""
    return translate_tokens(tokenize(text))
