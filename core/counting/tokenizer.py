"""
Tokenizer - Tach mot dong text thanh cac word.

Word = maximal run cua Unicode letters (str.isalpha()).
Digits, underscore, punctuation, whitespace va symbols deu la separators.
"""

import re
from typing import Iterator

# [^\W\d_] = word characters tru digits va underscore -> chi con letters
_WORD_RE = re.compile(r"[^\W\d_]+")

# Word ngan hon nguong nay bi bo qua (vd: "a", "I")
DEFAULT_MIN_LENGTH = 2


def iter_words(line: str) -> Iterator[str]:
    """
    Lazy sequence cac maximal letter runs trong line.

    Args:
        line: Mot dong text

    Returns:
        Iterator cac words theo thu tu xuat hien, chua fold
    """
    for match in _WORD_RE.finditer(line):
        word = match.group(0)
        # \w cua re bao gom mot so ky tu khong phai letter (vd: combining marks)
        if word.isalpha():
            yield word
        else:
            yield from _split_non_alpha(word)


def _split_non_alpha(run: str) -> Iterator[str]:
    """Tach tiep mot run theo str.isalpha() tung ky tu."""
    start = None
    for i, ch in enumerate(run):
        if ch.isalpha():
            if start is None:
                start = i
        elif start is not None:
            yield run[start:i]
            start = None
    if start is not None:
        yield run[start:]


def fold(word: str) -> str:
    """Case folding truoc khi luu vao table."""
    return word.lower()


def is_countable(word: str, min_length: int = DEFAULT_MIN_LENGTH) -> bool:
    """Minimum-length filter: giu word co it nhat min_length ky tu."""
    return len(word) >= min_length


def tokenize(line: str, min_length: int = DEFAULT_MIN_LENGTH) -> Iterator[str]:
    """
    Words da fold va da qua minimum-length filter.

    Args:
        line: Mot dong text (da strip hoac chua)
        min_length: So ky tu toi thieu

    Returns:
        Iterator cac words lowercase
    """
    for word in iter_words(line):
        folded = fold(word)
        if is_countable(folded, min_length):
            yield folded
