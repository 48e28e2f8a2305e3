"""
Derivation of output field names from identifiers.
"""

from typing import List

_LOWER = 1
_UPPER = 2
_DIGIT = 3
_OTHER = 4


def _char_class(ch: str) -> int:
    if ch.islower():
        return _LOWER
    if ch.isupper():
        return _UPPER
    if ch.isdigit():
        return _DIGIT
    return _OTHER


def split_camel(s: str) -> List[str]:
    """
    Split s on character class transitions.

    An uppercase run followed by lowercase letters gives its last letter to
    the lowercase word, so "PDFLoader" splits into "PDF" and "Loader".

    >>> split_camel("myFieldName")
    ['my', 'Field', 'Name']
    >>> split_camel("GL11Version")
    ['GL', '11', 'Version']
    """
    runs: List[str] = []
    last = 0
    for ch in s:
        cls = _char_class(ch)
        if runs and cls == last:
            runs[-1] += ch
        else:
            runs.append(ch)
        last = cls

    for i in range(len(runs) - 1):
        if runs[i][0].isupper() and runs[i + 1][0].islower():
            runs[i + 1] = runs[i][-1] + runs[i + 1]
            runs[i] = runs[i][:-1]

    return [r for r in runs if r]


def snakecase(identifier: str) -> str:
    """
    Convert an identifier into a lowercase, underscore separated name.

    Leading underscores are dropped. Existing underscores are treated as
    word boundaries, so snake_case identifiers come back unchanged.

    >>> snakecase("myFieldName")
    'my_field_name'
    >>> snakecase("SimpleXMLParser")
    'simple_xml_parser'
    >>> snakecase("_retry_count")
    'retry_count'
    """
    words: List[str] = []
    for part in identifier.split("_"):
        words.extend(w.lower() for w in split_camel(part))
    return "_".join(words)
