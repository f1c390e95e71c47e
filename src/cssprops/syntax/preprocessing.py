"""Preprocessing of input to tokenization, per http://drafts.csswg.org/css-syntax/#input-preprocessing."""

from ..utils import CP, is_surrogate_code_point_ordinal

from collections.abc import Iterable, Iterator

class FilteredCodePoint(CP):
    """Class of code points produced by filtering, which remember the text they were filtered from.

    E.g. a CR LF pair filters to a single `'\\n'` whose `source` is `'\\r\\n'`. The tokenizer relies on `source` to tell how much of the original text a token spans.
    """
    source: str
    def __new__(cls, value: str, *, source: str):
        obj = super().__new__(cls, value)
        assert len(obj) <= 1 # A single code point, or the empty string standing for end of input
        obj.source = source
        return obj

def filter_code_points(input: Iterable[CP]) -> Iterator[FilteredCodePoint]:
    """See http://drafts.csswg.org/css-syntax/#css-filter-code-points."""
    pending_cr = False
    for cp in input:
        if pending_cr:
            pending_cr = False
            if cp == '\n':
                yield FilteredCodePoint('\n', source='\r\n')
                continue
            yield FilteredCodePoint('\n', source='\r')
        match cp:
            case '\r':
                pending_cr = True # Whether it is followed by LF is only known after the next code point
            case '\f':
                yield FilteredCodePoint('\n', source=cp)
            case '\0':
                yield FilteredCodePoint('\ufffd', source=cp)
            case _ if is_surrogate_code_point_ordinal(ord(cp)):
                yield FilteredCodePoint('\ufffd', source=cp)
            case _:
                yield FilteredCodePoint(cp, source=cp)
    if pending_cr:
        yield FilteredCodePoint('\n', source='\r')
