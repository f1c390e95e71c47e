"""Implements the parts of the [Syntax] specification related to tokenization (see sections 3 and 4) that parsing of syntax descriptors needs.

Syntax descriptors only ever ask the tokenizer for an `<ident-token>` (see `cssprops.properties`), so only the token types that may result from tokenizing the start of a name are implemented: white-space, identifiers, functions and "delim" tokens, the latter standing in for every other kind of token. In particular, `url(` is tokenized as a function token, and there are no string, number or comment tokens.

As with the complete tokenizer, filtering of code points mandated by the specification is reversible (see the `source` attribute on `Token`), which lets the caller tell exactly how much of the input text a token spans.
"""

from .preprocessing import filter_code_points, FilteredCodePoint
from ..utils import CP, BufferedPeekingReader, is_surrogate_code_point_ordinal, IteratorReader, join, parser_error, PeekingUnreadingReader

from abc import ABC
from collections.abc import Callable, Iterable, Iterator
from dataclasses import dataclass

from typing import TypeVar

@dataclass(frozen=True, kw_only=True, slots=True)
class Token(ABC):
    """A class of objects that group code point sequences as part of tokenization."""
    source: str # The original text in the input that the token is formed from

@dataclass(frozen=True, kw_only=True, slots=True)
class WhitespaceToken(Token):
    value: str

@dataclass(frozen=True, kw_only=True, slots=True)
class IdentToken(Token):
    value: str # The identifier with escapes decoded

@dataclass(frozen=True, kw_only=True, slots=True)
class FunctionToken(Token):
    value: str # The function name, without the opening parenthesis

@dataclass(frozen=True, kw_only=True, slots=True)
class DelimToken(Token):
    value: str

def tokenize(input: PeekingUnreadingReader[FilteredCodePoint], *, parser_error: Callable[..., None] = parser_error) -> Iterator[Token]:
    """Generate a sequence of tokens from a sequence of [filtered] code points.

    Tokens are generated lazily, so a caller interested only in the token at the start of the input pays for tokenizing just that.

    Implements (parts of) http://drafts.csswg.org/css-syntax/#css-tokenize.

    :param input: Filtered code points to tokenize, see `normalize_input`
    :param parser_error: Callable invoked with a message whenever the specification calls for reporting a parse error; tokenization continues after the call
    """
    consumed: list[FilteredCodePoint] = [] # Code points consumed for the token being formed
    def current_cp() -> FilteredCodePoint:
        """See http://drafts.csswg.org/css-syntax/#current-input-code-point."""
        return consumed[-1]
    def next(n: int) -> str:
        """See http://drafts.csswg.org/css-syntax/#next-input-code-point."""
        return join(input.peek(n))
    def consume(n: int) -> None:
        """Consume `n` code points, or the empty string standing for EOF if the input is exhausted."""
        consumed.extend(input.read(n) or [ FilteredCodePoint('', source='') ])
    def reconsume() -> None:
        """See http://drafts.csswg.org/css-syntax/#reconsume-the-current-input-code-point."""
        input.unread([ consumed.pop() ])
    T = TypeVar('T', bound=Token)
    def sourced(cls: type[T]) -> Callable[..., T]:
        """Return a callable constructing a token of class `cls`, with `source` initialized from the code points consumed so far."""
        return lambda **kwargs: cls(**kwargs, source=join(cp.source for cp in consumed))
    def is_valid_escape(cps: str | None = None) -> bool:
        """See http://drafts.csswg.org/css-syntax/#starts-with-a-valid-escape."""
        if cps is None:
            cps = current_cp() + next(1)
        return cps[0:1] == '\\' and not is_newline(cps[1:2])
    def consume_escaped_code_point() -> CP:
        """See http://drafts.csswg.org/css-syntax/#consume-escaped-code-point."""
        consume(1)
        match current_cp():
            case cp if is_hex_digit(cp):
                digits = cp
                while is_hex_digit(cp := next(1)) and len(digits) < 6:
                    consume(1)
                    digits += cp
                if is_whitespace(next(1)):
                    consume(1)
                num = int(digits, 16)
                return '\ufffd' if (num == 0 or is_surrogate_code_point_ordinal(num) or num > 0x10ffff) else chr(num)
            case '':
                parser_error('Escape sequence cut short by the end of input.')
                return '\ufffd'
            case _ as cp:
                return cp
    def consume_ident_sequence() -> str:
        """See http://drafts.csswg.org/css-syntax#consume-name."""
        result = ''
        while True:
            consume(1)
            match current_cp():
                case cp if is_ident_code_point(cp):
                    result += cp
                case _ if is_valid_escape():
                    result += consume_escaped_code_point()
                case '':
                    consumed.pop() # EOF is not part of any token's source
                    return result
                case _:
                    reconsume()
                    return result
    def consume_ident_like_token() -> FunctionToken | IdentToken:
        """See http://drafts.csswg.org/css-syntax/#consume-ident-like-token."""
        string = consume_ident_sequence()
        if next(1) == '(':
            consume(1)
            return sourced(FunctionToken)(value=string)
        return sourced(IdentToken)(value=string)
    def consume_token() -> Token | None:
        """See http://drafts.csswg.org/css-syntax#consume-token."""
        assert not consumed
        consume(1)
        match current_cp():
            case cp if is_whitespace(cp):
                while is_whitespace(next(1)):
                    consume(1)
                return sourced(WhitespaceToken)(value=join(consumed))
            case '\\' as cp:
                if is_valid_escape():
                    reconsume()
                    return consume_ident_like_token()
                parser_error('Invalid escape.')
                return sourced(DelimToken)(value=cp)
            case '-' as cp:
                if starts_ident_sequence():
                    reconsume()
                    return consume_ident_like_token()
                return sourced(DelimToken)(value=cp)
            case cp if is_ident_start_code_point(cp):
                reconsume()
                return consume_ident_like_token()
            case '':
                return None
            case _ as cp:
                return sourced(DelimToken)(value=cp)
    def starts_ident_sequence() -> bool:
        """See http://drafts.csswg.org/css-syntax#would-start-an-identifier."""
        cps = current_cp() + next(2)
        match cps[0:1]:
            case '-':
                return is_ident_start_code_point(cp := cps[1:2]) or cp == '-' or is_valid_escape(cps[1:3])
            case '\\':
                return is_valid_escape(cps[0:2])
            case cp:
                return is_ident_start_code_point(cp)
    while token := consume_token():
        yield token
        consumed.clear()

def normalize_input(input: str | Iterable[str]) -> PeekingUnreadingReader[FilteredCodePoint]:
    """Normalize input to the tokenization procedure.

    :param input: Either a [regular Python] string or an iterable of strings, interpreted as _unfiltered_ code points
    :returns: An object vending filtered code points of `input` on demand, fit for passing to `tokenize`
    """
    return BufferedPeekingReader(IteratorReader(filter_code_points(input if isinstance(input, str) else join(input))))

def is_digit(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#digit."""
    return '0' <= cp <= '9'

def is_hex_digit(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#hex-digit."""
    return is_digit(cp) or ('A' <= cp <= 'F') or ('a' <= cp <= 'f')

def is_ident_code_point(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#ident-code-point."""
    return is_ident_start_code_point(cp) or is_digit(cp) or cp == '-'

def is_ident_start_code_point(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#ident-start-code-point."""
    return ('A' <= cp <= 'Z') or ('a' <= cp <= 'z') or is_non_ascii_ident_code_point(cp) or cp == '_'

def is_newline(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#newline (filtering leaves LF as the only newline)."""
    return cp == '\n'

def is_non_ascii_ident_code_point(cp: CP) -> bool:
    """Determine if a code point is a non-ASCII ident code point.

    Every code point from U+0080 upwards is one, as with http://www.w3.org/TR/2021/CRD-css-syntax-3-20211224/#non-ascii-code-point, rather than the narrower ranges of the current draft; this keeps the tokenizer in agreement with the name-start rule of `cssprops.properties`.
    """
    return cp >= '\x80'

def is_whitespace(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#whitespace."""
    return is_newline(cp) or cp in ('\t', ' ')
