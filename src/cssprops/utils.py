"""Set of constructs shared by the rest of the package, both package-specific ones and general-purpose ones that would otherwise warrant third-party dependencies."""

import sys
from traceback import print_stack

from collections.abc import Iterable, Iterator, Sequence
from typing import AnyStr, Protocol, runtime_checkable, TypeAlias, TypeVar

T = TypeVar('T')
T_co = TypeVar('T_co', covariant=True)

CP: TypeAlias = str # [Unicode] code points are strings of length 1, with the empty string standing for the end-of-stream condition

@runtime_checkable
class Reader(Protocol[T_co]):
    """An interface to readers, for type checking purposes mostly."""
    def read(self, size: int = -1, /) -> Sequence[T_co]:
        """See Python's own `IOBase.read` in the `io` module."""
        raise NotImplementedError

@runtime_checkable
class PeekingUnreadingReader(Protocol[T]):
    """The protocol of readers that also allow looking ahead at what the next `read` will return, and inserting already read items back at the front of the stream.

    The tokenizer consumes its input through this protocol, since the CSS Syntax specification is written in terms of "next input code point" and "reconsume the current input code point".
    """
    def read(self, size: int = -1, /) -> Sequence[T]:
        raise NotImplementedError
    def peek(self, size: int, /) -> Sequence[T]:
        """Return up to `size` items available for reading, without consuming them.

        The returned sequence is shorter than `size` only if the end of the stream was reached.
        """
        raise NotImplementedError
    def unread(self, items: Iterable[T]) -> None:
        """Insert `items` back at the front of the stream, so that the next `read` returns them first, in the same order."""
        raise NotImplementedError

class BufferedPeekingReader(PeekingUnreadingReader[T]):
    """Class of readers that conform to `PeekingUnreadingReader` by keeping a buffer in front of some other reader.

    Items are only pulled from the source reader when peeking or reading demands more of them than the buffer holds.
    """
    _source: Reader[T]
    _buffer: list[T]
    def __init__(self, source: Reader[T]):
        self._source = source
        self._buffer = []
    def peek(self, size: int, /) -> Sequence[T]:
        assert size >= 0 # Negative sizes, while meaningful for `IOBase.read`, are never used with this reader
        if (shortfall := size - len(self._buffer)) > 0:
            self._buffer += self._source.read(shortfall)
        return self._buffer[:size]
    def read(self, size: int = -1, /) -> Sequence[T]:
        items = self.peek(size)
        del self._buffer[:size]
        return items
    def unread(self, items: Iterable[T]) -> None:
        self._buffer[:0] = items

class IteratorReader(Reader[T]):
    """Class of readers vending items of an iterator, any number of them per `read` call."""
    _source: Iterator[T]
    def __init__(self, source: Iterator[T]):
        self._source = source
    def read(self, size: int = -1, /) -> Sequence[T]:
        result: list[T] = []
        while len(result) != size:
            try:
                result.append(next(self._source))
            except StopIteration:
                break
        return result

def join(iterable: Iterable[str]) -> str:
    """Join a sequence of strings into a string."""
    return ''.join(iterable)

class ParseError(RuntimeError):
    """A [catch-all] class of errors that occur during or otherwise related to parsing."""
    pass

def parser_error(message: str = 'Parsing encountered an error.') -> None:
    """The "default" handler of recoverable parse errors.

    The CSS Syntax specification asks for parse errors to be "reported" in some places where tokenization nevertheless carries on (e.g. an escape sequence cut short by the end of input), without defining how. The tokenizer accepts a `parser_error` keyword argument defaulting to this procedure (descriptor parsing defaults to ignoring such errors instead), which prints the stack (giving the context of the error) and a message, to the standard error stream.

    See also http://drafts.csswg.org/css-syntax/#parse-error.

    :param message: Short description of the condition
    """
    print_stack()
    sys.stderr.write(f'\n{message}\n')

ASCII_WHITESPACE = '\t\n\x0c\r ' # See http://infra.spec.whatwg.org/#ascii-whitespace; note how U+000B VERTICAL TAB is absent

def trim_ascii_whitespace(input: AnyStr) -> AnyStr:
    """Strip leading and trailing ASCII whitespace from a string (or a byte string).

    E.g. `trim_ascii_whitespace(' \\t foo bar \\n')` returns `'foo bar'`, while empty or all-whitespace input yields an empty value of the same type.

    Implements http://infra.spec.whatwg.org/#strip-leading-and-trailing-ascii-whitespace.
    """
    return input.strip(ASCII_WHITESPACE if isinstance(input, str) else ASCII_WHITESPACE.encode('ascii')) # type: ignore # Both branches produce the same type as `input`, which MyPy cannot infer through `isinstance`

def ascii_lowercase(s: str) -> str:
    """Replace every ASCII upper case letter in a string with the corresponding lower case letter, leaving all other code points intact.

    Unlike `str.lower`, this never turns a non-ASCII code point into an ASCII one (e.g. `'\\u212a'`, KELVIN SIGN, stays put).

    Implements http://infra.spec.whatwg.org/#ascii-lowercase.
    """
    return join((chr(ord(cp) + 0x20) if 'A' <= cp <= 'Z' else cp) for cp in s)

def is_surrogate_code_point_ordinal(o: int) -> bool:
    """Determine if an ordinal value denotes a so-called surrogate code point, see http://infra.spec.whatwg.org/#surrogate."""
    return 0xd800 <= o <= 0xdfff
