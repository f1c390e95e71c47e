"""Implements parsing of syntax descriptors, as defined by the ["CSS Properties and Values API Level 1"](http://drafts.css-houdini.org/css-properties-values-api-1) specification.

A syntax descriptor (the value of the `syntax` descriptor of `@property` rules, or of the `syntax` member given to `CSS.registerProperty`) describes the grammar accepted by a registered custom property, e.g. `<length> | <percentage>#` or `*`. Parsing turns such a string into a `Descriptor` (see `cssprops.values`); what the descriptor then means for the values of a property is up to the caller.

# Deviations

* The specification parses from a preprocessed input stream, but no preprocessing is applied here to the descriptor as a whole; instead CR and LF are treated as white-space by the parser, and identifiers are tokenized (`cssprops.syntax.tokenizing`) with preprocessing of their own
* The specification has `|` precede every component but the first; the parser only checks that `|` does not precede the first component, and accepts components with nothing but white-space between them, e.g. `foo bar` parses the same as `foo | bar`
* Failure is reported by raising an exception (a subclass of `SyntaxDescriptorError`) identifying the cause, where the specification simply returns "failure"
"""

from .defaults import default_impl
from .syntax.tokenizing import IdentToken, normalize_input, tokenize
from .utils import CP, ParseError, trim_ascii_whitespace
from .values import Component, ComponentName, DataTypeName, Descriptor, IdentName, Impl, Multiplier

from collections.abc import Callable

class SyntaxDescriptorError(ParseError):
    """Class of errors that make a string fail to parse as a syntax descriptor.

    Every failure is terminal, the parser neither recovers from it nor produces a partial descriptor.
    """
    position: int | None # Offset into the [trimmed] input where the error was detected, if known
    def __init__(self, *args, position: int | None = None):
        super().__init__(*args)
        self.position = position

class EmptyInputError(SyntaxDescriptorError):
    """The input is empty, or consists of white-space only."""
    pass

class UnexpectedEOFError(SyntaxDescriptorError):
    """The input ended where a component was expected."""
    pass

class UnexpectedPipeError(SyntaxDescriptorError):
    """A `|` precedes the first component."""
    pass

class InvalidNameStartError(SyntaxDescriptorError):
    """A component starts with a code point that can neither start a data type name nor an identifier."""
    pass

class InvalidNameError(SyntaxDescriptorError):
    """A component does not start with a valid identifier, or the identifier is not a valid custom identifier (e.g. `inherit`)."""
    pass

InvalidCustomIdentError = InvalidNameError # Alias, the two causes are not told apart

class UnclosedDataTypeNameError(SyntaxDescriptorError):
    """The input ended before the `>` closing a data type name."""
    pass

class UnknownDataTypeNameError(SyntaxDescriptorError):
    """The text between `<` and `>` is not a data type name."""
    pass

def is_whitespace(cp: CP) -> bool:
    """Determine if a code point is white-space, as far as parsing of syntax descriptors is concerned.

    This is http://drafts.csswg.org/css-syntax/#whitespace with CR (which preprocessing would have turned into LF) added.
    """
    return cp in ('\t', '\n', '\r', ' ')

def is_letter(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#letter."""
    return ('A' <= cp <= 'Z') or ('a' <= cp <= 'z')

def is_non_ascii(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#non-ascii-code-point."""
    return cp >= '\x80'

def is_name_start(cp: CP) -> bool:
    """See http://drafts.csswg.org/css-syntax/#name-start-code-point."""
    return is_letter(cp) or is_non_ascii(cp) or cp == '_'

def ignore_parser_error(*args) -> None:
    """The default handler of recoverable errors reported while tokenizing identifiers, which ignores them.

    Parsing a descriptor does no I/O by default; pass `cssprops.utils.parser_error` as `parser_error` to have such errors printed with the stack instead.
    """
    pass

def parse(input: str, *, parser_error: Callable[..., None] = ignore_parser_error) -> Descriptor:
    """Parse a syntax descriptor, with data type names and custom identifiers of the default implementation (see `cssprops.defaults`).

    E.g. `parse('foo <length>#')` returns a descriptor with two components -- the custom identifier `foo`, and the `length` data type name with the comma multiplier.

    :raises SyntaxDescriptorError: if `input` is not a valid syntax descriptor
    """
    return parse_with(default_impl, input, parser_error=parser_error)

def parse_with(impl: Impl, input: str, *, parser_error: Callable[..., None] = ignore_parser_error) -> Descriptor:
    """Parse a syntax descriptor or the universal syntax descriptor, resolving names with a given implementation.

    Implements http://drafts.css-houdini.org/css-properties-values-api-1/#consume-syntax-descriptor.

    :param impl: The implementation to resolve data type names and custom identifiers with
    :param input: The text to parse
    :param parser_error: Handler of recoverable errors reported while tokenizing identifiers (see `cssprops.syntax.tokenizing.tokenize`); these never fail the parse, and are ignored unless a handler is given
    :returns: The parsed descriptor; it's empty (`is_universal`) for `*`
    :raises SyntaxDescriptorError: (a subclass of) if `input` is not a valid syntax descriptor
    """
    input = trim_ascii_whitespace(input)
    if not input:
        raise EmptyInputError(position=0)
    if input == '*':
        return Descriptor.universal()
    position = 0
    components: list[Component] = []
    def peek() -> CP:
        """Return the next code point, or the empty string at the end of input."""
        return input[position:position + 1]
    def consume(n: int = 1) -> None:
        nonlocal position
        position += n
    def skip_whitespace() -> None:
        while peek() and is_whitespace(peek()):
            consume()
    def parse_data_type_name() -> ComponentName:
        """See http://drafts.css-houdini.org/css-properties-values-api-1/#consume-data-type-name."""
        end = input.find('>', position)
        if end < 0:
            raise UnclosedDataTypeNameError(position=len(input))
        data_type = impl.data_type_name_from_str(input[position:end])
        if data_type is None:
            raise UnknownDataTypeNameError(input[position:end], position=position)
        consume(end + 1 - position)
        return DataTypeName(data_type)
    def parse_ident() -> ComponentName:
        token = next(tokenize(normalize_input(input[position:]), parser_error=parser_error), None)
        if not isinstance(token, IdentToken):
            raise InvalidNameError(position=position)
        ident = impl.custom_ident_from_ident(token.value)
        if ident is None:
            raise InvalidNameError(token.value, position=position)
        consume(len(token.source))
        return IdentName(ident)
    def parse_name() -> ComponentName:
        match peek():
            case '':
                raise UnexpectedEOFError(position=position)
            case '<':
                consume()
                return parse_data_type_name()
            case cp if cp != '\\' and not is_name_start(cp):
                raise InvalidNameStartError(cp, position=position)
            case _:
                return parse_ident()
    def parse_multiplier() -> Multiplier | None:
        """See http://drafts.css-houdini.org/css-properties-values-api-1/#consume-a-multiplier."""
        match peek():
            case '+' | '#' as cp:
                consume()
                return Multiplier(cp)
            case _:
                return None
    def parse_component() -> Component:
        """See http://drafts.css-houdini.org/css-properties-values-api-1/#consume-syntax-component."""
        skip_whitespace()
        name = parse_name()
        multiplier = None if name.is_pre_multiplied(impl) else parse_multiplier()
        return Component(name=name, multiplier=multiplier)
    while True:
        match peek():
            case '':
                if not components:
                    raise UnexpectedEOFError(position=position)
                return Descriptor(components)
            case cp if is_whitespace(cp):
                consume()
                continue
            case '|':
                if not components:
                    raise UnexpectedPipeError(position=position)
                consume()
        components.append(parse_component())
