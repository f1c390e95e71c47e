"""Tests for parsing of syntax descriptors."""

from dataclasses import dataclass
from enum import StrEnum

import pytest

from cssprops.defaults import CustomIdent, DataType, default_impl
from cssprops.properties import (
    EmptyInputError,
    InvalidCustomIdentError,
    InvalidNameError,
    InvalidNameStartError,
    SyntaxDescriptorError,
    UnclosedDataTypeNameError,
    UnexpectedEOFError,
    UnexpectedPipeError,
    UnknownDataTypeNameError,
    is_name_start,
    is_whitespace,
    parse,
    parse_with,
)
from cssprops.utils import ParseError, parser_error
from cssprops.values import Component, DataTypeName, Descriptor, IdentName, Multiplier


def ident(name: str, multiplier: Multiplier | None = None) -> Component:
    return Component(name=IdentName(CustomIdent(name)), multiplier=multiplier)


def data_type(value: DataType, multiplier: Multiplier | None = None) -> Component:
    return Component(name=DataTypeName(value), multiplier=multiplier)


# ---------------------------------------------------------------------------
# Universal and empty descriptors
# ---------------------------------------------------------------------------


class TestUniversal:
    @pytest.mark.parametrize("syntax", ["*", " * ", "* ", "\t*\t", "\n*\x0c"])
    def test_universal(self, syntax: str) -> None:
        descriptor = parse(syntax)
        assert descriptor == Descriptor.universal()
        assert descriptor.is_universal

    def test_asterisk_among_components_is_not_universal(self) -> None:
        with pytest.raises(InvalidNameStartError):
            parse("* | foo")

    def test_double_asterisk(self) -> None:
        with pytest.raises(InvalidNameStartError):
            parse("**")


class TestEmptyInput:
    @pytest.mark.parametrize("syntax", ["", " ", "\t", "\n\r\x0c ", "   \t  "])
    def test_empty(self, syntax: str) -> None:
        with pytest.raises(EmptyInputError):
            parse(syntax)


# ---------------------------------------------------------------------------
# Components
# ---------------------------------------------------------------------------


class TestComponents:
    def test_ident_and_multiplied_data_type(self) -> None:
        assert parse("foo <length>#") == Descriptor([ident("foo"), data_type(DataType.length, Multiplier.comma)])

    def test_pipe_separated(self) -> None:
        assert list(parse("foo|<length>")) == [ident("foo"), data_type(DataType.length)]

    def test_pipe_separated_with_whitespace(self) -> None:
        assert list(parse("<length> | <percentage>+ | auto#")) == [
            data_type(DataType.length),
            data_type(DataType.percentage, Multiplier.space),
            ident("auto", Multiplier.comma),
        ]

    def test_single_ident(self) -> None:
        assert list(parse("foo")) == [ident("foo")]

    def test_ident_with_multiplier(self) -> None:
        assert list(parse("foo+")) == [ident("foo", Multiplier.space)]

    @pytest.mark.parametrize("value", list(DataType))
    def test_every_data_type_name(self, value: DataType) -> None:
        assert list(parse(f"<{value}>")) == [data_type(value)]

    def test_whitespace_separated_components_accepted(self) -> None:
        assert list(parse("foo bar\t<number>\r\nbaz")) == [
            ident("foo"),
            ident("bar"),
            data_type(DataType.number),
            ident("baz"),
        ]

    def test_adjacent_components_without_whitespace(self) -> None:
        assert list(parse("<length><number>")) == [data_type(DataType.length), data_type(DataType.number)]

    def test_escaped_ident(self) -> None:
        assert list(parse(r"\66 oo | bar")) == [ident("foo"), ident("bar")]

    def test_leading_underscore_and_non_ascii(self) -> None:
        assert list(parse("_foo | caf\u00e9")) == [ident("_foo"), ident("caf\u00e9")]

    @pytest.mark.parametrize("name", ["\u00d7", "foo\u0080", "a\u00a0b", "\u00bfque", "\U0001f600"])
    def test_any_non_ascii_code_point_is_a_name_code_point(self, name: str) -> None:
        assert list(parse(name)) == [ident(name)]

    def test_non_ascii_name_followed_by_multiplier(self) -> None:
        assert list(parse("\u00d7+ | <length>")) == [ident("\u00d7", Multiplier.space), data_type(DataType.length)]

    def test_idents_are_case_preserving(self) -> None:
        assert list(parse("FooBar")) == [ident("FooBar")]

    def test_ident_containing_keyword(self) -> None:
        assert list(parse("inherited | unsettled")) == [ident("inherited"), ident("unsettled")]

    def test_components_are_unpremultiplied_on_demand(self) -> None:
        (component,) = parse("<transform-list>")
        assert component == data_type(DataType.transform_list)
        assert component.unpremultiplied(default_impl) == data_type(DataType.transform_function, Multiplier.space)

    def test_transform_list_in_alternatives(self) -> None:
        assert list(parse("<transform-list> | <length>#")) == [
            data_type(DataType.transform_list),
            data_type(DataType.length, Multiplier.comma),
        ]

    @pytest.mark.parametrize("syntax", ["<transform-list>+", "<transform-list>#"])
    def test_no_multiplier_after_pre_multiplied_name(self, syntax: str) -> None:
        with pytest.raises(InvalidNameStartError) as excinfo:
            parse(syntax)
        assert excinfo.value.position == len("<transform-list>")

    def test_pure(self) -> None:
        assert parse("foo | <length>+") == parse("foo | <length>+")


# ---------------------------------------------------------------------------
# Failures
# ---------------------------------------------------------------------------


class TestFailures:
    @pytest.mark.parametrize("keyword", ["inherit", "reset", "revert", "unset", "default"])
    def test_css_wide_keywords(self, keyword: str) -> None:
        for syntax in (keyword, keyword.upper(), keyword.title(), f"foo | {keyword}"):
            with pytest.raises(InvalidNameError):
                parse(syntax)

    def test_escaped_keyword(self) -> None:
        with pytest.raises(InvalidCustomIdentError):
            parse(r"\69 nherit")

    def test_unknown_data_type_name(self) -> None:
        with pytest.raises(UnknownDataTypeNameError):
            parse("<unknown-type>")

    @pytest.mark.parametrize("syntax", ["<Length>", "< length>", "<length >", "<>"])
    def test_data_type_names_are_exact(self, syntax: str) -> None:
        with pytest.raises(UnknownDataTypeNameError):
            parse(syntax)

    @pytest.mark.parametrize("syntax", ["<length", "foo | <", "<"])
    def test_unclosed_data_type_name(self, syntax: str) -> None:
        with pytest.raises(UnclosedDataTypeNameError):
            parse(syntax)

    @pytest.mark.parametrize("syntax", ["|foo", " | foo", "|"])
    def test_leading_pipe(self, syntax: str) -> None:
        with pytest.raises(UnexpectedPipeError) as excinfo:
            parse(syntax)
        assert excinfo.value.position == 0

    @pytest.mark.parametrize("syntax", ["foo |", "foo|", "<length> | "])
    def test_trailing_pipe(self, syntax: str) -> None:
        with pytest.raises(UnexpectedEOFError):
            parse(syntax)

    def test_double_pipe(self) -> None:
        with pytest.raises(InvalidNameStartError):
            parse("foo || bar")

    @pytest.mark.parametrize("syntax", ["1foo", "-foo", "+", "#", "foo | 2", "'foo'", ">"])
    def test_invalid_name_start(self, syntax: str) -> None:
        with pytest.raises(InvalidNameStartError):
            parse(syntax)

    @pytest.mark.parametrize("syntax", ["foo(", "foo()", "url(x)", "\\\nfoo"])
    def test_invalid_name(self, syntax: str) -> None:
        with pytest.raises(InvalidNameError):
            parse(syntax, parser_error=lambda *args: None)

    def test_errors_are_parse_errors(self) -> None:
        with pytest.raises(ParseError):
            parse("")
        assert issubclass(SyntaxDescriptorError, RuntimeError)

    def test_unknown_data_type_name_position(self) -> None:
        with pytest.raises(UnknownDataTypeNameError) as excinfo:
            parse("foo | <bar>")
        assert excinfo.value.position == len("foo | <")


class TestRecoverableErrors:
    def test_escape_at_end_of_input_is_reported_not_raised(self) -> None:
        errors: list[str] = []
        assert list(parse("foo\\", parser_error=errors.append)) == [ident("foo\ufffd")]
        assert len(errors) == 1

    def test_no_errors_reported_for_valid_input(self) -> None:
        errors: list[str] = []
        parse(r"\66 oo | <length>", parser_error=errors.append)
        assert errors == []

    @pytest.mark.parametrize("syntax", ["foo\\", "\\\nfoo"])
    def test_nothing_written_to_stderr_by_default(self, syntax: str, capsys: pytest.CaptureFixture[str]) -> None:
        try:
            parse(syntax)
        except InvalidNameError:
            pass
        captured = capsys.readouterr()
        assert captured.err == ""
        assert captured.out == ""

    def test_stack_printing_handler_on_request(self, capsys: pytest.CaptureFixture[str]) -> None:
        parse("foo\\", parser_error=parser_error)
        assert "Escape sequence cut short by the end of input." in capsys.readouterr().err


# ---------------------------------------------------------------------------
# Predicates
# ---------------------------------------------------------------------------


class TestPredicates:
    def test_whitespace(self) -> None:
        assert [cp for cp in map(chr, range(0x80)) if is_whitespace(cp)] == ["\t", "\n", "\r", " "]

    def test_name_start(self) -> None:
        ascii_name_starts = [cp for cp in map(chr, range(0x80)) if is_name_start(cp)]
        assert ascii_name_starts == [*map(chr, range(ord("A"), ord("Z") + 1)), "_", *map(chr, range(ord("a"), ord("z") + 1))]
        assert is_name_start("\x80")
        assert is_name_start("\U0001f600")


# ---------------------------------------------------------------------------
# Custom implementations
# ---------------------------------------------------------------------------


class Unit(StrEnum):
    px = "px"
    em = "em"
    lengths = "lengths"


@dataclass(frozen=True)
class Keyword:
    text: str


class UnitsImpl:
    """Resolves `<px>`, `<em>` and the pre-multiplied `<lengths>`, and lower-cases keywords."""

    def custom_ident_from_ident(self, ident: str, /) -> Keyword | None:
        return None if ident == "none" else Keyword(ident.lower())

    def data_type_name_from_str(self, name: str, /) -> Unit | None:
        try:
            return Unit(name)
        except ValueError:
            return None

    def unpremultiply_data_type(self, data_type: Unit, /) -> Component | None:
        if data_type is Unit.lengths:
            return Component(name=DataTypeName(Unit.px), multiplier=Multiplier.comma)
        return None


class TestCustomImpl:
    @pytest.fixture()
    def impl(self) -> UnitsImpl:
        return UnitsImpl()

    def test_custom_vocabulary(self, impl: UnitsImpl) -> None:
        assert list(parse_with(impl, "<px>+ | AUTO")) == [
            Component(name=DataTypeName(Unit.px), multiplier=Multiplier.space),
            Component(name=IdentName(Keyword("auto"))),
        ]

    def test_default_vocabulary_not_available(self, impl: UnitsImpl) -> None:
        with pytest.raises(UnknownDataTypeNameError):
            parse_with(impl, "<length>")

    def test_custom_ident_rejection(self, impl: UnitsImpl) -> None:
        with pytest.raises(InvalidNameError):
            parse_with(impl, "none")
        assert list(parse_with(impl, "inherit")) == [Component(name=IdentName(Keyword("inherit")))]

    def test_custom_pre_multiplied(self, impl: UnitsImpl) -> None:
        (component,) = parse_with(impl, "<lengths>")
        assert component.multiplier is None
        assert component.unpremultiplied(impl) == Component(name=DataTypeName(Unit.px), multiplier=Multiplier.comma)
        with pytest.raises(InvalidNameStartError):
            parse_with(impl, "<lengths>#")

    def test_unpremultiplied_with_custom_impl(self, impl: UnitsImpl) -> None:
        (component,) = parse_with(impl, "<px>")
        assert component.unpremultiplied(impl) is component
        assert not component.name.is_pre_multiplied(impl)
