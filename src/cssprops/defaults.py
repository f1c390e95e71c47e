"""The default implementation of the `Impl` interface (see `cssprops.values`), used when parsing with `cssprops.properties.parse`."""

from .utils import ascii_lowercase
from .values import Component, DataTypeName, Multiplier

from enum import StrEnum

class DataType(StrEnum):
    """The data type names supported in syntax descriptors, valued with how they're written between `<` and `>`.

    See http://drafts.css-houdini.org/css-properties-values-api-1/#supported-names.
    """
    length = 'length'
    number = 'number'
    percentage = 'percentage'
    length_percentage = 'length-percentage'
    color = 'color'
    image = 'image'
    url = 'url'
    integer = 'integer'
    angle = 'angle'
    time = 'time'
    resolution = 'resolution'
    transform_function = 'transform-function'
    transform_list = 'transform-list'
    custom_ident = 'custom-ident'
    @classmethod
    def from_str(cls, name: str) -> 'DataType | None':
        """Find the data type written as `name` (case-sensitively), if any."""
        try:
            return cls(name)
        except ValueError:
            return None
    def unpremultiply(self) -> Component | None:
        match self:
            case DataType.transform_list:
                return Component(name=DataTypeName(DataType.transform_function), multiplier=Multiplier.space)
            case _:
                return None

css_wide_keywords = frozenset(('inherit', 'reset', 'revert', 'unset', 'default')) # Keywords that may not be used as custom identifiers; see http://drafts.csswg.org/css-values-4/#identifier-value

class CustomIdent(str):
    """A custom identifier, see http://drafts.csswg.org/css-values-4/#custom-idents.

    Objects should be created with `from_ident`, which rejects the keywords excluded from the range of custom identifiers.
    """
    @classmethod
    def from_ident(cls, ident: str) -> 'CustomIdent | None':
        if ascii_lowercase(ident) in css_wide_keywords:
            return None
        return cls(ident)
    def __repr__(self) -> str:
        return f'{type(self).__name__}({str.__repr__(self)})'

class DefaultImpl:
    """The implementation of `Impl` with `DataType` for data type names and `CustomIdent` for custom identifiers."""
    def custom_ident_from_ident(self, ident: str, /) -> CustomIdent | None:
        return CustomIdent.from_ident(ident)
    def data_type_name_from_str(self, name: str, /) -> DataType | None:
        return DataType.from_str(name)
    def unpremultiply_data_type(self, data_type: DataType, /) -> Component | None:
        return data_type.unpremultiply()

default_impl = DefaultImpl()
