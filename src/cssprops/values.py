"""The data model of parsed syntax descriptors, see http://drafts.css-houdini.org/css-properties-values-api-1/#syntax-strings.

A descriptor is built once by the parser (see `cssprops.properties`) and is immutable thereafter. What names a data type or a custom identifier is up to the `Impl` the descriptor was parsed with; the model itself only knows which of the two a component name is.
"""

from dataclasses import dataclass
from enum import StrEnum

from typing import Generic, Protocol, runtime_checkable, TypeAlias, TypeVar

D = TypeVar('D') # Type of data type names of an `Impl`
C = TypeVar('C') # Type of custom identifiers of an `Impl`

class Multiplier(StrEnum):
    """See http://drafts.css-houdini.org/css-properties-values-api-1/#multipliers."""
    space = '+' # Space-separated list of one or more values
    comma = '#' # Comma-separated list of one or more values

@dataclass(frozen=True, slots=True)
class DataTypeName(Generic[D]):
    """A component name that is a data type name, e.g. `<length>`.

    See http://drafts.css-houdini.org/css-properties-values-api-1/#supported-names.
    """
    data_type: D
    def unpremultiply(self, impl: 'Impl') -> 'Component | None':
        return impl.unpremultiply_data_type(self.data_type)
    def is_pre_multiplied(self, impl: 'Impl') -> bool:
        """See http://drafts.css-houdini.org/css-properties-values-api-1/#pre-multiplied-data-type-name."""
        return self.unpremultiply(impl) is not None

@dataclass(frozen=True, slots=True)
class IdentName(Generic[C]):
    """A component name that is a custom identifier, e.g. `auto` in the descriptor `auto | <length>`, matching the identical keyword."""
    ident: C
    def unpremultiply(self, impl: 'Impl') -> 'Component | None':
        return None
    def is_pre_multiplied(self, impl: 'Impl') -> bool:
        return False

ComponentName: TypeAlias = DataTypeName | IdentName

@dataclass(frozen=True, kw_only=True, slots=True)
class Component:
    """A syntax component: a name, optionally followed by a multiplier.

    See http://drafts.css-houdini.org/css-properties-values-api-1/#syntax-component.
    """
    name: ComponentName
    multiplier: Multiplier | None = None
    def unpremultiplied(self, impl: 'Impl') -> 'Component':
        """Return the equivalent component with any pre-multiplied data type name expanded.

        E.g. a `<transform-list>` component is equivalent to `<transform-function>+`. Components that need no expansion are returned as they are, not copied.

        :param impl: The implementation the component was parsed with, e.g. `cssprops.defaults.default_impl` for components returned by `cssprops.properties.parse`
        :raises ValueError: if the component has a multiplier while its name is pre-multiplied, which the parser never produces
        """
        component = self.name.unpremultiply(impl)
        if component is None:
            return self
        if self.multiplier is not None:
            raise ValueError(f"Pre-multiplied data type name {self.name!r} may not have a multiplier")
        return component

class Descriptor(tuple[Component, ...]):
    """A parsed syntax descriptor, an ordered [immutable] sequence of components.

    The components are alternatives, in the order they were written. The empty descriptor is the _universal_ syntax descriptor (written `*`), matching any value; see http://drafts.css-houdini.org/css-properties-values-api-1/#universal-syntax-descriptor.
    """
    @classmethod
    def universal(cls) -> 'Descriptor':
        return cls()
    @property
    def is_universal(self) -> bool:
        return not self
    def __repr__(self) -> str:
        return f'{type(self).__name__}({tuple.__repr__(self)})'

@runtime_checkable
class Impl(Protocol[D, C]):
    """The interface through which the parser resolves data type names and custom identifiers.

    An embedding style engine supplies its own implementation to parse descriptors into its own types of names, or to support a different vocabulary of data type names, without changes to the parser. `cssprops.defaults.DefaultImpl` is the implementation used unless specified otherwise.

    Every operation must be free of side effects and must return (rather than raise) for any string.
    """
    def custom_ident_from_ident(self, ident: str, /) -> C | None:
        """Wrap an identifier, already tokenized and with escapes decoded, as a custom identifier.

        :returns: `None` if the identifier is not a valid custom identifier, e.g. it is one of the CSS-wide keywords
        """
        raise NotImplementedError
    def data_type_name_from_str(self, name: str, /) -> D | None:
        """Resolve the text between `<` and `>` to a data type name.

        :returns: `None` if the name is not recognized
        """
        raise NotImplementedError
    def unpremultiply_data_type(self, data_type: D, /) -> Component | None:
        """Return the component that a pre-multiplied data type name is equivalent to, or `None` if the name is not pre-multiplied."""
        raise NotImplementedError
