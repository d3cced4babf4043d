"""
Value types understood by the builder, and the dispatcher that renders them.

Every emitter that accepts caller-supplied values (call arguments, return expressions, initializers) goes through
`put_value`, so that the formatting rules for a given kind of value are the same everywhere.
"""

from dataclasses import dataclass
from typing import Any, Callable, Union

from atmfjstc.lib.code_builder.errors import UnsupportedValueKind


@dataclass(frozen=True)
class VariableRef:
    """
    A reference to a variable (or alias, enum value, parameter) declared in the generated code.

    When passed as a value to any emitter, only the variable's name is written. The reference has no link back to the
    builder that produced it.

    Attributes:
        type_name: The type of the variable, as it was written in the declaration
        name: The variable name
        initializer: The value the variable was initialized with, if any (exactly as it was passed to the emitter)
    """
    type_name: str
    name: str
    initializer: Any = None


@dataclass(frozen=True)
class RawCode:
    """
    A bit of code that is always written as-is.

    Plain strings are rendered as string literals when passed as function call arguments. Wrap an expression in
    `RawCode` to have it written verbatim there instead.
    """
    text: str


CodeFunc = Callable[[Any], Any]

TypeSpec = Union[str, type]


def type_name_of(type_spec: TypeSpec) -> str:
    """
    Converts a type given either as a string or as a Python class to the name to be written in the generated code.

    Strings are returned unchanged. For classes, the qualified name is used, prefixed by the module name unless the
    class is a builtin (so ``int`` becomes ``'int'``, but a class ``Point`` in module ``geom`` becomes
    ``'geom.Point'``).
    """
    if isinstance(type_spec, str):
        return type_spec
    if not isinstance(type_spec, type):
        raise UnsupportedValueKind(type_spec, 'type')

    if type_spec.__module__ == 'builtins':
        return type_spec.__qualname__

    return f"{type_spec.__module__}.{type_spec.__qualname__}"


def is_code_func(value: Any) -> bool:
    """
    Checks whether a value should be treated as a nested builder callback, i.e. it is callable but not a class.
    """
    return callable(value) and not isinstance(value, type)


def format_value(value: Any) -> str:
    """
    Returns the text that a scalar value renders to (in code context, i.e. strings are not quoted).

    Callbacks cannot be formatted in isolation, as they write directly into a builder; use `put_value` for those.
    """
    if isinstance(value, RawCode):
        return value.text
    if isinstance(value, str):
        return value
    if isinstance(value, VariableRef):
        return value.name
    # Note that bool must be tested before int, as it is a subclass
    if isinstance(value, bool):
        return 'true' if value else 'false'
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return repr(value)

    raise UnsupportedValueKind(value)


def put_value(builder, value: Any, quote_strings: bool = False):
    """
    Writes a value into a builder according to its kind. This is the one place where value formatting is decided.

    Args:
        builder: The `CodeBuilder` to write into
        value: The value to render. Supported kinds:

            - `RawCode`: written verbatim
            - ``str``: written verbatim, or as a string literal if `quote_strings` is set
            - `VariableRef`: the variable's name is written
            - ``bool``, ``int``, ``float``: written in canonical form (booleans as ``true``/``false``)
            - Any other callable that is not a class: called with the builder, which it writes into as it sees fit

        quote_strings: Whether plain strings represent string literals (as for function call arguments) rather than
            code (as for return values and initializers)

    Returns:
        The builder.

    Raises:
        UnsupportedValueKind: If the value is of any other kind (including None)
    """
    if isinstance(value, str) and quote_strings:
        return builder.put_quoted(value)
    if is_code_func(value):
        value(builder)
        return builder

    return builder.put(format_value(value))
