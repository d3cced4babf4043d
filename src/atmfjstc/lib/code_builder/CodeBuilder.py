import sys
import logging

from typing import Any, Iterable, Optional, Sequence, Union, ContextManager, Tuple
from contextlib import contextmanager

from atmfjstc.lib.py_lang_utils.iteration import iter_with_first

from atmfjstc.lib.code_builder.BuilderOptions import BuilderOptions
from atmfjstc.lib.code_builder.errors import UnsupportedValueKind
from atmfjstc.lib.code_builder.values import CodeFunc, TypeSpec, VariableRef, put_value, type_name_of


LOG = logging.getLogger(__name__)

MAX_COUNT = sys.maxsize

Content = Union[str, Iterable[str]]
Parameter = Union[VariableRef, Tuple[TypeSpec, str]]


class CodeBuilder:
    """
    Accumulates generated code in a text buffer, taking care of indentation and line breaks automatically.

    By default, every `put` call writes its content on a line of its own, indented according to the current indent
    depth. Both behaviors can be suspended for a region (see `suspended`) so that a single line can be assembled out of
    several calls, e.g. a function call whose arguments are rendered by arbitrary callbacks.

    Suspending is reference-counted: nested suspended regions must all end before the automatic formatting resumes.
    Unbalanced calls to `enable`/`detab` are tolerated and simply have no effect once the counter reaches zero.

    All the emitter methods return the builder itself, so that calls can be chained (except for the declaration
    emitters, which return a `VariableRef` for the declared item).
    """
    _options: BuilderOptions
    _buffer: list
    _indent_depth: int
    _indent_suspend_count: int
    _newline_suspend_count: int

    def __init__(self, options: Optional[BuilderOptions] = None):
        self._options = options if options is not None else BuilderOptions()
        self._buffer = []
        self._indent_depth = 0
        self._indent_suspend_count = 0
        self._newline_suspend_count = 0

    @property
    def options(self) -> BuilderOptions:
        return self._options

    @property
    def indent_depth(self) -> int:
        return self._indent_depth

    @property
    def indent_suspend_count(self) -> int:
        return self._indent_suspend_count

    @property
    def newline_suspend_count(self) -> int:
        return self._newline_suspend_count

    @property
    def data(self) -> str:
        """The code generated so far"""
        if len(self._buffer) > 1:
            self._buffer = [''.join(self._buffer)]

        return self._buffer[0] if len(self._buffer) > 0 else ''

    def __str__(self) -> str:
        return self.data

    def put(self, content: Content, auto_indent: bool = True, auto_newline: bool = True) -> 'CodeBuilder':
        """
        Writes text into the buffer.

        Args:
            content: Either a string, or an iterable of strings. In the latter case, each string is written as if it
                had been passed in a separate call (i.e. each one gets its own indent and newline).
            auto_indent: Whether to prepend the current indent. Ignored (treated as False) while indenting is
                suspended.
            auto_newline: Whether to append a newline. Ignored (treated as False) while newlines are suspended.

        Returns:
            The builder.
        """
        if isinstance(content, str):
            chunks = [content]
        elif isinstance(content, Iterable):
            chunks = list(content)
        else:
            raise TypeError(f"Expected a string or an iterable of strings, got {type(content).__name__}")

        for chunk in chunks:
            if not isinstance(chunk, str):
                raise TypeError(f"Expected a string chunk, got {type(chunk).__name__}")

        if self._indent_suspend_count > 0:
            auto_indent = False
        if self._newline_suspend_count > 0:
            auto_newline = False

        prefix = (self._options.indent * self._indent_depth) if auto_indent else ''
        suffix = self._options.newline if auto_newline else ''

        for chunk in chunks:
            self._buffer.append(prefix + chunk + suffix)

        return self

    def __iadd__(self, content: Content) -> 'CodeBuilder':
        return self.put(content)

    def entab(self):
        self._indent_depth = _increase(self._indent_depth, 'indent depth')

    def detab(self):
        self._indent_depth = _decrease(self._indent_depth, 'indent depth')

    def disable(self, indent: bool = True, newline: bool = True):
        """
        Suspends automatic indenting and/or newlines until a matching `enable` call.

        Prefer the `suspended` context manager, which cannot leave formatting disabled by accident.
        """
        if indent:
            self._indent_suspend_count = _increase(self._indent_suspend_count, 'indent suspend count')
        if newline:
            self._newline_suspend_count = _increase(self._newline_suspend_count, 'newline suspend count')

    def enable(self, indent: bool = True, newline: bool = True):
        if indent:
            self._indent_suspend_count = _decrease(self._indent_suspend_count, 'indent suspend count')
        if newline:
            self._newline_suspend_count = _decrease(self._newline_suspend_count, 'newline suspend count')

    @contextmanager
    def suspended(self, indent: bool = True, newline: bool = True) -> ContextManager['CodeBuilder']:
        """
        Use ``with builder.suspended(): <code>`` to disable automatic indenting and newlines (or just one of them) for
        a region. They are re-enabled on exit, even if an exception occurs.
        """
        self.disable(indent, newline)
        try:
            yield self
        finally:
            self.enable(indent, newline)

    @contextmanager
    def indented(self) -> ContextManager['CodeBuilder']:
        """
        Use ``with builder.indented(): <code>`` to increase the indent depth by one for a region.
        """
        self.entab()
        try:
            yield self
        finally:
            self.detab()

    def with_indent(self, body: CodeFunc) -> 'CodeBuilder':
        """Calls `body` with the builder, with the indent depth increased by one for the duration."""
        with self.indented():
            body(self)

        return self

    def with_scope(self, body: CodeFunc) -> 'CodeBuilder':
        """Wraps the code written by `body` in an indented ``{ }`` block."""
        self.put('{')
        self.with_indent(body)
        self.put('}')

        return self

    def put_quoted(self, value: str) -> 'CodeBuilder':
        """
        Writes a string literal. The quotes and the value are written inline, with no indent or newline added.

        Note that the value is not escaped in any way.
        """
        with self.suspended():
            self.put(self._options.quote)
            self.put(value)
            self.put(self._options.quote)

        return self

    def put_formatted(self, template: str, *args, **kwargs) -> 'CodeBuilder':
        """Shortcut for ``put(template.format(*args, **kwargs))``"""
        return self.put(template.format(*args, **kwargs))

    def put_value(self, value: Any, quote_strings: bool = False) -> 'CodeBuilder':
        """
        Writes a value (string, `VariableRef`, number, callback etc.) according to its kind. See `values.put_value`.
        """
        return put_value(self, value, quote_strings=quote_strings)

    def add_import(self, module: str, selection: Optional[Sequence[str]] = None) -> 'CodeBuilder':
        """
        Writes an import statement, e.g. ``import std.stdio;``, or ``import std.stdio : writeln;`` if `selection` is
        given. Note that an empty selection still produces the `` : `` part.
        """
        self.put(f"import {module}", auto_newline=False)

        if selection is not None:
            with self.suspended():
                self.put(' : ')
                self.put(', '.join(selection))

        return self.put(';', auto_indent=False)

    def add_variable(self, type_name: TypeSpec, name: str, initializer: Any = None) -> VariableRef:
        """
        Writes a variable declaration, e.g. ``int six = 6;``

        Args:
            type_name: The variable type, either as a string or as a Python class (see `values.type_name_of`)
            name: The variable name
            initializer: If not None, a value (rendered like a return value, i.e. strings are code) that will be
                assigned to the variable

        Returns:
            A `VariableRef` that can be passed to other emitters to refer to the variable by name.
        """
        type_name = type_name_of(type_name)

        self.put(f"{type_name} {name}", auto_newline=False)

        if initializer is not None:
            with self.suspended():
                self.put(' = ')
                self.put_value(initializer)

        self.put(';', auto_indent=False)

        return VariableRef(type_name, name, initializer)

    def add_alias(self, name: str, initializer: Any = None) -> VariableRef:
        return self.add_variable('alias', name, initializer)

    def add_enum_value(self, name: str, initializer: Any = None) -> VariableRef:
        return self.add_variable('enum', name, initializer)

    def add_return(self, value: Any) -> 'CodeBuilder':
        """Writes a ``return <value>;`` statement."""
        self.put('return ', auto_newline=False)

        with self.suspended():
            self.put_value(value)

        return self.put(';', auto_indent=False)

    def add_func_declaration(
        self, return_type: TypeSpec, name: str, parameters: Optional[Sequence[Parameter]], body: CodeFunc
    ) -> 'CodeBuilder':
        """
        Writes a function definition.

        Args:
            return_type: The return type, either as a string or as a Python class
            name: The function name
            parameters: A list of `VariableRef`'s and/or ``(type, name)`` tuples. None is the same as an empty list.
            body: Callback that will write the code inside the function body (it will be indented automatically)

        Returns:
            The builder.
        """
        self.put(f"{type_name_of(return_type)} {name}", auto_newline=False)

        with self.suspended():
            self.put('(')
            self.put(', '.join(_render_parameter(param) for param in (parameters or ())))

        self.put(')', auto_indent=False)

        return self.with_scope(body)

    def add_func_call(self, name: str, *args: Any, semicolon: bool = True) -> 'CodeBuilder':
        """
        Writes a function call, e.g. ``writeln("Hello", someVar);``

        Each argument is rendered according to its kind, with plain strings becoming string literals. Use `RawCode` to
        pass an expression as a string, or a callback to have it written by other emitters.

        Specify ``semicolon=False`` to omit the final ``;`` (e.g. when the call is part of a larger expression).
        """
        self.put(name, auto_newline=False)

        with self.suspended():
            self.put('(')

            for arg, is_first in iter_with_first(args):
                if not is_first:
                    self.put(', ')

                self.put_value(arg, quote_strings=True)

        self.put(')', auto_indent=False, auto_newline=not semicolon)

        if semicolon:
            self.put(';', auto_indent=False)

        return self


def _render_parameter(param: Parameter) -> str:
    if isinstance(param, VariableRef):
        return f"{param.type_name} {param.name}"
    if isinstance(param, tuple) and (len(param) == 2):
        return f"{type_name_of(param[0])} {param[1]}"

    raise UnsupportedValueKind(param, 'parameter')


def _increase(value: int, counter_name: str) -> int:
    if value >= MAX_COUNT:
        LOG.debug("%s is at its maximum, ignoring increase", counter_name)
        return value

    return value + 1


def _decrease(value: int, counter_name: str) -> int:
    if value <= 0:
        LOG.debug("%s is already zero, ignoring decrease", counter_name)
        return value

    return value - 1
