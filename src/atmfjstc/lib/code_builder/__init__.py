"""
A simple stateful builder for generating source code in C-like languages (D, C, Java etc.)

Rationale
---------

For quick code generation jobs (e.g. generating a few functions to be compiled or mixed in by some other step), a full
model of the output like the one in `atmfjstc.lib.abstract_codegen` may be overkill, while crudely concatenating strings
quickly gets unwieldy once the generated code contains nested blocks whose contents are only known at runtime.

The `CodeBuilder` sits in between: it is a text buffer that you append code to in the same order it will appear in the
output, but that takes care of the tedious parts for you:

- Every chunk of text is put on its own line and indented according to the current block depth, automatically
- Blocks are written by passing callbacks, which get the same builder back, with the indent increased
- When a single line must be assembled out of several pieces (e.g. a function call whose arguments are themselves
  generated by other code), the automatic indenting and newlines can be suspended for a region
- Values passed to the emitters (strings, numbers, references to previously declared variables, callbacks) are all
  rendered by a single dispatcher, so they look the same wherever they appear


Example
-------

::

    builder = CodeBuilder()

    builder.add_import('std.stdio', ['writeln'])
    builder.add_func_declaration(
        int, 'sum', [('int', 'a'), ('int', 'b')],
        lambda b: b.add_return('a + b')
    )

    print(builder.data)

Result::

    import std.stdio : writeln;
    int sum(int a, int b)
    {
        return a + b;
    }

(the body is indented with a tab by default, see `BuilderOptions`)
"""

from atmfjstc.lib.code_builder.BuilderOptions import BuilderOptions
from atmfjstc.lib.code_builder.CodeBuilder import CodeBuilder
from atmfjstc.lib.code_builder.errors import UnsupportedValueKind
from atmfjstc.lib.code_builder.values import VariableRef, RawCode, format_value, type_name_of


__version__ = '1.0.0'
