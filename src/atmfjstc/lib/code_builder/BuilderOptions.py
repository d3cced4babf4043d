from dataclasses import dataclass, replace


@dataclass(frozen=True)
class BuilderOptions:
    """
    Holds options that control the exact text a `CodeBuilder` produces for its automatic formatting.

    For safety, objects of this type are immutable. To "modify" a set of options, you can create an altered copy by
    calling its `derive` function, similar to how one would call `replace` for a named tuple.

    Attributes:
        indent: The text inserted once per indent level at the start of each auto-indented chunk. A single tab by
            default.
        newline: The line terminator appended after each auto-newlined chunk
        quote: The character used to delimit string literals (see `CodeBuilder.put_quoted`)
    """

    indent: str = '\t'
    newline: str = '\n'
    quote: str = '"'

    def derive(self, indent=None, newline=None, quote=None, indent_width=None):
        """
        Creates a modified copy of these options (options are otherwise immutable).

        Args:
            indent: The new indent unit (or None to leave it unchanged)
            newline: The new line terminator (or None to leave it unchanged)
            quote: The new quote character (or None to leave it unchanged)
            indent_width: If not None, sets the indent unit to this many spaces (a very common operation). Cannot be
                combined with `indent`.

        Returns:
            Options with the modifications performed.
        """
        assert (indent is None) or (indent_width is None), "Specify either indent= or indent_width=, not both"

        if indent_width is not None:
            indent = ' ' * indent_width

        def coalesce(a, b):
            return a if b is None else b

        return replace(
            self,
            indent=coalesce(self.indent, indent),
            newline=coalesce(self.newline, newline),
            quote=coalesce(self.quote, quote),
        )
