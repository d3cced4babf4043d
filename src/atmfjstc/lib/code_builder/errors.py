from typing import Any


class UnsupportedValueKind(TypeError):
    """
    Raised when a value passed to one of the emitters (as a call argument, initializer, return value etc.) is of a kind
    that the builder does not know how to render.

    Attributes:
        value: The offending value
    """
    value: Any

    def __init__(self, value: Any, context: str = 'value'):
        super().__init__(f"Cannot render {context} of type {type(value).__name__}: {value!r}")
        self.value = value
