"""
clasp targets: caller-owned slots receiving parsed values.

A declaration never returns values; it writes them into the target the caller
handed over, and the caller reads the target once processing is over.

Targets
- Value(type, default=<zero>)
  • plain slot; starts at the default (the kind's zero when omitted).
  • a repeated option overwrites the previous value.
- Argument(type)
  • nullable wrapper; starts absent and becomes present only when a value is
    successfully stored. Distinguishes “not supplied” from the zero value
    (e.g. an explicit '--name=' versus no '--name' at all).
- Items(type)
  • ordered sequence; every stored value is appended (list arguments only).

Common surface
- kind: the resolved Kind (see clasp.kinds).
- coerce(text): delegate to clasp.kinds.coerce with the target's kind.
- store(value): record a value already produced by coerce().

Example
    >>> jobs = Value(int, 1)
    >>> name = Argument(str)
    >>> files = Items(str)
"""
from .kinds import Kind, coerce
from .utils import *


class Value:
    """
    Plain single-value slot.

    Parameters
    - type: bool | int | float | str | Kind
      Value kind (see Kind.of).
    - default: any (optional)
      Initial value; the kind's zero when omitted.
    """
    __slots__ = ("_kind", "_value")

    def __init__(self, type=str, default=Unset, /):
        self._kind = Kind.of(type)
        self._value = coalesce(default, self._kind.zero)

    @property
    def kind(self):
        return self._kind

    @property
    def value(self):
        return self._value

    def get(self):
        return self._value

    def coerce(self, text, /):
        return coerce(self._kind, text)

    def store(self, value, /):
        self._value = value

    def __repr__(self):
        return "%s(%s, %r)" % (type(self).__name__.lower(), self._kind.value, self._value)


class Argument(Value):
    """
    Nullable wrapper: an optionally supplied value distinct from its zero value.

    Lifecycle
    - Constructed absent (bool(argument) is False, value is the kind's zero).
    - store() marks it present; later stores overwrite the value.
    - Read after processing via bool(argument) / argument.present and argument.value.
    """
    __slots__ = ("_present",)

    def __init__(self, type=str, /):
        super().__init__(type)
        self._present = False

    @property
    def present(self):
        return self._present

    def store(self, value, /):
        super().store(value)
        self._present = True

    def __bool__(self):
        return self._present

    def __repr__(self):
        if not self._present:
            return "argument(%s, (blank))" % self._kind.value
        return "argument(%s, %r)" % (self._kind.value, self._value)


class Items:
    """
    Ordered, unbounded sequence of values for the list argument.

    Behaves like a read-only sequence for the caller (len, iteration, indexing);
    only the parser appends to it through store().
    """
    __slots__ = ("_kind", "_values")

    def __init__(self, type=str, /):
        self._kind = Kind.of(type)
        self._values = []

    @property
    def kind(self):
        return self._kind

    @property
    def values(self):
        return tuple(self._values)

    def coerce(self, text, /):
        return coerce(self._kind, text)

    def store(self, value, /):
        self._values.append(value)

    def __len__(self):
        return len(self._values)

    def __iter__(self):
        return iter(self._values)

    def __getitem__(self, index):
        return self._values[index]

    def __repr__(self):
        return "items(%s, %r)" % (self._kind.value, self._values)


__all__ = (
    "Value",
    "Argument",
    "Items",
)
