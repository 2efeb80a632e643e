r"""
clasp argument declarations and the token matcher.

Overview
- Declarations
  • Option: named, optional argument identified by a short letter (-x) and/or a
    long word (--word). Booleans are presence-only, other kinds carry a value.
  • Required: ordered positional argument that must be supplied.
  • List: absorbs every positional token left once all Required slots are filled.

- Matching contract (shared by the three declarations)
  process(tokens, cursor, ...) -> (Outcome, Cursor)
  • Outcome.MATCHED: the declaration consumed input; the returned cursor says where.
  • Outcome.UNMATCHED: not for this declaration, try the next one.
  • Outcome.MALFORMED: recognised but unusable; the whole token is invalid.
  • Cursor(index, offset) is immutable: every call returns a new one instead of
    mutating shared state, so each step can be tested in isolation.

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields listed in __introspectable__ as read-only properties.

Option forms (slashes=True additionally accepts '/' and ignores letter case)
- word:   --jobs=4   --jobs 4   --jobs4 (integers only)
- letter: -j=4       -j 4       -j4 (integers only)   -xvj4 (clusters)
- flags:  -v  --verbose  (never '-v=1' nor '--verbose=yes')

Validation highlights
- Short names must match r"-[A-Za-z0-9]", long names r"--[A-Za-z0-9]{2,}".
- Option targets are Value/Argument; List targets are non-boolean Items; Required
  targets cannot be booleans (plain or nullable) nor Items.

Quick example:
    >>> jobs = Value(int, 1)
    >>> option = Option("-j", "--jobs", target=jobs, descr="parallel jobs")
    >>> option.process(["-j4"], Cursor(0, 1), word=False)
    (<Outcome.MATCHED: 1>, Cursor(index=0, offset=3))
    >>> jobs.value
    4
"""
import functools
import operator
import re
from enum import IntEnum
from typing import NamedTuple

from rich.text import Text

from .kinds import Kind
from .targets import Value, Argument, Items
from .utils import *


class Cursor(NamedTuple):
    """
    Position inside the token stream: token index and character offset.
    """
    index: int
    offset: int


class Outcome(IntEnum):
    """
    Result of offering a token position to one declaration.
    """
    UNMATCHED = 0
    MATCHED   = 1
    MALFORMED = 2


class ArgumentType(type):
    """
    Metaclass that turns declarations into introspectable, read-only records.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in configuration error messages.
    """
    __introspectable__ = ()

    def __new__(cls, name, bases, namespace, **options):
        self = super().__new__(
            cls,
            name,
            bases,
            namespace | {
                "__typename__": re.sub(r"(?<!^)(?=[A-Z])", r"-", name).lower(),
            } | {
                name: mirror(name) for name in namespace.get("__introspectable__", ())
            },
        )

        @rename("__repr__")
        def __repr__(self):
            """
            Return a concise, stable representation with key metadata.

            Example
            - option(letter='j', word='jobs', ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in type(self).__introspectable__:
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _sanitize_descr(cls, descr, /):
    """
    Internal: validate the help description shared by every declaration.

    - Unset becomes an empty description.
    - Strings are trimmed; rich Text is kept as-is.
    """
    if not isinstance(descr, str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    if isinstance(descr, str):
        descr = descr.strip()
    return coalesce(descr, "")


def _sanitize_name(cls, name, /):
    if not isinstance(name, str):
        raise TypeError(f"{cls.__typename__} 'name' must be a string")
    if not (name := name.strip()):
        raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
    return name


def _same(first, second, *, slashes):
    # Slash-style platforms compare names case-insensitively.
    if slashes:
        return first.casefold() == second.casefold()
    return first == second


def _prefixed(token, *, slashes):
    return token.startswith("-") or (slashes and token.startswith("/"))


class Option(metaclass=ArgumentType):
    """
    Named, optional argument: a short letter and/or a long word bound to a target.

    Traits (from the target kind)
    - valueless: booleans are set by presence alone and reject any value.
    - requires_assignment: a value glued to the name needs '=' (all but integers).
    - numeric: the help placeholder is NUM instead of VALUE.
    """

    __introspectable__ = (
        "letter",
        "word",
        "target",
        "descr",
    )

    def __new__(cls, *names, target, descr=Unset):
        """
        Construct an Option.

        Parameters
        - names: one or two str
          "-x" (single ASCII alphanumeric letter) and/or "--word" (two or more
          ASCII alphanumerics), in any order, at most one of each.
        - target: Value | Argument
          Slot receiving the parsed value.
        - descr: str (optional)
          Help line description.

        Raises
        - TypeError: non-string names or an unsupported target.
        - ValueError: missing, malformed or duplicated names.
        """
        if not names:
            raise ValueError(f"{cls.__typename__} must specify a letter, a word, or both")

        letter = word = Unset
        for name in names:
            if not isinstance(name, str):
                raise TypeError(f"{cls.__typename__} names must be strings")
            if re.fullmatch(r"-[A-Za-z0-9]", name):
                if letter:
                    raise ValueError(f"{cls.__typename__} cannot have more than one letter")
                letter = name[1]
            elif re.fullmatch(r"--[A-Za-z0-9]+", name):
                if len(name) < 4:
                    raise ValueError(f"{cls.__typename__} word must be two or more characters: {name!r}")
                if word:
                    raise ValueError(f"{cls.__typename__} cannot have more than one word")
                word = name[2:]
            elif name.startswith("--"):
                raise ValueError(f"{cls.__typename__} word contains a non-alphanumeric character: {name!r}")
            else:
                raise ValueError(f"{cls.__typename__} letter must be a single alphanumeric character: {name!r}")

        if not isinstance(target, Value):
            raise TypeError(f"{cls.__typename__} 'target' must be a value or an argument")

        self = super().__new__(cls)
        self._letter = coalesce(letter)
        self._word = coalesce(word)
        self._target = target
        self._descr = _sanitize_descr(cls, descr)
        return self

    @property
    def kind(self):
        return self._target.kind

    @property
    def valueless(self):
        return self._target.kind.valueless

    @property
    def requires_assignment(self):
        return self._target.kind.requires_assignment

    @property
    def numeric(self):
        return self._target.kind.numeric

    def process(self, tokens, cursor, /, *, word, slashes=False):
        """
        Offer the token under the cursor to this option.

        Parameters
        - tokens: Sequence[str]
          The whole token stream (values may be pulled from the next token).
        - cursor: Cursor
          Current token and character offset (just past the '-', '--' or '/').
        - word: bool
          True for word mode (long names), False for letter mode (clusters).
        - slashes: bool
          Slash-style options: '/' is an option prefix and names ignore case.

        Returns
        - tuple[Outcome, Cursor]: the outcome and the cursor after consumption
          (the input cursor when nothing was consumed).
        """
        if word:
            if self._word is None:
                return Outcome.UNMATCHED, cursor
            return self._process_word(tokens, cursor, slashes)

        token = tokens[cursor.index]
        if self._letter is None or not _same(token[cursor.offset], self._letter, slashes=slashes):
            return Outcome.UNMATCHED, cursor
        return self._process_letter(tokens, cursor, slashes)

    def _process_word(self, tokens, cursor, slashes):
        token = tokens[cursor.index]
        rest = token[cursor.offset:]
        end = Cursor(cursor.index, len(token))

        if _same(rest, self._word, slashes=slashes):
            # exact word, nothing attached
            if self.valueless:
                self._target.store(True)
                return Outcome.MATCHED, end
            if (following := self._from_next(tokens, cursor, slashes)) is not None:
                return Outcome.MATCHED, following
            return Outcome.MALFORMED, cursor

        if not _same(rest[:len(self._word)], self._word, slashes=slashes):
            return Outcome.UNMATCHED, cursor

        # the token starts with the word and carries more characters
        if self.valueless:
            return Outcome.MALFORMED, cursor

        remainder = rest[len(self._word):]
        explicit = remainder.startswith("=")
        if self.requires_assignment and not explicit:
            return Outcome.MALFORMED, cursor
        if explicit:
            remainder = remainder[1:]

        if remainder:
            value, consumed = self._target.coerce(remainder)
            if consumed == len(remainder):
                self._target.store(value)
                return Outcome.MATCHED, end
            if consumed:
                return Outcome.MALFORMED, cursor

        # nothing usable glued to the word: the value must be the next token
        if (following := self._from_next(tokens, cursor, slashes)) is not None:
            return Outcome.MATCHED, following
        return self._assign_empty(explicit and not remainder, cursor, end)

    def _process_letter(self, tokens, cursor, slashes):
        token = tokens[cursor.index]
        offset = cursor.offset + 1

        if self.valueless:
            if token[offset:offset + 1] == "=":
                return Outcome.MALFORMED, cursor
            self._target.store(True)
            return Outcome.MATCHED, Cursor(cursor.index, offset)

        explicit = token[offset:offset + 1] == "="
        if offset < len(token) and self.requires_assignment and not explicit:
            return Outcome.MALFORMED, cursor
        if explicit:
            offset += 1

        if offset < len(token):
            value, consumed = self._target.coerce(token[offset:])
            if consumed < 1:
                return Outcome.MALFORMED, cursor
            self._target.store(value)
            return Outcome.MATCHED, Cursor(cursor.index, offset + consumed)

        if (following := self._from_next(tokens, cursor, slashes)) is not None:
            return Outcome.MATCHED, following
        return self._assign_empty(explicit, cursor, Cursor(cursor.index, len(token)))

    def _from_next(self, tokens, cursor, slashes):
        """
        Take the value from the token after the cursor.

        The next token must exist, must not look like another option, and must
        coerce completely. Returns the cursor at the end of that token, or None.
        """
        index = cursor.index + 1
        if index >= len(tokens):
            return None
        if _prefixed(token := tokens[index], slashes=slashes):
            return None
        value, consumed = self._target.coerce(token)
        if consumed < 1 or consumed != len(token):
            return None
        self._target.store(value)
        return Cursor(index, len(token))

    def _assign_empty(self, explicit, cursor, end):
        # '-a=' / '--word=' with nothing usable after it: an explicit empty string.
        if explicit and self.kind is Kind.STRING:
            self._target.store("")
            return Outcome.MATCHED, end
        return Outcome.MALFORMED, cursor


class Required(metaclass=ArgumentType):
    """
    Ordered positional argument that must be supplied.

    The whole token must coerce into the target (strict mode): '12ab' is not an
    integer. Boolean targets (plain or nullable) and Items containers are
    rejected because presence cannot be expressed positionally.
    """

    __introspectable__ = (
        "name",
        "target",
        "descr",
    )

    def __new__(cls, name, /, target, descr=Unset):
        name = _sanitize_name(cls, name)
        if not isinstance(target, Value):
            raise TypeError(f"{cls.__typename__} 'target' must be a value or an argument")
        if target.kind.valueless:
            raise TypeError(f"disallowed type of {cls.__typename__} argument: {name}")

        self = super().__new__(cls)
        self._name = name
        self._target = target
        self._descr = _sanitize_descr(cls, descr)
        return self

    def process(self, tokens, cursor, /):
        token = tokens[cursor.index]
        value, consumed = self._target.coerce(token)
        if consumed != len(token):
            return Outcome.MALFORMED, cursor
        self._target.store(value)
        return Outcome.MATCHED, Cursor(cursor.index, len(token))


class List(metaclass=ArgumentType):
    """
    Trailing list argument: appends every positional token left after the
    Required slots are filled. At most one per parser.

    Tokens always match: each one is appended as coerced ('12ab' appends 12,
    'abc' appends the kind's zero). Boolean containers are rejected because a
    positional token cannot express presence.
    """

    __introspectable__ = (
        "name",
        "target",
        "descr",
    )

    def __new__(cls, name, /, target, descr=Unset):
        name = _sanitize_name(cls, name)
        if not isinstance(target, Items) or target.kind.valueless:
            raise TypeError(f"disallowed type of {cls.__typename__} argument: {name}")

        self = super().__new__(cls)
        self._name = name
        self._target = target
        self._descr = _sanitize_descr(cls, descr)
        return self

    def process(self, tokens, cursor, /):
        token = tokens[cursor.index]
        value, _ = self._target.coerce(token)
        self._target.store(value)
        return Outcome.MATCHED, Cursor(cursor.index, len(token))


__all__ = (
    "Cursor",
    "Outcome",
    "Option",
    "Required",
    "List",
)
