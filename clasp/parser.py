"""
clasp parser layer: declare arguments, then process a token stream.

What this module provides
- Parser: holds the declarations and runs the dispatch loop:
  • Help/version scan over the whole stream (takes precedence over everything).
  • Option syntax ('-', '--', and '/' on slash-style platforms) is offered to the
    declared options in declaration order (word form or letter clusters).
  • Other tokens fill the Required slots in order, then go to the List.
  • The first unusable token aborts with "Invalid argument: <token>"; missing
    Required slots end with "Missing argument: <name>".
- Result: (success, error) pair returned by Parser.process().
- invoke(parser, prompt): process and render faults/warnings on standard error.

Quick start
    from clasp import Parser, Value, Argument, Items

    jobs = Value(int, 1)
    name = Argument(str)
    files = Items(str)

    parser = Parser("tool", version="tool 1.0")
    parser.add_option("-j", "--jobs", target=jobs, descr="parallel jobs")
    parser.add_option("-n", "--name", target=name, descr="run name")
    parser.add_list("files", target=files, descr="input files")

    success, error = parser.process(["-j4", "--name=nightly", "a.txt", "b.txt"])

Design notes
- Targets written before a fault keep their values; nothing is rolled back.
- Platform variance: on Windows '/opt' is equivalent to '-opt'/'--opt' and names
  ignore case; pass slashes=True/False to force either behaviour.
- Repeated options are reported once the stream is processed: process() emits
  RepeatedOptionWarning through the warnings machinery, invoke() renders them.
"""
import copy
import shlex
import sys
from collections import defaultdict, deque
from collections.abc import Iterable
from typing import NamedTuple

from rich.console import Console
from rich.text import Text

from .arguments import Cursor, Outcome, Option, Required, List
from .faults import *
from .faults import console
from .formatting import format_help, format_version
from .utils import *


class Result(NamedTuple):
    """
    Outcome of Parser.process().

    - success: True when every token was consumed and every Required was filled.
    - error: "" on success and when help/version was displayed instead,
      otherwise "Invalid argument: <token>" or "Missing argument: <name>".
    """
    success: bool
    error: str

    def __bool__(self):
        return self.success


def _sanitize_string(owner, label, object, /):
    """
    Normalize a scalar string/Text setting.

    - Validates type: str | Text | Unset.
    - Trims strings; empty strings are rejected.
    - Resolves Unset to None.
    """
    if not isinstance(object, str | Text | Unset):
        raise TypeError(f"{owner} {label!r} must be a string")
    if isinstance(object, str) and not (object := object.strip()):
        raise ValueError(f"{owner} {label!r} cannot be empty")
    return coalesce(object)


def _tokenize(prompt, /):
    """
    Normalize a prompt into a list of tokens.

    - Unset: sys.argv[1:].
    - str: shell-like string split with shlex.split.
    - Iterable[str]: used as-is (each item must be a string).
    """
    if prompt is Unset:
        return sys.argv[1:]
    if isinstance(prompt, str):
        return shlex.split(prompt)
    if isinstance(prompt, Iterable):
        tokens = list(prompt)
        if not all(isinstance(token, str) for token in tokens):
            raise TypeError("process() argument must be a string or an iterable of strings")
        return tokens
    raise TypeError("process() argument must be a string or an iterable of strings")


class Parser:
    """
    Command-line argument parser for options, required positionals and a list.

    Responsibilities
    - Validate declarations as they are added (configuration errors raise
      immediately: TypeError for wrong object kinds, ValueError for bad shapes).
    - Run the help/version scan, the dispatch loop and the terminal
      missing-argument check for each process() call.
    - Render help and version screens with rich (plain text unless colorful).

    Introspection
    - name, version, header, footer, help, slashes, colorful
    - options (declared options), groups, required, list
    """
    name = mirror("name")
    version = mirror("version")
    header = mirror("header")
    footer = mirror("footer")
    help = mirror("help")
    slashes = mirror("slashes")
    colorful = mirror("colorful")
    options = mirror("options")
    groups = mirror("groups")
    required = mirror("required")
    list = mirror("list")

    def __init__(
            self,
            name=Unset,
            /,
            *,
            version=Unset,
            header=Unset,
            footer=Unset,
            help=True,
            slashes=Unset,
            colorful=False,
    ):
        """
        Configure a parser.

        Parameters
        - name: str (optional)
          Program name for the usage line; defaults to __main__.__prog__ if defined.
        - version: str (optional)
          Version string; enables --version.
        - header / footer: str | Text (optional)
          Paragraphs around the help screen.
        - help: bool
          Enable -?/--help (default True).
        - slashes: bool (optional)
          Accept '/opt' and match names case-insensitively; defaults to True on Windows.
        - colorful: bool
          Style help and faults with the palette (overridable via __main__.__styles__).
        """
        name = coalesce(name, getattr(__import__("__main__"), "__prog__", Unset))
        self._name = _sanitize_string("parser", "name", name)
        self._version = _sanitize_string("parser", "version", version)
        self._header = _sanitize_string("parser", "header", header)
        self._footer = _sanitize_string("parser", "footer", footer)
        self._help = bool(help)
        self._slashes = bool(coalesce(slashes, sys.platform == "win32"))
        self._colorful = bool(colorful)

        self._entries = []  # options and group headings, in declaration order
        self._options = []
        self._groups = []
        self._required = []
        self._list = None

        self._prefixes = ("-", "/") if self._slashes else ("-",)

    def __repr__(self):
        return "parser(%s)" % ", ".join("%s=%r" % pair for pair in self.__rich_repr__())

    def __rich_repr__(self):
        yield "name", self.name
        yield "version", self.version
        yield "options", self.options
        yield "required", self.required
        yield "list", self.list

    def _fold(self, name):
        return name.casefold() if self._slashes else name

    def add_option(self, *names, target, descr=Unset):
        """
        Declare an option: add_option("-j", "--jobs", target=jobs, descr="...").

        Raises
        - ValueError: malformed names, a letter or word already in use, or a word
          reserved by the built-in --help/--version.
        - TypeError: an unsupported target.
        """
        option = Option(*names, target=target, descr=descr)

        if option.letter is not None:
            if self._fold(option.letter) in (self._fold(other.letter) for other in self._options if other.letter):
                raise ValueError(f"option letter {option.letter!r} is already in use")
        if option.word is not None:
            word = self._fold(option.word)
            if word in (self._fold(other.word) for other in self._options if other.word):
                raise ValueError(f"option word {option.word!r} is already in use")
            if self._help and word == self._fold("help"):
                raise ValueError("option word 'help' is reserved while help is enabled")
            if self._version and word == self._fold("version"):
                raise ValueError("option word 'version' is reserved while a version is set")

        self._options.append(option)
        self._entries.append(option)
        return option

    def add_required(self, name, /, target, descr=Unset):
        """
        Declare the next required positional argument.
        """
        required = Required(name, target=target, descr=descr)
        self._required.append(required)
        return required

    def add_list(self, name, /, target, descr=Unset):
        """
        Declare the list argument (at most one per parser).
        """
        if self._list is not None:
            raise ValueError("only one list argument can be specified")
        self._list = List(name, target=target, descr=descr)
        return self._list

    def add_group(self, name, /):
        """
        Insert a group heading into the options help listing.
        """
        name = _sanitize_string("group", "name", name)
        if name is None:
            raise ValueError("group 'name' cannot be empty")
        self._groups.append(name)
        self._entries.append(str(name))

    def _styles(self, palette):
        if not self._colorful:
            return None
        return defaultdict(str, palette | getattr(__import__("__main__"), "__styles__", {}))

    def _helper(self):
        """
        Render the help screen on standard output.

        Palette keys
        - header-section, usage-label, program-name, argument-name,
          argument-description, group-label, option-name, metavar, footer-section
        """
        styles = self._styles({
            "header-section": "italic #A3A3A3",  # Neutral gray
            "usage-label": "bold #00E6FF",  # CYAN → signature info color
            "program-name": "bold #FF4D94",  # MAGENTA-PINK → brand pop
            "argument-name": "bold #FFD600",  # AMBER for positionals
            "argument-description": "#9CA3AF",  # Muted gray
            "group-label": "bold #FFFFFF",  # Pure white headers
            "option-name": "bold #00E6FF",  # CYAN for options
            "metavar": "bold #FFD600",  # AMBER for parameters
            "footer-section": "#737373",  # Dim footer gray
        })
        Console(highlight=False, soft_wrap=True).print(format_help(
            self._name,
            header=self._header,
            footer=self._footer,
            options=self._entries,
            required=self._required,
            list=self._list,
            help=self._help,
            version=self._version,
            slashes=self._slashes,
            styles=styles,
        ))

    def _versioner(self):
        """
        Render the version string on standard output.
        """
        styles = self._styles({"version": "bold #FF4D94"})
        Console(highlight=False, soft_wrap=True).print(format_version(self._version, styles=styles))

    def _intercept(self, tokens):
        """
        Scan the whole stream for help/version tokens; display and report True if found.
        """
        helps = ("-?", "--help") + (("/?", "/help") if self._slashes else ())
        versions = ("--version",) + (("/version",) if self._slashes else ())
        if not self._help:
            versions += ("-?",) + (("/?",) if self._slashes else ())

        helps = tuple(map(self._fold, helps))
        versions = tuple(map(self._fold, versions))

        for token in map(self._fold, tokens):
            if self._help and token in helps:
                self._helper()
                return True
            if self._version and token in versions:
                self._versioner()
                return True
        return False

    def trigger(self, fault, /, **options):
        """
        Surface a fault with this parser's runtime options merged in.
        """
        trigger(fault, **options, prog=self._name, colorful=self._colorful)

    def _mark(self, option, seen, index):
        seen.setdefault(option, []).append(index)

    def _repeats(self, seen):
        # every index past the first one of an option is a repeat
        for option, indices in seen.items():
            name = "--" + option.word if option.word else "-" + option.letter
            for index in indices[1:]:
                yield RepeatedOptionWarning(
                    "option %r at %s position was already provided" % (name, ordinal(index + 1)),
                    title="repeated option",
                    code=FaultCode.REPEATED_OPTION,
                    option=option,
                    index=index + 1,
                    hint="the last value wins; keep a single %s to silence this warning" % name,
                    docs=getdoc(FaultCode.REPEATED_OPTION),
                )

    def _process_word(self, tokens, cursor, seen):
        for option in self._options:
            outcome, advanced = option.process(tokens, cursor, word=True, slashes=self._slashes)
            if outcome is Outcome.MATCHED:
                self._mark(option, seen, cursor.index)
                return advanced
            if outcome is Outcome.MALFORMED:
                return None
        return None

    def _process_letters(self, tokens, cursor, seen):
        token = tokens[cursor.index]
        if cursor.offset >= len(token):
            return None

        start = cursor.index
        while cursor.index == start and cursor.offset < len(token):
            for option in self._options:
                outcome, advanced = option.process(tokens, cursor, word=False, slashes=self._slashes)
                if outcome is Outcome.MATCHED:
                    self._mark(option, seen, start)
                    cursor = advanced
                    break
                if outcome is Outcome.MALFORMED:
                    return None
            else:
                # no option advanced the cursor
                return None
        return cursor

    def _process_options(self, tokens, index, seen):
        token = tokens[index]
        if self._slashes and token.startswith("/"):
            cursor = self._process_word(tokens, Cursor(index, 1), seen)
            if cursor is None:
                cursor = self._process_letters(tokens, Cursor(index, 1), seen)
            return cursor
        if token.startswith("--"):
            return self._process_word(tokens, Cursor(index, 2), seen)
        return self._process_letters(tokens, Cursor(index, 1), seen)

    def _parseargs(self, tokens, seen):
        """
        Dispatch every token; raise the first fault through trigger().

        classification (per non-empty token)
        - option syntax → _process_options()
        - next unfilled Required → strict coercion of the whole token
        - the List → coerced and appended
        - anything else → invalid argument

        seen maps every matched option to the token indices it matched at,
        in order; the caller reports repeats from it.
        """
        required = deque(self._required)

        index = 0
        while index < len(tokens):
            if not (token := tokens[index]):
                index += 1
                continue

            if token.startswith(self._prefixes):
                cursor = self._process_options(tokens, index, seen)
            elif required:
                outcome, cursor = required[0].process(tokens, Cursor(index, 0))
                if outcome is Outcome.MATCHED:
                    required.popleft()
                else:
                    cursor = None
            elif self._list is not None:
                _, cursor = self._list.process(tokens, Cursor(index, 0))
            else:
                cursor = None

            if cursor is None:
                self.trigger(InvalidArgumentError(
                    "Invalid argument: %s" % token,
                    title="invalid argument",
                    code=FaultCode.INVALID_ARGUMENT,
                    token=token,
                    index=index + 1,
                    hint="check the %s argument; run '%s --help' to see valid forms" % (
                        ordinal(index + 1), self._name or "the program"
                    ),
                    docs=getdoc(FaultCode.INVALID_ARGUMENT),
                ))

            index = cursor.index + 1

        if required:
            self.trigger(MissingArgumentError(
                "Missing argument: %s" % required[0].name,
                title="missing argument",
                code=FaultCode.MISSING_ARGUMENT,
                argument=required[0],
                hint="add the missing %s; run '%s --help' to see the expected order" % (
                    required[0].name, self._name or "the program"
                ),
                docs=getdoc(FaultCode.MISSING_ARGUMENT),
            ))

    def _check(self):
        if not self._options and not self._required and self._list is None:
            raise ValueError("parser has no option, required or list arguments")

    def process(self, tokens=Unset, /):
        """
        Process a token stream and populate the declared targets.

        Parameters
        - tokens: Unset | str | Iterable[str]
          Unset reads sys.argv[1:]; a string is split shell-style.

        Returns
        - Result(success, error); see Result for the error strings.
        """
        tokens = _tokenize(tokens)
        self._check()

        if self._intercept(tokens):
            return Result(False, "")

        seen = {}
        try:
            self._parseargs(tokens, seen)
        except ArgumentsException as fault:
            result = Result(False, str(fault))
        else:
            result = Result(True, "")

        for warning in self._repeats(seen):
            self.trigger(warning)
        return result

    def __invoke__(self, prompt=Unset, /):
        """
        Process a prompt and render faults and warnings on standard error.

        Returns
        - bool: True on success; False on a fault or when help/version was shown.
        """
        tokens = _tokenize(prompt)
        self._check()

        if self._intercept(tokens):
            return False

        seen = {}
        failure = None
        try:
            self._parseargs(tokens, seen)
        except ArgumentsException as fault:
            failure = fault

        # rendered directly: the warnings filters are left alone
        for warning in self._repeats(seen):
            console.print(copy.replace(warning, prog=self._name, colorful=self._colorful))

        if failure is not None:
            console.print(failure)
            return False
        return True


def invoke(object, prompt=Unset, /):
    """
    Convenience runner for parsers.

    Parameters
    - object: an instance providing __invoke__(prompt).
    - prompt: Unset (sys.argv[1:]) | str (shlex.split) | Iterable[str].

    Returns
    - bool: the success reported by object.__invoke__.
    """
    if hasattr(object, "__invoke__") and callable(object.__invoke__):
        return object.__invoke__(prompt)

    target = "argument" if prompt is Unset else "first argument"
    raise TypeError(f"invoke() {target} must implement __invoke__ method") from None


__all__ = (
    "Parser",
    "Result",
    "invoke",
)
