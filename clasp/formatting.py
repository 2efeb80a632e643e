"""
clasp help and version formatting.

Pure functions: they take declaration metadata and return a rich Text whose
plain form is the help screen; printing is the parser's business. Styles are
applied only when a palette is given, so the default output is plain text.

Layout
    <header>

    Usage: <name> [OPTION...] <required>... <list>...

      <required>          <description>
      <list>...           <description>

    Options:
      -x, --word=VALUE    <description>
      -n, --count=NUM     <description>
      -f                  <description>
          --only          <description>

    <Group>:
      ...

      -?, --help          display this help and exit
          --version       output version information and exit

    <footer>

Name columns are two spaces in and twenty characters wide; a longer name is
followed by a single space. Slash-style platforms print /x and /word instead
of -x and --word.
The [OPTION...] marker and the Options section, built-in lines included, are
left out when no option or group heading is declared.
"""
from rich.text import Text

WIDTH = 20
INDENT = "  "


def _line(text, segments, descr, style):
    """
    Append one "  <names><padding><description>" line.

    segments: iterable of (fragment, style-key) pairs forming the name column.
    """
    text.append(INDENT)
    length = 0
    for fragment, key in segments:
        text.append(fragment, style(key) if key else "")
        length += len(fragment)
    if descr:
        text.append(" " * (WIDTH - length) if length < WIDTH else " ")
        text.append(descr, style("argument-description"))
    text.append("\n")


def _names(letter, word, *, valueless, numeric, slashes):
    """
    Name column segments for an option: "-x, --word=VALUE", "-x  ", "    --word".
    """
    prefix, long = ("/", "/") if slashes else ("-", "--")
    segments = []
    if letter:
        segments.append((prefix + letter, "option-name"))
        segments.append((", " if word else "  ", None))
    else:
        segments.append(("    ", None))
    if word:
        segments.append((long + word, "option-name"))
        if not valueless:
            segments.append(("=NUM" if numeric else "=VALUE", "metavar"))
    return segments


def format_help(
        name=None,
        *,
        header=None,
        footer=None,
        options=(),
        required=(),
        list=None,
        help=True,
        version=None,
        slashes=False,
        styles=None,
):
    """
    Build the help screen.

    Parameters
    - name: str | None
      Program name for the usage line.
    - header / footer: str | Text | None
      Paragraphs printed before the usage line and after everything else.
    - options: Sequence[Option | str]
      Declared options in declaration order; strings are group headings.
    - required: Sequence[Required]
      Required positional arguments in order.
    - list: List | None
      The trailing list argument, if any.
    - help: bool
      Add the built-in -?, --help line to a non-empty Options section.
    - version: str | None
      Add the built-in --version line to a non-empty Options section when set.
    - slashes: bool
      Print slash-style option names.
    - styles: Mapping[str, str] | None
      Palette for colourful output; None renders plain text.

    Returns
    - rich.text.Text without a trailing newline.
    """
    def style(key):
        return styles.get(key, "") if styles else ""

    # built-in help and version lines only appear next to declared entries
    grouped = any(isinstance(entry, str) for entry in options)
    listing = bool(options)

    text = Text()

    if header:
        text.append(header, style("header-section")).append("\n\n")

    text.append("Usage:", style("usage-label"))
    if name:
        text.append(" ").append(name, style("program-name"))
    if listing:
        text.append(" [OPTION...]")
    for argument in required:
        text.append(" ").append(argument.name, style("argument-name"))
    if list is not None:
        text.append(" ").append(list.name + "...", style("argument-name"))
    text.append("\n")

    if required or list is not None:
        text.append("\n")
        for argument in required:
            _line(text, [(argument.name, "argument-name")], argument.descr, style)
        if list is not None:
            _line(text, [(list.name + "...", "argument-name")], list.descr, style)

    if listing:
        text.append("\n").append("Options:", style("group-label")).append("\n")
        for entry in options:
            if isinstance(entry, str):
                text.append("\n").append(entry + ":", style("group-label")).append("\n")
                continue
            segments = _names(entry.letter, entry.word, valueless=entry.valueless, numeric=entry.numeric, slashes=slashes)
            _line(text, segments, entry.descr, style)
        if grouped:
            text.append("\n")
        if help:
            _line(text, _names("?", "help", valueless=True, numeric=False, slashes=slashes), "display this help and exit", style)
        if version:
            _line(text, _names(None, "version", valueless=True, numeric=False, slashes=slashes), "output version information and exit", style)

    if footer:
        text.append("\n").append(footer, style("footer-section")).append("\n")

    text.rstrip()
    return text


def format_version(version, *, styles=None):
    """
    Build the version screen: the configured version string as-is.
    """
    return Text(str(version), styles.get("version", "") if styles else "")


__all__ = (
    "format_help",
    "format_version",
)
