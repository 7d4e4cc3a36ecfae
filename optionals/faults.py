"""
Optionals faults (errors raised by the container) and rendering.

Scope
- FaultCode: canonical, stable numeric identifiers for the two failure kinds the
  container raises on its own. Everything else a container operation raises
  comes from caller-supplied callables and is propagated untouched.
- MaybeFault: base type that carries message + options and knows how to render
  itself in a lowercased, readable way with rich.
- ElementNotFoundError: raised by Maybe.get() on Absent (and only there).
- PreconditionError: raised when an argument the container needs is missing or
  of the wrong kind (non-callable mapper, None fallback, ...). It is raised
  before any container logic runs.
- report(): print a fault on the stderr console (the package diagnostics channel).
- getdoc(): optional description lookup for a code from the host application.

Host configuration (read from __main__ at render time)
- __prog__: program name used in the fault header (defaults to "optionals").
- __codes__: mapping FaultCode -> label, used by FaultCode.normalize().
- __styles__: rich style overrides merged over the defaults below.
- __docs__: mapping FaultCode -> documentation string, used by getdoc().
"""
import copy
from collections import defaultdict
from enum import IntEnum
from types import MappingProxyType

from rich.console import Console, Group
from rich.panel import Panel
from rich.text import Text

console = Console(stderr=True)


class FaultCode(IntEnum):
    """
    canonical fault codes raised by the container (stable identifiers).

    grouping
    - extraction (2110x)
      • ELEMENT_NOT_FOUND
    - arguments (2111x)
      • PRECONDITION_VIOLATION
    """
    # --- extraction errors (21xxx) ---
    ELEMENT_NOT_FOUND           = 21101

    # --- argument errors (21xxx) ---
    PRECONDITION_VIOLATION      = 21111

    def normalize(self):
        """
        return a host-normalized string for this code.

        the host application can provide a __codes__ mapping in __main__
        to override numeric ids with friendlier labels. when no mapping
        is present, the numeric value is returned as a string.
        """
        return str(getattr(__import__("__main__"), "__codes__", {}).get(self, self.value))


class MaybeFault(Exception):
    """
    base class of the faults raised by the container itself.

    options
    - colorful: bool, style the rendering (default True).
    - fancy: bool, wrap the rendering in a Panel (default False).
    - hint: str, one short sentence telling the caller what to do instead.
    - title: str, overrides the class-level title.
    """
    code = None
    title = "fault"

    def __init__(self, message="", /, **options):
        if not isinstance(message, str):
            raise TypeError("%s() message must be a string" % type(self).__name__)
        super().__init__(message)
        self.message = message
        self.options = MappingProxyType({"colorful": True, "fancy": False} | options)

    @property
    def hint(self):
        return self.options.get("hint")

    def __rich__(self):
        main = __import__("__main__")

        styles = defaultdict(str, {
            # header parts
            "prog-name": "bold #E6E6F0",  # near-white program name
            "code": "bold #00E5FF",  # neon cyan fault code
            "error-title": "bold #FF4DA6",  # friendly pinky title

            # body
            "error-message": "#C8C8D0",  # soft light gray message
            "hint-arrow": "#9CE19C dim",  # gentle green arrow
            "hint": "italic #9CE19C",  # gentle green hint text
        } | getattr(main, "__styles__", {}))

        def styler(style):
            return styles[style] if self.options["colorful"] else ""

        def text(fragment, style=""):
            if not fragment:
                return Text("")
            if not self.options["colorful"]:
                return Text(str(fragment))
            return Text(str(fragment), style)

        prog = text(getattr(main, "__prog__", "optionals"), styler("prog-name"))

        header = Text.assemble(
            "[ ",
            prog,
            " — ",
            text(self.code.normalize(), styler("code")),
            " | ",
            text(self.options.get("title", self.title).title(), styler("error-title")),
            " ]"
        )
        message = text(self.message, styler("error-message"))

        parts = [message]
        if self.hint:
            parts.append(Text.assemble(text(" → ", styler("hint-arrow")), text(self.hint, styler("hint"))))

        if self.options["fancy"]:
            return Panel(Group(*parts), title=header, title_align="left")

        return Group(header, *parts)

    def __replace__(self, *unused, **overrides):
        assert not unused, "positional arguments are not allowed"
        return type(self)(self.message, **{**self.options, **overrides})

    def __reduce__(self):
        return _rebuild, (type(self), self.message, dict(self.options))


def _rebuild(cls, message, options):
    # Exceptions pickle through args by default, which drops the keyword options.
    return cls(message, **options)


class ElementNotFoundError(MaybeFault, LookupError):
    code = FaultCode.ELEMENT_NOT_FOUND
    title = "element not found"


class PreconditionError(MaybeFault, TypeError):
    code = FaultCode.PRECONDITION_VIOLATION
    title = "precondition violation"


def report(fault, /, **options):
    """
    print a fault on the stderr console with the given rendering options.

    contract
    - fault must be a MaybeFault; options are merged via copy.replace() so the
      original fault is left untouched.
    - nothing is raised for the fault itself: reporting is for callers that
      caught it and want to show it.
    """
    if not isinstance(fault, MaybeFault):
        raise TypeError("report() argument must be a maybe-fault")
    console.print(copy.replace(fault, **options) if options else fault)


def getdoc(code, /):
    """
    optional documentation fetch for a fault code.

    lookup
    - the host application may expose a __docs__ mapping in __main__ where keys
      are FaultCode instances and values are short documentation strings.
    - when not found, returns None.
    """
    if not isinstance(code, FaultCode):
        raise TypeError("getdoc() argument must be a fault-code")
    return getattr(__import__("__main__"), "__docs__", {}).get(code)


__all__ = (
    "FaultCode",
    "MaybeFault",
    "ElementNotFoundError",
    "PreconditionError",
    "report",
    "getdoc",
)
