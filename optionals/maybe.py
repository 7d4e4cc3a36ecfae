"""
Optional container: a value that may or may not be present.

This module defines the sealed `Maybe` type and its only two variants:
- Present(value): holds exactly one value (any object, None included).
- Absent: the process-wide singleton instance of `AbsentType`, holding nothing.

Semantics
- Immutable: the variant is fixed at construction. Every operation returns a
  new container (or the same one, unchanged); nothing is mutated in place.
- Sealed: Maybe cannot be subclassed outside this module, and both variants are
  final. Every operation dispatches with a `match` over the two variants.
- Absence sentinel: `None`. `of(None)` is Absent, never Present(None). Only
  `unit()`, `map()` and a direct `Present(None)` produce a present None.
- Laziness: callables passed to an operation run synchronously, at most once,
  and only on the branch that needs them. Whatever they raise propagates to the
  caller unchanged.

Failures raised by the container itself
- ElementNotFoundError: `get()` on Absent.
- PreconditionError: a required callable is missing or not callable, or a
  fallback/bind produced something that is not a Maybe.

Typical usage
    >>> of("hello").map(len)
    Present(5)
    >>> of(None).map(len)
    Absent
    >>> absent().or_else_call(lambda: of(5)).get()
    5
"""
import functools
from collections.abc import Iterable, Mapping, Sized
from types import GenericAlias
from typing import final

from rich.text import Text

from .faults import ElementNotFoundError, PreconditionError


def _require(function, name, role, /):
    # Fail fast on the argument itself, whichever variant receives it.
    if not callable(function):
        raise PreconditionError(
            "%s() %s must be callable, not %s" % (name, role, type(function).__name__),
            hint="pass a function, a lambda or any other callable object",
        )


def _require_maybe(object, name, role, /):
    if not isinstance(object, Maybe):
        raise PreconditionError(
            "%s() %s must be a maybe, not %s" % (name, role, type(object).__name__),
            hint="wrap plain values with of() or Present()",
        )
    return object


class Maybe:
    """
    Sealed base of the optional container.

    Notes
    - Not instantiable: build containers with of(), from_optional(), absent(),
      unit() or Present(...).
    - Only Present and AbsentType (both defined in this module) may subclass it.
    - Subscriptable at runtime (Maybe[int]) for annotations.
    """
    __slots__ = ()

    __class_getitem__ = classmethod(GenericAlias)

    def __new__(cls, *args, **kwargs):
        if cls is Maybe:
            raise TypeError("cannot create 'Maybe' instances, use of() or absent()")
        return super().__new__(cls)

    def __init_subclass__(cls, **options):
        """
        Seal the hierarchy: exactly two variants, both local to this module.
        """
        if cls.__module__ != __name__ or cls.__name__ not in ("Present", "AbsentType"):
            raise TypeError("type 'Maybe' is not an acceptable base type")
        super().__init_subclass__(**options)

    # --- inspection ---

    def is_absent(self):
        """
        Return True when this is Absent.
        """
        match self:
            case Present():
                return False
            case AbsentType():
                return True

    def is_present(self):
        """
        Return True when this is Present (the complement of is_absent()).
        """
        return not self.is_absent()

    # --- extraction ---

    def get(self):
        """
        Return the contained value.

        Raises
        - ElementNotFoundError: when this is Absent. This is the only partial
          operation of the container.
        """
        match self:
            case Present(value):
                return value
            case AbsentType():
                raise ElementNotFoundError(
                    "no value is present",
                    hint="use get_or(), get_or_call() or get_or_raise() when absence is expected",
                )

    def get_or(self, default, /):
        """
        Return the contained value, or `default` when absent.
        """
        match self:
            case Present(value):
                return value
            case AbsentType():
                return default

    def get_or_call(self, supplier, /):
        """
        Return the contained value, or `supplier()` when absent.

        The supplier is never invoked when a value is present.
        """
        _require(supplier, "get_or_call", "supplier")
        match self:
            case Present(value):
                return value
            case AbsentType():
                return supplier()

    def get_or_raise(self, factory, /):
        """
        Return the contained value, or raise the exception built by `factory()`.

        Exception classes are valid factories: `get_or_raise(KeyError)`.
        """
        _require(factory, "get_or_raise", "factory")
        match self:
            case Present(value):
                return value
            case AbsentType():
                raise factory()

    def to_optional(self):
        """
        Convert to the foreign optional form: `(value,)` or `()`.

        A foreign optional cannot hold None, so Present(None) converts to `()`.
        Any other container round-trips through from_optional().
        """
        match self:
            case Present(None) | AbsentType():
                return ()
            case Present(value):
                return (value,)

    def to_nullable(self):
        """
        Convert to the nullable convention: the value, or None when absent.
        """
        return self.get_or(None)

    # --- fallback ---

    def or_else(self, other, /):
        """
        Return self when present, otherwise `other` unchanged.

        Raises
        - PreconditionError: when `other` is not a Maybe (None included).
        """
        _require_maybe(other, "or_else", "argument")
        match self:
            case Present():
                return self
            case AbsentType():
                return other

    def or_else_call(self, supplier, /):
        """
        Return self when present, otherwise the Maybe built by `supplier()`.
        """
        _require(supplier, "or_else_call", "supplier")
        match self:
            case Present():
                return self
            case AbsentType():
                return _require_maybe(supplier(), "or_else_call", "supplier result")

    # --- transformation ---

    def filter(self, predicate, /):
        """
        Keep the value only if it satisfies `predicate`.

        Absent stays Absent and the predicate is not evaluated. Present is kept
        as is (same object) when predicate(value) is truthy, else Absent.
        """
        _require(predicate, "filter", "predicate")
        match self:
            case Present(value):
                return self if predicate(value) else Absent
            case AbsentType():
                return self

    def map(self, function, /):
        """
        Apply `function` to the value and wrap the result in Present.

        The result is never flattened: a function returning None gives
        Present(None), and one returning a Maybe gives a nested container
        (see flat_map()).
        """
        _require(function, "map", "mapper")
        match self:
            case Present(value):
                return Present(function(value))
            case AbsentType():
                return Absent

    def flat_map(self, function, /):
        """
        Apply `function`, which must return a Maybe, and return that Maybe as is.

        Equivalent to `self.map(function).flatten()`.
        """
        _require(function, "flat_map", "mapper")
        match self:
            case Present(value):
                return _require_maybe(function(value), "flat_map", "mapper result")
            case AbsentType():
                return Absent

    def flatten(self):
        """
        Remove one level of nesting: Present(Present(x)) -> Present(x),
        Present(Absent) -> Absent, Absent -> Absent.
        """
        match self:
            case Present(Maybe() as inner):
                return inner
            case Present(value):
                raise PreconditionError(
                    "flatten() requires a nested maybe, not %s" % type(value).__name__,
                    hint="only containers built with map() over maybe-returning functions can be flattened",
                )
            case AbsentType():
                return self

    def transform(self, function, /):
        """
        Return `function(self)`; the function sees the whole container.
        """
        _require(function, "transform", "function")
        return function(self)

    # --- side effects ---

    def if_absent(self, action, /):
        """
        Run `action()` when absent.
        """
        _require(action, "if_absent", "action")
        match self:
            case AbsentType():
                action()

    def if_present(self, consumer, /):
        """
        Run `consumer(value)` when present.
        """
        _require(consumer, "if_present", "consumer")
        match self:
            case Present(value):
                consumer(value)

    def if_present_or_else(self, consumer, action, /):
        """
        Run `consumer(value)` when present, `action()` otherwise.
        """
        _require(consumer, "if_present_or_else", "consumer")
        _require(action, "if_present_or_else", "action")
        match self:
            case Present(value):
                consumer(value)
            case AbsentType():
                action()

    def if_present_or_raise(self, consumer, factory, /):
        """
        Run `consumer(value)` when present, raise `factory()` otherwise.
        """
        _require(consumer, "if_present_or_raise", "consumer")
        _require(factory, "if_present_or_raise", "factory")
        match self:
            case Present(value):
                consumer(value)
            case AbsentType():
                raise factory()

    def raise_if_present(self, factory, /):
        """
        Guard: raise `factory()` when present, do nothing otherwise.
        """
        _require(factory, "raise_if_present", "factory")
        match self:
            case Present():
                raise factory()

    def raise_if_absent(self, factory, /):
        """
        Guard: raise `factory()` when absent, do nothing otherwise.
        """
        _require(factory, "raise_if_absent", "factory")
        match self:
            case AbsentType():
                raise factory()

    # --- collection view (zero or one element) ---

    def __iter__(self):
        match self:
            case Present(value):
                return iter((value,))
            case AbsentType():
                return iter(())

    def __len__(self):
        return int(self.is_present())

    def __bool__(self):
        return self.is_present()

    # --- value semantics ---

    def __eq__(self, other):
        if not isinstance(other, Maybe):
            return NotImplemented
        if self is other:
            return True
        match self, other:
            case Present(left), Present(right):
                return left == right
            case AbsentType(), AbsentType():
                return True
            case _:
                return False

    def __hash__(self):
        match self:
            case Present(None):
                return 0
            case Present(value):
                return hash(value)
            case AbsentType():
                return 1


@final
class Present(Maybe):
    """
    The variant holding a value.

    Notes
    - Construction never collapses None: Present(None) is a present container.
      Use of() to treat None as absence.
    - Immutable: attribute assignment and deletion raise AttributeError.
    - Pattern matching: `case Present(value):` binds the contained value.
    """
    __slots__ = ("_value",)
    __match_args__ = ("value",)

    def __new__(cls, value):
        self = super().__new__(cls)
        object.__setattr__(self, "_value", value)
        return self

    @property
    def value(self):
        return self._value

    def __setattr__(self, name, value):
        raise AttributeError("'Present' object is immutable")

    def __delattr__(self, name):
        raise AttributeError("'Present' object is immutable")

    def __reduce__(self):
        return Present, (self._value,)

    def __rich_repr__(self):
        yield self._value

    def __repr__(self):
        return "Present(%r)" % (self._value,)

    def __init_subclass__(cls, **options):
        raise TypeError("type 'Present' is not an acceptable base type")


@final
class AbsentType(Maybe):
    """
    The variant holding nothing.

    Notes
    - Singleton per interpreter process: AbsentType() always returns `Absent`.
    - Falsy, with a stable string form "Absent" (dim in rich).
    - Copy, deepcopy and pickle all give back the same instance.
    """
    __slots__ = ()

    @functools.cache
    def __new__(cls):
        """
        Return the unique instance of AbsentType (per process).
        """
        return super().__new__(cls)

    def __reduce__(self):
        return AbsentType, ()

    def __rich__(self):
        """
        Rich protocol hook: render a dim 'Absent' token.
        """
        return Text(repr(self), style="dim")

    def __repr__(self):
        return "Absent"

    def __init_subclass__(cls, **options):
        raise TypeError("type 'AbsentType' is not an acceptable base type")


Absent = AbsentType()
"""
The canonical absent container, shared by every call site.
"""


def of(value, /):
    """
    Wrap a nullable value: Absent when `value` is None, Present(value) otherwise.
    """
    return Absent if value is None else Present(value)


def from_optional(foreign, /):
    """
    Adapt a foreign optional-like value.

    Accepted forms
    - None (the foreign reference itself is missing) -> Absent.
    - a Maybe -> returned unchanged.
    - a sized iterable of zero or one element (e.g. `()`, `[x]`, `(x,)`) ->
      Absent or of(element): a None element is absence, never Present(None).

    Raises
    - PreconditionError: for strings, bytes, mappings, non-iterables and
      iterables holding more than one element.
    """
    if foreign is None:
        return Absent
    if isinstance(foreign, Maybe):
        return foreign
    if (
        not isinstance(foreign, Sized) or
        not isinstance(foreign, Iterable) or
        isinstance(foreign, (str, bytes, bytearray, Mapping))
    ):
        raise PreconditionError(
            "from_optional() argument must be a sized iterable of zero or one element, not %s"
            % type(foreign).__name__,
            hint="use of() to wrap a single nullable value",
        )
    match len(foreign):
        case 0:
            return Absent
        case 1:
            element, = foreign
            return of(element)
        case length:
            raise PreconditionError(
                "from_optional() argument must hold at most one element, not %d" % length,
            )


def absent():
    """
    Return the canonical Absent container.
    """
    return Absent


@functools.cache
def unit():
    """
    Return the canonical Present(None): "succeeded, nothing to carry".
    """
    return Present(None)


def ispresent(maybe, /):
    """
    Predicate form of Maybe.is_present(), handy with filter() over containers.
    """
    return _require_maybe(maybe, "ispresent", "argument").is_present()


def isabsent(maybe, /):
    """
    Predicate form of Maybe.is_absent(), handy with filter() over containers.
    """
    return _require_maybe(maybe, "isabsent", "argument").is_absent()


__all__ = (
    # Types
    "Maybe",
    "Present",
    "AbsentType",

    # Constants
    "Absent",

    # Functions
    "of",
    "from_optional",
    "absent",
    "unit",
    "ispresent",
    "isabsent",
)
