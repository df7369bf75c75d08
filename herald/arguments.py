r"""
Herald positional argument specifications.

Overview
- Cardinal: immutable descriptor of one expected positional argument
  (name, required, variadic).
- parse_arguments(descriptor): compile a human-written descriptor string such as
  "<source> [dest...]" into an ordered list of Cardinal descriptors.
- humanize(cardinal): render a descriptor back to its token form.

Descriptor grammar (lenient)
- Tokens are separated by runs of whitespace and processed independently.
- "<name>" declares a required argument, "[name]" an optional one.
- A trailing "..." inside the brackets marks the argument variadic ("<files...>").
- Anything else (a bare word, an empty bracket pair) is dropped silently; the
  compiler never raises for token content.

Notes
- Variadic detection is per token: a variadic argument in the middle of the
  descriptor is still marked variadic. Placing it last is up to the caller.

Quick example:
    >>> [humanize(x) for x in parse_arguments("<source> [dest...] junk")]
    ['<source>', '[dest...]']
"""
import functools
import operator
import re

from .utils import *


class DescriptorType(type):
    """
    Metaclass shared by the herald descriptors (Cardinal, Option).

    Responsibilities
    - Expose every name listed in __introspectable__ as a read-only property
      mirroring the private "_name" field.
    - Provide stable __repr__/__rich_repr__ built from the same names.
    - Derive __typename__ from the class name for use in messages.

    Conventions
    - __displayable__ (if set) narrows which properties __rich_repr__ shows;
      otherwise __introspectable__ is used.
    """
    __introspectable__ = ()
    __displayable__ = Unset

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
            return "%s(%s)" % (
                type(self).__typename__,
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__())),
            )
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


class Cardinal(metaclass=DescriptorType):
    """
    Positional argument descriptor.

    Created once per recognized token while compiling a descriptor string and
    immutable thereafter. Two descriptors compare equal when their name,
    required and variadic fields match.
    """

    __introspectable__ = (
        "name",
        "required",
        "variadic",
    )

    __slots__ = ("_name", "_required", "_variadic")

    def __new__(cls, name, /, required=False, variadic=False):
        if not isinstance(name, str):
            raise TypeError(f"{cls.__typename__} 'name' must be a string")
        elif not name:
            raise ValueError(f"{cls.__typename__} 'name' cannot be empty")
        self = super().__new__(cls)
        self._name = name
        self._required = bool(required)
        self._variadic = bool(variadic)
        return self

    def __eq__(self, other):
        if not isinstance(other, Cardinal):
            return NotImplemented
        return (self.name, self.required, self.variadic) == (other.name, other.required, other.variadic)

    def __hash__(self):
        return hash((Cardinal, self.name, self.required, self.variadic))

    def __str__(self):
        return humanize(self)


def _parse_token(token, /):
    """
    Compile a single token into a Cardinal, or return Unset when it is dropped.
    """
    required = False
    match token[:1]:
        case "<":
            required = True
            name = token[1:-1]
        case "[":
            name = token[1:-1]
        case _:
            name = ""

    variadic = False
    if len(name) > 3 and name.endswith("..."):
        variadic = True
        name = name[:-3]

    if not name:
        return Unset
    return Cardinal(name, required=required, variadic=variadic)


def parse_arguments(descriptor, /):
    """
    Compile a descriptor string into an ordered list of Cardinal descriptors.

    Parameters
    - descriptor: str
      Whitespace-separated tokens, e.g. "<source> [dest...]".

    Returns
    - list[Cardinal] in token order. Malformed tokens contribute nothing.

    Errors
    - TypeError when descriptor is not a string. Token content never raises.
    """
    if not isinstance(descriptor, str):
        raise TypeError("parse_arguments() argument must be a string")
    cardinals = []
    for token in descriptor.split():
        if (cardinal := _parse_token(token)) is not Unset:
            cardinals.append(cardinal)
    return cardinals


def humanize(cardinal, /):
    """
    Render a Cardinal as the token it was compiled from ("<name>", "[name...]").
    """
    if not isinstance(cardinal, Cardinal):
        raise TypeError("humanize() argument must be a cardinal")
    name = cardinal.name + ("..." if cardinal.variadic else "")
    return f"<{name}>" if cardinal.required else f"[{name}]"


__all__ = (
    # Classes
    "Cardinal",

    # Functions
    "parse_arguments",
    "humanize",
)
