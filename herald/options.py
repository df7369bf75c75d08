r"""
Herald option binding.

bind_option() registers one option on a command and wires how later flag
occurrences update the option's bound value.

Registration (runs immediately)
1. The raw flags string is parsed into an Option descriptor; its camelCase key
   names the value slot, its canonical name names the event.
2. The third argument is normalized: a callable is the coercion function, a
   compiled regular expression becomes "first match, else fallback", anything
   else is the default value (and there is no coercion).
3. Negatable, value-optional and value-required options get their default
   pre-assigned. Negatable options always default to True, whatever default
   the caller passed.
4. The descriptor is appended to the command's ordered option list.
5. A handler is subscribed to the event named after the option.

Binding (runs on every publish of the option's event)
- value None means "flag present, no explicit value"; anything else is an
  explicit value.
- An explicit value goes through the coercion function first, which receives
  the current bound value (or the default) as its fallback.
- Unset or Boolean slot: a bare flag binds `default or True` (False for a
  negated option); an explicit value is bound as-is.
- Other slot: an explicit value replaces it; a bare flag leaves it alone.

Coercion functions that raise are not guarded: the exception reaches whoever
published the event.

Example
    >>> from herald import Command
    >>> tool = Command("tool")
    >>> tool.option("-c, --count <n>", "how many", int, 1)
    >>> tool.values["count"]
    1
    >>> tool.publish("count", "5")
    True
    >>> tool.values["count"]
    5
"""
import inspect
import re

from .flags import parse_flags
from .utils import *
from .values import Boolean, Other


def _matcher(pattern, /):
    """
    Build a coercion function returning the first match of pattern, or the fallback.
    """
    @rename("match")
    def coerce(value, fallback):
        if (match := pattern.search(str(value))) is None:
            return fallback
        return match.group(0)
    return coerce


def _arity(callback, /):
    """
    Tell how many positional arguments a coercion function wants (1 or 2).

    Classes and callables without an inspectable signature are converters
    taking the raw value only. Others receive the fallback as well when they
    can take two positional arguments, defaulted or not, or have a *args tail.
    """
    if isinstance(callback, type):
        return 1
    try:
        signature = inspect.signature(callback)
    except (TypeError, ValueError):
        return 1

    positional = 0
    for parameter in signature.parameters.values():
        match parameter.kind:
            case inspect.Parameter.VAR_POSITIONAL:
                return 2
            case inspect.Parameter.POSITIONAL_ONLY | inspect.Parameter.POSITIONAL_OR_KEYWORD:
                positional += 1
    return 2 if positional >= 2 else 1


def _coercer(callback, /):
    """
    Adapt a user coercion function to the (value, fallback) calling shape.

    A fallback that is still Unset reaches user code as None.
    """
    if _arity(callback) == 2:
        return rename(lambda value, fallback: callback(value, coalesce(fallback)), "coerce")
    return rename(lambda value, fallback: callback(value), "coerce")


def bind_option(command, flags, description=Unset, coerce=Unset, default=Unset, /):
    """
    Register an option on command and subscribe its binding handler.

    Parameters
    - command: Command owning the option list, the value store and the events.
    - flags: raw flags string, e.g. "-c, --count <n>" or "--no-color".
    - description: help text.
    - coerce: coercion function, compiled regular expression, or the default value.
    - default: default value (used when coerce was a function or a pattern).

    Returns
    - the registered Option descriptor.
    """
    option = parse_flags(flags, description, trigger=command.trigger)
    key = option.key
    values = command._values

    match coerce:
        case UnsetType():
            pass
        case re.Pattern():
            coerce = _matcher(coerce)
        case _ if callable(coerce):
            coerce = _coercer(coerce)
        case _:
            default, coerce = coerce, Unset

    if option.negatable or option.optional or option.required:
        if option.negatable:
            default = True
        if default is not Unset:
            values.bind(key, default)

    command._options.append(option)

    @rename(f"bind:{option.name}")
    def handler(value):
        explicit = value is not None
        if explicit and coerce is not Unset:
            value = coerce(value, state.value if (state := values.slot(key)) is not Unset else default)

        match values.slot(key):
            case UnsetType() | Boolean():
                if not explicit:
                    values.bind(key, False if option.negatable else (default or True))
                else:
                    values.bind(key, value)
            case Other() if explicit:
                values.bind(key, value)

    command.subscribe(option.name, handler)
    return option


__all__ = (
    "bind_option",
)
