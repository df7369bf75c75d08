r"""
Herald flag syntax parser.

Overview
- Option: immutable descriptor produced from a raw flags string such as
  "-c, --count <n>" or "--no-color".
- parse_flags(flags, description): build an Option or trigger a
  MalformedFlagsError fault when no long flag can be found.

Flags grammar
- The raw string is split on runs of spaces, commas and pipes.
- When more than one token is present and the second one is not a value
  placeholder ("<n>", "[n]"), the first token is the short flag.
- The next token is the long flag; its name with the leading "--" and the
  first "no-" removed is the canonical name (also the event name).
- "<...>" anywhere marks the value required, "[...]" marks it optional and
  "-no-" marks the option as negatable.

Examples
    >>> parse_flags("-c, --count <n>").key
    'count'
    >>> parse_flags("--no-color").negatable
    True
    >>> parse_flags("--dry-run").key
    'dryRun'
"""
import re

from .arguments import DescriptorType
from .faults import FaultCode, MalformedFlagsError, trigger
from .utils import *


class Option(metaclass=DescriptorType):
    """
    Option descriptor, as read from a raw flags string.

    Properties
    - flags: the original raw string (kept verbatim for help rendering).
    - short / long: the individual switch tokens (short may be None).
    - name: canonical long-flag name ("count", "color" for "--no-color").
    - key: camelCase of name, the slot the option's value is bound under.
    - negatable / optional / required: value shape of the option.
    - description: help text (empty string when not provided).
    """

    __introspectable__ = (
        "flags",
        "short",
        "long",
        "name",
        "key",
        "negatable",
        "optional",
        "required",
        "description",
    )

    def __new__(cls, flags, /, description=Unset):
        if not isinstance(flags, str):
            raise TypeError(f"{cls.__typename__} 'flags' must be a string")
        if not isinstance(description, str | Unset | None):
            raise TypeError(f"{cls.__typename__} 'description' must be a string")

        self = super().__new__(cls)
        self._flags = flags
        self._required = "<" in flags
        self._optional = "[" in flags
        self._negatable = "-no-" in flags
        self._description = description or ""

        tokens = [token for token in re.split(r"[ ,|]+", flags) if token]
        self._short = None
        if len(tokens) > 1 and not tokens[1].startswith(("<", "[")):
            self._short = tokens.pop(0)
        self._long = tokens.pop(0) if tokens else ""
        self._name = self._long.replace("--", "", 1).replace("no-", "", 1)
        self._key = camelcase(self._name)
        return self

    def matches(self, token, /):
        """
        Tell whether a command-line token names this option (short or long form).
        """
        return isinstance(token, str) and token in (self._short, self._long)


def parse_flags(flags, description=Unset, /, *, trigger=trigger):
    """
    Parse a raw flags string into an Option descriptor.

    Parameters
    - trigger: fault dispatcher; commands pass their own bound trigger so the
      fault picks up their shell/fancy/colorful options.

    Errors
    - TypeError when flags/description are not strings.
    - MalformedFlagsError (via trigger) when the string holds no long flag,
      e.g. "" or "<value>".
    """
    option = Option(flags, description)
    if not option.name or option.long.startswith(("<", "[")):
        trigger(MalformedFlagsError(
            f"no option name could be read from {flags!r}",
            code=FaultCode.MALFORMED_FLAGS,
            title="malformed flags",
            hint="declare at least one switch, e.g. '-v, --verbose' or '--count <n>'",
            input=flags,
        ))
    return option


__all__ = (
    "Option",
    "parse_flags",
)
