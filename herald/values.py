"""
Herald bound values.

Every option a command declares owns one slot in the command's ValueStore,
keyed by the option's camelCase key. A slot is always in one of three states:

- Unset       the slot was never bound (no default, no occurrence yet).
- Boolean(b)  the slot holds a presence-style True/False.
- Other(v)    the slot holds anything else: a string, a number, or whatever a
              coercion function returned.

The store keeps the tagged state so binding rules can match on it explicitly;
its Mapping face hands out the plain values, so help renderers and host code
read `store["count"]` without caring about tags.
"""
from collections.abc import Mapping
from typing import Any, NamedTuple

from .utils import Unset, UnsetType


class Boolean(NamedTuple):
    value: bool


class Other(NamedTuple):
    value: Any


def tag(value, /):
    """
    Wrap a plain value into its BoundValue state.

    Unset stays Unset, real booleans become Boolean, everything else is Other.
    """
    match value:
        case UnsetType():
            return Unset
        case bool():
            return Boolean(value)
        case _:
            return Other(value)


class ValueStore(Mapping):
    """
    Mapping from option key to its current bound value.

    Only bound slots are members: `key in store` is False for an Unset slot and
    `store[key]` raises KeyError for it, exactly like a plain dict.

    Mutation goes through bind()/unbind(); the tagged state of any slot is
    available through slot(key).
    """

    __slots__ = ("_slots",)

    def __init__(self):
        self._slots = {}

    def slot(self, key, /):
        """
        Return the tagged state of a slot (Unset, Boolean or Other).
        """
        return self._slots.get(key, Unset)

    def bind(self, key, value, /):
        """
        Store a plain value under key; binding Unset clears the slot.
        """
        if not isinstance(key, str):
            raise TypeError("bind() first argument must be a string")
        if (state := tag(value)) is Unset:
            self.unbind(key)
        else:
            self._slots[key] = state

    def unbind(self, key, /):
        self._slots.pop(key, None)

    def __getitem__(self, key):
        return self._slots[key].value

    def __iter__(self):
        return iter(self._slots)

    def __len__(self):
        return len(self._slots)

    def __repr__(self):
        return "values(%s)" % ", ".join(f"{key}={state.value!r}" for key, state in self._slots.items())

    def __rich_repr__(self):
        for key, state in self._slots.items():
            yield key, state.value


__all__ = (
    "Boolean",
    "Other",
    "tag",
    "ValueStore",
)
