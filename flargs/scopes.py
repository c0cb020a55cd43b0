"""
Flargs scope resolution.

A parse keeps a chain of the commands matched so far, innermost first. Lookups
walk that chain:

- resolve_command(word, command): direct children of the innermost command only.
- resolve_flag(name, chain): innermost command first, so a descendant may shadow
  an ancestor's flag by redeclaring it.
- route(chain): the dotted root→innermost path shown in messages.
- suggest(name, chain): close spellings for "did you mean" hints.

Scope is the per-level accumulator the scanner writes into; one is allocated
for every command level visited and discarded after assembly.
"""
import difflib

from .utils import Unset


class Scope:
    """
    Values accumulated for one visited command level.

    - command: the Command this level belongs to.
    - values: flag/param name → resolved value (lists for array specs).
    - cursor: index of the next free param slot.
    """
    __slots__ = ("command", "values", "cursor")

    def __init__(self, command, /):
        self.command = command
        self.values = {}
        self.cursor = 0

    def __repr__(self):
        return f"scope(command={self.command.name!r}, values={self.values!r}, cursor={self.cursor!r})"

    def store(self, argument, value, /):
        """
        Record a coerced value: array specs append, others overwrite.
        """
        if argument.array:
            self.values.setdefault(argument.name, []).append(value)
        else:
            self.values[argument.name] = value

    def slot(self):
        """
        Return the param that takes the next positional, or Unset when none is free.

        An array param keeps the cursor and takes every later positional.
        """
        params = self.command.params
        if self.cursor >= len(params):
            return Unset
        param = params[self.cursor]
        if not param.array:
            self.cursor += 1
        return param


def resolve_command(word, command, /):
    """
    Return the direct child of command named or aliased word, else Unset.
    """
    for child in command.commands:
        if word == child.name or word in child.aliases:
            return child
    return Unset


def resolve_flag(name, chain, /):
    """
    Return the first flag named or shorthanded name along chain (innermost first), else Unset.
    """
    for command in chain:
        for flag in command.flags:
            if name == flag.name or name == flag.shorthand:
                return flag
    return Unset


def route(chain, /):
    """
    Dotted display path, root first (e.g., "git.remote.add").

    The chain itself is left untouched; the reversal works on a copy.
    """
    return ".".join(command.name for command in list(chain)[::-1])


def suggest(name, chain, /, limit=3):
    """
    Return up to limit flag spellings visible along chain that look like name.
    """
    spellings = {}
    for command in chain:
        for flag in command.flags:
            for spelling in flag.spellings:
                spellings.setdefault(spelling.lstrip("-"), spelling)
    return [spellings[match] for match in difflib.get_close_matches(name, spellings.keys(), limit)]


__all__ = (
    "Scope",
    "resolve_command",
    "resolve_flag",
    "route",
    "suggest",
)
