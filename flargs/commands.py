r"""
Flargs command specifications.

Overview
- Command: immutable schema node naming an invocable command, its flags, its
  positional params, its child commands, and optional version metadata.
- Version: (number, flag) pair telling the entry point which flag prints which
  version string.

Build-time guarantees
- Every attached Flag, Param and child Command carries a name (TypeError otherwise).
- Flag names and shorthands are unique within one command; param names are
  unique and never shadow a flag of the same command.
- Child names and aliases are unique among siblings.
- No descendant param shares its name with a flag declared by one of its
  ancestors.
- Param order: no param follows an array param, and no required param follows
  an optional one.
- version="x.y.z" adds a boolean "version" flag (shorthand "v" when free) unless a
  custom boolean flag is supplied through version_flag.

Quick example:
    >>> from flargs import Command, Flag, Param
    >>> build = Command("build", flags=[Flag("jobs", type=int, default=1)])
    >>> root = Command(
    ...     "tool",
    ...     flags=[Flag("verbose", "v", type=bool)],
    ...     commands=[build],
    ...     version="1.2.3",
    ... )
    >>> root.version
    Version(number='1.2.3', flag='version')

Public API
- Classes: Command, Version
"""
import collections
import functools
import operator
import re
from collections.abc import Iterable

from rich.text import Text

from .arguments import Flag, Param, FlagType
from .utils import *

Version = collections.namedtuple("Version", ("number", "flag"))
Version.__doc__ = """
Version metadata of a command.

- number: the version string printed by the entry point.
- flag: the name of the boolean flag that triggers printing it.
"""


class CommandType(type):
    """
    Metaclass that turns Command into an introspectable, read-only descriptor.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ for diagnostics and rich UI.
    - Expose selected fields as read-only properties using mirror() for all names
      listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens).
    - __displayable__ (if set) narrows which properties are shown by __rich_repr__;
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
            """
            Return a concise, stable representation with key metadata.

            Example
            - command(name='build', aliases=('b',), ...)
            """
            return f"{type(self).__typename__}({
                ", ".join(map(functools.partial(operator.mod, "%s=%r"), self.__rich_repr__()))
            })"
        self.__repr__ = __repr__

        @rename("__rich_repr__")
        def __rich_repr__(self):
            """
            Yield a sequence of (name, object) pairs for pretty printers.
            """
            for name in coalesce(type(self).__displayable__, type(self).__introspectable__):
                yield name, getattr(self, name)
        self.__rich_repr__ = __rich_repr__

        return self


def _process_strings(cls, metadata):
    r"""
    Normalize the scalar string fields (name, descr, version).

    - name must match r"\w+(-\w+)*" when provided.
    - descr may also be a rich Text.
    - Strings are trimmed; empty strings are rejected.

    Errors
    - TypeError: when a value is not str | Text | Unset.
    - ValueError: when a string becomes empty after trimming or a name is malformed.
    """
    for name in ("name", "descr", "version"):
        if not isinstance(object := metadata[name], str | Text | Unset):
            raise TypeError(f"{cls.__typename__} {name!r} must be a string")
        elif isinstance(object, str) and not (object := object.strip()):
            raise ValueError(f"{cls.__typename__} {name!r} cannot be empty")
        metadata[name] = object

    if isinstance(metadata["name"], Text):
        raise TypeError(f"{cls.__typename__} 'name' must be a plain string")
    if metadata["name"] and not re.fullmatch(r"\w+(-\w+)*", metadata["name"]):
        raise ValueError(f"{cls.__typename__} 'name' must be word characters joined by single hyphens")
    if isinstance(metadata["version"], Text):
        metadata["version"] = metadata["version"].plain


def _process_aliases(cls, metadata):
    """
    Normalize alternate invocation names into an ordered, duplicate-free tuple.

    Errors
    - TypeError: when aliases is a bare string, not iterable, or holds non-strings.
    - ValueError: on empty or malformed aliases, duplicates, or an alias equal to name.
    """
    if isinstance(aliases := metadata["aliases"], str) or not isinstance(aliases, Iterable):
        raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
    seen = {metadata["name"]}
    stable = []
    for alias in aliases:
        if not isinstance(alias, str):
            raise TypeError(f"{cls.__typename__} 'aliases' must be an iterable of strings")
        elif not (alias := alias.strip()):
            raise ValueError(f"{cls.__typename__} 'aliases' must be an iterable of non-empty strings")
        elif not re.fullmatch(r"\w+(-\w+)*", alias):
            raise ValueError(f"{cls.__typename__} alias {alias!r} must be word characters joined by single hyphens")
        elif alias in seen:
            raise ValueError(f"{cls.__typename__} alias {alias!r} is already in use")
        seen.add(alias)
        stable.append(alias)
    metadata["aliases"] = tuple(stable)


def _process_members(cls, metadata, field, kind):
    """
    Validate a collection of attached specs (flags, params, commands).

    Each member must be an instance of kind and carry a name; the collection
    is stabilized to a tuple preserving order.
    """
    if isinstance(members := metadata[field], str) or not isinstance(members, Iterable):
        raise TypeError(f"{cls.__typename__} {field!r} must be an iterable of {kind.__typename__}s")
    members = tuple(members)
    for position, member in enumerate(members, 1):
        if not isinstance(member, kind):
            raise TypeError(f"{cls.__typename__} {field!r} must be an iterable of {kind.__typename__}s")
        if member.name is None:
            raise TypeError(
                f"{cls.__typename__} {field!r} {kind.__typename__} at {ordinal(position)} position must have a name"
            )
    metadata[field] = members


def _process_version(cls, metadata):
    """
    Resolve the version metadata and its trigger flag.

    - version_flag requires version and must be a named boolean Flag.
    - Without version_flag the default flag is "--version", with "-v" only when no
      declared flag already owns that shorthand.
    - The trigger flag is appended to the declared flags.
    """
    version, flag = metadata["version"], metadata["version_flag"]

    if flag is not Unset:
        if version is Unset:
            raise ValueError(f"{cls.__typename__} 'version_flag' requires 'version'")
        if not isinstance(flag, Flag):
            raise TypeError(f"{cls.__typename__} 'version_flag' must be a flag")
        if flag.name is None:
            raise TypeError(f"{cls.__typename__} 'version_flag' must have a name")
        if flag.type is not FlagType.BOOLEAN or flag.array:
            raise ValueError(f"{cls.__typename__} 'version_flag' must be a single boolean flag")

    if version is Unset:
        metadata["version"] = Unset
        return

    if flag is Unset:
        taken = {declared.shorthand for declared in metadata["flags"]}
        flag = Flag(
            "version",
            "v" if "v" not in taken else Unset,
            "print the version number of the program",
            type=FlagType.BOOLEAN,
        )

    metadata["flags"] += (flag,)
    metadata["version"] = Version(version, flag.name)


def _process_conflicts(cls, metadata):
    """
    Reject name clashes between attached specs.

    - flags: unique names and unique shorthands (shorthands may not equal another
      flag's name either, since both share the dash-stripped lookup space).
    - params: unique names, distinct from flag names.
    - commands: unique names and aliases among siblings.
    """
    seen = set()
    for flag in metadata["flags"]:
        for spelling in (flag.name, flag.shorthand):
            if spelling is None:
                continue
            if spelling in seen:
                raise ValueError(f"{cls.__typename__} {metadata['name']!r} declares flag {spelling!r} twice")
            seen.add(spelling)

    names = {flag.name for flag in metadata["flags"]}
    for param in metadata["params"]:
        if param.name in names:
            raise ValueError(f"{cls.__typename__} {metadata['name']!r} declares {param.name!r} twice")
        names.add(param.name)

    seen = set()
    for child in metadata["commands"]:
        for name in (child.name, *child.aliases):
            if name == "_":
                raise ValueError(f"{cls.__typename__} {metadata['name']!r} cannot name a subcommand '_'")
            if name in seen:
                raise ValueError(f"{cls.__typename__} {metadata['name']!r} declares subcommand {name!r} twice")
            seen.add(name)


def _process_shadowing(cls, metadata):
    """
    Reject descendant params named like a flag visible from above them.

    Flag and param values of one matched command share a single mapping, and an
    ancestor's flag is recorded into the innermost matched command, so such a
    param would be silently overwritten.
    """
    def walk(command, visible):
        for param in command.params:
            if param.name in visible:
                raise ValueError(
                    f"{cls.__typename__} {metadata['name']!r} flag {param.name!r} "
                    f"clashes with param {param.name!r} of subcommand {command.name!r}"
                )
        visible = visible | {flag.name for flag in command.flags}
        for child in command.commands:
            walk(child, visible)

    visible = frozenset(flag.name for flag in metadata["flags"])
    for child in metadata["commands"]:
        walk(child, visible)


def _process_ordering(cls, metadata):
    """
    Enforce the positional ordering rules of params.

    Errors
    - ValueError: a param follows an array param, or a required param follows
      an optional one.
    """
    optional = Unset
    previous = Unset
    for param in metadata["params"]:
        if previous and previous.array:
            raise ValueError(
                f"{cls.__typename__} param {param.name!r} cannot follow array param {previous.name!r}"
            )
        if param.required and optional:
            raise ValueError(
                f"{cls.__typename__} required param {param.name!r} cannot follow optional param {optional.name!r}"
            )
        if not param.required:
            optional = param
        previous = param


class Command(metaclass=CommandType):
    """
    Immutable command schema node.

    A command is matched by its name or one of its aliases when it is a direct child
    of the innermost command matched so far. Its flags are visible to every
    descendant; its params receive positional tokens only while it is the innermost
    matched command.

    Fields
    - name: str (required once attached as a child or parsed as root)
    - descr: str | Text | None
    - aliases: tuple[str, ...]
    - flags: tuple[Flag, ...] (including the version trigger flag, if any)
    - params: tuple[Param, ...]
    - commands: tuple[Command, ...]
    - version: Version | None
    """

    __introspectable__ = (
        "name",
        "descr",
        "aliases",
        "flags",
        "params",
        "commands",
        "version",
    )

    __displayable__ = (
        "name",
        "aliases",
        "flags",
        "params",
        "commands",
        "version",
    )

    def __init__(
            self,
            name=Unset,
            /,
            descr=Unset,
            *,
            aliases=(),
            flags=(),
            params=(),
            commands=(),
            version=Unset,
            version_flag=Unset,
    ):
        """
        Construct a Command with the provided metadata.

        Parameters
        - name: Unset | str
          Invocation name; may be omitted on templates only.
        - descr: Unset | str | Text
          Short description.
        - aliases: Iterable[str]
          Alternate invocation names.
        - flags: Iterable[Flag]
        - params: Iterable[Param]
        - commands: Iterable[Command]
          Child commands.
        - version: Unset | str
          Version string printed when the version flag is given.
        - version_flag: Unset | Flag
          Custom boolean trigger flag replacing the default "--version/-v".

        Raises
        - TypeError / ValueError as described in the module overview.
        """
        metadata = {
            "name": name,
            "descr": descr,
            "aliases": aliases,
            "flags": flags,
            "params": params,
            "commands": commands,
            "version": version,
            "version_flag": version_flag,
        }

        _process_strings(type(self), metadata)
        _process_aliases(type(self), metadata)
        _process_members(type(self), metadata, "flags", Flag)
        _process_members(type(self), metadata, "params", Param)
        _process_members(type(self), metadata, "commands", Command)

        declared = metadata["flags"]
        _process_version(type(self), metadata)
        _process_conflicts(type(self), metadata)
        _process_shadowing(type(self), metadata)
        _process_ordering(type(self), metadata)

        object.__setattr__(self, "_declared", declared)
        for name, object_ in metadata.items():
            object.__setattr__(self, "_" + name, object_)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is immutable; use copy.replace()")

    def __replace__(self, /, **overrides):
        fields = {
            "name": self._name,
            "descr": self._descr,
            "aliases": self._aliases,
            "flags": self._declared,
            "params": self._params,
            "commands": self._commands,
            "version": self._version.number if self._version else Unset,
            "version_flag": self._version_flag,
        } | overrides
        return type(self)(fields.pop("name"), **fields)

    @property
    def names(self):
        """
        Every name this command answers to, canonical name first.
        """
        return (self._name, *self._aliases) if self._name else self._aliases


__all__ = (
    # Classes (specifications)
    "Command",
    "Version",
)

# The metaclass is an implementation detail, not part of the public API.
del CommandType
