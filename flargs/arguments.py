r"""
Flargs argument specifications.

Overview
- Specs
  • Flag: named, typed option attached to a command, spelled "--name" or "-shorthand"
    on the command line (e.g., --jobs 4, -v, --tags a --tags b).
  • Param: positional, typed value slot of a command (same fields minus shorthand).
  • FlagType: the three semantic value types (number, string, boolean).

- Introspection & representation
  • ArgumentType metaclass provides stable __repr__/__rich_repr__ and exposes the
    fields declared in __introspectable__ as read-only properties.
  • Specs are immutable; copy.replace(spec, **fields) is the only way to derive a
    variant, and it re-runs every validation pass on the merged fields.

Metadata (sanitized on construction)
- Shared (Flag/Param)
  • name: Unset | str, matching r"\w+(-\w+)*"; may stay Unset on templates but a
    command refuses to adopt an unnamed spec.
  • descr: Unset | str | Text (short help), non-empty when provided.
  • type: FlagType | "number" | "string" | "boolean" | int | float | str | bool.
  • array: bool (repeated occurrences accumulate into a list).
  • required: bool.
  • default: Unset or a value matching type/array (arrays are stored as tuples).
- Flag only
  • shorthand: Unset | str, same grammar as name (e.g., "v", "0").
- Param only
  • type cannot be boolean.

Quick example:
    >>> from flargs.arguments import Flag, Param
    >>> verbose = Flag("verbose", "v", type=bool)
    >>> jobs = Flag("jobs", type="number", default=1)
    >>> files = Param("files", array=True)
    >>> import copy
    >>> copy.replace(jobs, default=4).default
    4

Public API
- Classes: Flag, Param, FlagType
"""
import functools
import math
import operator
import re
from collections.abc import Iterable
from enum import StrEnum

from rich.text import Text

from .utils import *


class FlagType(StrEnum):
    """
    Semantic value types understood by the coercion layer.
    """
    NUMBER = "number"
    STRING = "string"
    BOOLEAN = "boolean"


# Builtins accepted as shorthands for the semantic types.
_BUILTINS = {
    int: FlagType.NUMBER,
    float: FlagType.NUMBER,
    str: FlagType.STRING,
    bool: FlagType.BOOLEAN,
}


class ArgumentType(type):
    """
    Metaclass that turns specs into introspectable, read-only descriptors.

    Responsibilities
    - Provide stable, readable __repr__/__rich_repr__ implementations for
      diagnostics and rich.pretty output.
    - Expose selected fields as read-only properties using mirror() for all
      names listed in __introspectable__.

    Conventions
    - __typename__ is derived from the class name (camel-case split with hyphens)
      and used in messages.
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
            - flag(name='verbose', shorthand='v', type=<FlagType.BOOLEAN: 'boolean'>, ...)
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


def _sanitize_name(cls, field, value, /):
    """
    Internal: validate an identifier-like field (name, shorthand).

    Returns the trimmed string, or Unset when the field was not provided.
    """
    if not isinstance(value, str | Unset):
        raise TypeError(f"{cls.__typename__} {field!r} must be a string")
    elif isinstance(value, str):
        if not (value := value.strip()):
            raise ValueError(f"{cls.__typename__} {field!r} cannot be empty")
        if not re.fullmatch(r"\w+(-\w+)*", value):
            raise ValueError(f"{cls.__typename__} {field!r} must be word characters joined by single hyphens")
    return value


def _sanitize_metadata(cls, metadata, /):
    """
    Internal: normalize and validate the fields shared by Flag and Param.

    - name: optional identifier (see _sanitize_name).
    - descr: optional short description; when provided it must be a non-empty
      string (after trimming) or a rich Text.
    - array/required: coerced to bool.

    Mutates the provided metadata dict in place.
    """
    metadata["name"] = _sanitize_name(cls, "name", metadata["name"])

    if not isinstance(descr := metadata["descr"], str | Text | Unset):
        raise TypeError(f"{cls.__typename__} 'descr' must be a string")
    elif isinstance(descr, str) and not (descr := descr.strip()):
        raise ValueError(f"{cls.__typename__} 'descr' cannot be empty")
    metadata["descr"] = descr

    metadata["array"] = bool(metadata["array"])
    metadata["required"] = bool(metadata["required"])


def _resolve_type(cls, type, /):
    """
    Internal: map the accepted spellings of a type onto a FlagType.
    """
    if isinstance(type, FlagType):
        return type
    if isinstance(type, str):
        try:
            return FlagType(type.strip().lower())
        except ValueError:
            raise ValueError(f"{cls.__typename__} 'type' must be one of 'number', 'string', or 'boolean'") from None
    try:
        return _BUILTINS[type]
    except (KeyError, TypeError):
        raise TypeError(f"{cls.__typename__} 'type' must be a flag type, its name, or int/float/str/bool") from None


def _conforms(type, value, /):
    """
    Internal: True when a single value belongs to the given FlagType.
    """
    match type:
        case FlagType.BOOLEAN:
            return isinstance(value, bool)
        case FlagType.NUMBER:
            return isinstance(value, int | float) and not isinstance(value, bool) and math.isfinite(value)
        case FlagType.STRING:
            return isinstance(value, str)
    return False


def _sanitize_typed_metadata(cls, metadata, /):
    """
    Internal: validate the value-shape fields (type, array, default).

    - type is resolved through _resolve_type.
    - default, when provided, must conform to type; for array specs it must be a
      non-string iterable whose items all conform, and it is frozen into a tuple.

    Mutates the provided metadata dict in place.
    """
    metadata["type"] = type = _resolve_type(cls, metadata["type"])

    if (default := metadata["default"]) is Unset:
        return

    if metadata["array"]:
        if isinstance(default, str | bytes) or not isinstance(default, Iterable):
            raise TypeError(f"array {cls.__typename__} 'default' must be an iterable of {type} values")
        default = tuple(default)
        if not all(_conforms(type, item) for item in default):
            raise TypeError(f"array {cls.__typename__} 'default' items must be {type} values")
    elif not _conforms(type, default):
        raise TypeError(f"{cls.__typename__} 'default' must be a {type} value")

    metadata["default"] = default


class Flag(metaclass=ArgumentType):
    """
    Named, typed option specification.

    A Flag is looked up by its name ("--name") or its shorthand ("-s") in the chain
    of active commands, innermost first, so a command sees its ancestors' flags
    without redeclaring them and may shadow them by redeclaring.

    Highlights
    - boolean flags are set to True by their mere presence; an explicit "true" or
      "false" token right after them overrides that.
    - array flags accumulate every occurrence in encounter order; other flags keep
      the last occurrence.
    - default fills the result when the flag was not given at that command level.
    """

    __introspectable__ = (
        "name",
        "shorthand",
        "descr",
        "type",
        "array",
        "required",
        "default",
    )

    __displayable__ = (
        "name",
        "shorthand",
        "type",
        "array",
        "required",
        "default",
    )

    def __init__(
            self,
            name=Unset,
            /,
            shorthand=Unset,
            descr=Unset,
            *,
            type=FlagType.STRING,
            array=False,
            required=False,
            default=Unset,
    ):
        """
        Construct a Flag spec with the provided metadata.

        Parameters
        - name: Unset | str
          Long spelling without dashes ("jobs" → --jobs). Required before the
          flag can be attached to a command.
        - shorthand: Unset | str
          Short spelling without the dash ("j" → -j).
        - descr: Unset | str | Text
          Short description.
        - type: FlagType | str | int | float | str | bool
          Semantic value type (string by default).
        - array: bool
          Accumulate repeated occurrences into a list.
        - required: bool
          Checked only by strict parses.
        - default: Any
          Value used when the flag is absent; must match type/array.
        """
        cls = self.__class__
        metadata = {
            "name": name,
            "shorthand": shorthand,
            "descr": descr,
            "type": type,
            "array": array,
            "required": required,
            "default": default,
        }
        _sanitize_metadata(cls, metadata)
        metadata["shorthand"] = _sanitize_name(cls, "shorthand", metadata["shorthand"])
        _sanitize_typed_metadata(cls, metadata)

        for name, object in metadata.items():
            super().__setattr__("_" + name, object)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is immutable; use copy.replace()")

    def __replace__(self, /, **overrides):
        fields = {name: object.__getattribute__(self, "_" + name) for name in type(self).__introspectable__}
        fields |= overrides
        return type(self)(fields.pop("name"), **fields)

    @property
    def spellings(self):
        """
        Command-line spellings of this flag, long form first (e.g., ('--jobs', '-j')).
        """
        spellings = []
        if self._name is not Unset:
            spellings.append("--" + self._name)
        if self._shorthand is not Unset:
            spellings.append("-" + self._shorthand)
        return tuple(spellings)


class Param(metaclass=ArgumentType):
    """
    Positional, typed value slot of a command.

    Params of the innermost command receive the positional tokens of a parse in
    declared order; an array param swallows every remaining positional at its level.
    """

    __introspectable__ = (
        "name",
        "descr",
        "type",
        "array",
        "required",
        "default",
    )

    def __init__(
            self,
            name=Unset,
            /,
            descr=Unset,
            *,
            type=FlagType.STRING,
            array=False,
            required=False,
            default=Unset,
    ):
        """
        Construct a Param spec with the provided metadata.

        Parameters
        - name: Unset | str
          Key of the value in the result. Required before attachment.
        - descr: Unset | str | Text
          Short description.
        - type: FlagType | str | int | float | str
          number or string; boolean params are rejected.
        - array: bool
          Collect every remaining positional of the command.
        - required: bool
          Checked only by strict parses.
        - default: Any
          Value used when no positional reached this slot.
        """
        cls = self.__class__
        metadata = {
            "name": name,
            "descr": descr,
            "type": type,
            "array": array,
            "required": required,
            "default": default,
        }
        _sanitize_metadata(cls, metadata)
        _sanitize_typed_metadata(cls, metadata)

        if metadata["type"] is FlagType.BOOLEAN:
            raise ValueError(f"{cls.__typename__} 'type' cannot be boolean")

        for name, object in metadata.items():
            super().__setattr__("_" + name, object)

    def __setattr__(self, name, value, /):
        raise AttributeError(f"{type(self).__typename__} is immutable; use copy.replace()")

    def __replace__(self, /, **overrides):
        fields = {name: object.__getattribute__(self, "_" + name) for name in type(self).__introspectable__}
        fields |= overrides
        return type(self)(fields.pop("name"), **fields)


__all__ = (
    # Classes (specifications)
    "Flag",
    "Param",

    # Enumerations
    "FlagType",
)
