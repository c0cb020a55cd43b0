"""
Flargs scanner.

parse() walks the raw tokens once, left to right, with no backtracking. It keeps
the chain of matched commands (innermost first), one Scope per visited level, and
a two-state machine:

- IDLE: no flag is waiting for a value.
- AWAITING_VALUE: a flag was just recognized; the next plain token is its value.

Per token:
1. a flag token is stripped and resolved along the chain (UnknownFlagError when
   nothing matches); a boolean flag is recorded as True at once, then the flag
   becomes pending;
2. a plain token naming a child of the innermost command descends into it;
3. otherwise a pending flag takes the token as its value;
4. otherwise the token is a positional, offered to the innermost command's params
   in declared order, or kept in Result.extras when no slot is free.

A non-boolean flag abandoned without a value (by another flag, a subcommand, or
the end of the tokens) yields a DanglingFlagWarning on the result; its value then
comes from its default only.

With strict=True, leftover positionals raise UnexpectedParamError and required
flags or params absent after default fill raise MissingRequiredError.
"""
import collections
import enum
import sys
from collections.abc import Iterable

from .arguments import Flag, FlagType
from .coercion import coerce
from .commands import Command
from .faults import *
from .results import assemble
from .scopes import *
from .tokens import classify, strip
from .utils import *


class State(enum.Enum):
    """
    Scanner states.
    """
    IDLE = enum.auto()
    AWAITING_VALUE = enum.auto()


def _unknown(token, name, index, chain):
    path = route(chain)
    try:
        hint = "did you mean %r? flags of %r and its parents are visible here" % (suggest(name, chain)[0], path)
    except IndexError:
        hint = "no flag named %r is declared by %r or its parents" % (name, path)
    return UnknownFlagError(
        "unknown flag %r at %s position in %r" % (token, ordinal(index), path),
        title="unknown flag",
        code=FaultCode.UNKNOWN_FLAG,
        hint=hint,
        token=token,
        index=index,
        path=path,
        argument=name,
        docs=getdoc(FaultCode.UNKNOWN_FLAG),
    )


def _dangling(flag, token, index, chain):
    path = route(chain)
    return DanglingFlagWarning(
        "flag %r at %s position in %r was given no value" % (token, ordinal(index), path),
        title="flag without value",
        code=FaultCode.DANGLING_FLAG,
        hint=(
            "its default %r applies" % (flag.default,)
            if flag.default is not None else
            "pass a value right after it, e.g. '%s <%s>'" % (token, flag.type)
        ),
        token=token,
        index=index,
        path=path,
        argument=flag.name,
        docs=getdoc(FaultCode.DANGLING_FLAG),
    )


def _unexpected(token, index, chain):
    path = route(chain)
    return UnexpectedParamError(
        "unexpected positional %r at %s position in %r" % (token, ordinal(index), path),
        title="unexpected positional",
        code=FaultCode.UNEXPECTED_PARAM,
        hint="%r takes %d positional(s); remove the extra value or quote it" % (path, len(chain[0].params)),
        token=token,
        index=index,
        path=path,
        docs=getdoc(FaultCode.UNEXPECTED_PARAM),
    )


def _missing(result, scopes):
    """
    Internal: raise MissingRequiredError for the first required flag/param absent from the flat map.
    """
    chain = collections.deque()
    for scope in scopes:
        chain.appendleft(scope.command)
        for argument in (*scope.command.flags, *scope.command.params):
            if not argument.required or argument.name in result["_"]:
                continue
            path = route(chain)
            label = "flag %r" % ("--" + argument.name) if isinstance(argument, Flag) else "param %r" % argument.name
            raise MissingRequiredError(
                "missing required %s for %r" % (label, path),
                title="missing required argument",
                code=FaultCode.MISSING_REQUIRED,
                hint="provide a %s value for %s" % (argument.type, label),
                path=path,
                argument=argument.name,
                docs=getdoc(FaultCode.MISSING_REQUIRED),
            )


def _tokens(args):
    if args is Unset:
        return sys.argv[1:]
    if isinstance(args, str) or not isinstance(args, Iterable):
        raise TypeError("parse() second argument must be an iterable of strings")
    tokens = list(args)
    if not all(isinstance(token, str) for token in tokens):
        raise TypeError("parse() second argument must be an iterable of strings")
    return tokens


def parse(schema, args=Unset, /, *, strict=False):
    """
    Resolve a raw argument vector against a command schema.

    Parameters
    - schema: Command
      The root command; it must carry a name.
    - args: Unset | Iterable[str]
      Raw tokens; defaults to sys.argv[1:].
    - strict: bool
      Reject leftover positionals and missing required arguments.

    Returns
    - Result: {"program": {...}, "_": {...}} plus path, extras and warnings.

    Raises
    - UnknownFlagError, InvalidBooleanLiteralError, InvalidNumberLiteralError,
      and in strict mode UnexpectedParamError, MissingRequiredError.
    - TypeError on a malformed schema or args argument.
    """
    if not isinstance(schema, Command):
        raise TypeError("parse() first argument must be a command")
    if schema.name is None:
        raise TypeError("parse() first argument must be a named command")

    tokens = _tokens(args)
    chain = collections.deque((schema,))
    scopes = [Scope(schema)]
    extras = []
    warnings = []

    state = State.IDLE
    pending = Unset
    origin = Unset  # (token, index) that made pending

    def abandon():
        if state is State.AWAITING_VALUE and pending.type is not FlagType.BOOLEAN:
            warnings.append(_dangling(pending, *origin, chain))

    for index, token in enumerate(tokens, 1):
        kind = classify(token)

        if kind.flag:
            name = strip(token, kind)
            if (flag := resolve_flag(name, chain)) is Unset:
                raise _unknown(token, name, index, chain)
            abandon()
            if flag.type is FlagType.BOOLEAN:
                scopes[-1].store(flag, True)
            state, pending, origin = State.AWAITING_VALUE, flag, (token, index)
            continue

        if (child := resolve_command(token, chain[0])) is not Unset:
            abandon()
            chain.appendleft(child)
            scopes.append(Scope(child))
            state, pending, origin = State.IDLE, Unset, Unset
            continue

        if state is State.AWAITING_VALUE:
            value = coerce(pending.type, token, name=pending.name, index=index)
            if pending.type is FlagType.BOOLEAN and pending.array:
                # Presence already appended True; the literal replaces it.
                scopes[-1].values[pending.name][-1] = value
            else:
                scopes[-1].store(pending, value)
            state, pending, origin = State.IDLE, Unset, Unset
            continue

        if (param := scopes[-1].slot()) is Unset:
            if strict:
                raise _unexpected(token, index, chain)
            extras.append(token)
            continue
        scopes[-1].store(param, coerce(param.type, token, name=param.name, index=index))

    abandon()

    result = assemble(scopes, extras=extras, warnings=warnings)
    if strict:
        _missing(result, scopes)
    return result


__all__ = (
    "parse",
)
