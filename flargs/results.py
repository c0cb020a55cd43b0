"""
Flargs result assembly.

assemble() folds the scopes visited by a parse (root first) into a Result:

1. default fill: every flag/param of a level that declares a default and was not
   given at that level receives a fresh copy of it (array defaults become new lists);
2. the nested tree {"<root>": {"_": {...}, "<child>": {"_": {...}}}};
3. the flat map, merged root → innermost so the innermost value wins.

The Result is a dict with the literal keys "program" and "_", carrying
path, extras and warnings as attributes.
"""


class Result(dict):
    """
    Outcome of a parse.

    Keys
    - "program": nested per-command tree.
    - "_": flattened view, innermost value wins.

    Attributes
    - path: invoked command names, root first.
    - extras: positional tokens no param slot accepted.
    - warnings: non-fatal faults collected during the scan.
    """

    def __init__(self, program, flat, /, *, path=(), extras=(), warnings=()):
        super().__init__(program=program, _=flat)
        self.path = tuple(path)
        self.extras = tuple(extras)
        self.warnings = tuple(warnings)

    def __repr__(self):
        return f"result({super().__repr__()}, path={self.path!r}, extras={self.extras!r})"

    def __rich_repr__(self):
        yield "program", self["program"]
        yield "_", self["_"]
        yield "path", self.path
        yield "extras", self.extras, ()
        yield "warnings", self.warnings, ()


def _fill(scope):
    """
    Return the values of one scope completed with copies of declared defaults.
    """
    values = {
        name: list(value) if isinstance(value, list) else value
        for name, value in scope.values.items()
    }
    for argument in (*scope.command.flags, *scope.command.params):
        if argument.name in values or argument.default is None:
            continue
        values[argument.name] = list(argument.default) if argument.array else argument.default
    return values


def assemble(scopes, /, *, extras=(), warnings=()):
    """
    Build the Result of a parse from its visited scopes (root first).
    """
    scopes = tuple(scopes)
    if not scopes:
        raise ValueError("assemble() requires at least the root scope")

    program = {}
    flat = {}
    node = program
    for scope in scopes:
        values = _fill(scope)
        node[scope.command.name] = {"_": values}
        node = node[scope.command.name]
        flat |= {
            name: list(value) if isinstance(value, list) else value
            for name, value in values.items()
        }

    return Result(
        program,
        flat,
        path=(scope.command.name for scope in scopes),
        extras=extras,
        warnings=warnings,
    )


__all__ = (
    "Result",
    "assemble",
)
