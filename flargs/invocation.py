"""
Flargs process entry point.

invoke() is the convenience runner around parse():

- normalizes the prompt (argv, a shell-like string, or an iterable of tokens);
- surfaces collected warnings and fatal faults through trigger(), so that shell
  mode renders them with rich and exits while library mode raises/warns;
- prints the version banner when the root's version flag was given.
"""
import shlex
import sys
from collections import defaultdict
from collections.abc import Iterable

from rich.console import Console
from rich.panel import Panel
from rich.text import Text

from .faults import *
from .parser import parse
from .utils import *


def _normalize(prompt):
    """
    Turn a prompt into a list of tokens.

    - Unset: sys.argv[1:].
    - str: shell-like string, split via shlex.split.
    - Iterable[str]: each element is trimmed; blank elements are dropped.
    """
    if prompt is Unset:
        return sys.argv[1:]
    elif isinstance(prompt, str):
        return shlex.split(prompt)
    elif isinstance(prompt, Iterable):
        def _sanitized(iterable):
            for item in iterable:
                if not isinstance(item, str):
                    raise TypeError("invoke() second argument must be a string or an iterable of strings")
                if item := item.strip():
                    yield item
        return list(_sanitized(prompt))
    raise TypeError("invoke() second argument must be a string or an iterable of strings")


def _versioner(schema, *, fancy, colorful):
    """
    Render "<name> — <version>" to stdout.

    Palette keys: program-name, program-version, panel-title (overridable through
    __main__.__styles__); styles are suppressed unless colorful is True. With
    fancy=True the banner is framed in a panel.
    """
    console = Console()
    styles = defaultdict(str, {
        "program-name": "bold #FF4D94",  # magenta-pink brand pop
        "program-version": "bold #00E6FF",  # cyan version
        "panel-title": "bold #FF4D94",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not colorful:
            return Text(str(fragment))
        return Text(str(fragment), style)

    banner = Text(" — ").join((
        text(getattr(__import__("__main__"), "__prog__", schema.name), styler("program-name")),
        text(schema.version.number, styler("program-version")),
    ))

    if fancy:
        console.print(Panel(banner, title=text("version", styler("panel-title")), title_align="left", expand=False))
    else:
        console.print(banner)


def invoke(schema, prompt=Unset, /, *, strict=False, shell=False, fancy=False, colorful=False):
    """
    Parse a prompt against schema and surface everything the user should see.

    Parameters
    - schema: Command (root, named)
    - prompt: Unset | str | Iterable[str]
    - strict: forwarded to parse().
    - shell: render faults with rich and exit(1) instead of raising.
    - fancy: frame rendered faults and the version banner in panels.
    - colorful: apply the rich palettes.

    Returns
    - Result of the parse (shell mode never returns after a fatal fault).

    Raises
    - TypeError on an invalid prompt.
    - Any CommandException outside shell mode.
    """
    tokens = _normalize(prompt)
    options = {
        "schema": schema,
        "shell": shell,
        "fancy": fancy,
        "colorful": colorful,
    }

    try:
        result = parse(schema, tokens, strict=strict)
    except CommandException as fault:
        return trigger(fault, **options)

    for warning in result.warnings:
        trigger(warning, **options)

    if schema.version and result["_"].get(schema.version.flag) is True:
        _versioner(schema, fancy=fancy, colorful=colorful)

    return result


__all__ = (
    "invoke",
)
