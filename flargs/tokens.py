r"""
Flargs token classification.

Every raw argument is labelled by shape before the scanner decides what to do
with it:

- LONG_FLAG:  "--" followed by a word character (e.g., --jobs, --dry-run)
- SHORT_FLAG: "-" followed by a word character, when not long (e.g., -v, -5)
- WORD_LIKE:  r"[\w_]+[\w_-]*[\w_]" (command names, bare values)
- OTHER:      anything else (".", "-", "a b"); scanned like a value

Both functions are pure.
"""
import enum
import re


class TokenKind(enum.Enum):
    """
    Shape of a raw argument token.
    """
    LONG_FLAG = enum.auto()
    SHORT_FLAG = enum.auto()
    WORD_LIKE = enum.auto()
    OTHER = enum.auto()

    @property
    def flag(self):
        """
        True for the two dash-prefixed kinds.
        """
        return self in (TokenKind.LONG_FLAG, TokenKind.SHORT_FLAG)


def classify(token, /):
    """
    Return the TokenKind of a raw token.
    """
    if not isinstance(token, str):
        raise TypeError("classify() argument must be a string")
    if re.match(r"--\w", token):
        return TokenKind.LONG_FLAG
    if re.match(r"-\w", token):
        return TokenKind.SHORT_FLAG
    if re.fullmatch(r"[\w_]+[\w_-]*[\w_]", token):
        return TokenKind.WORD_LIKE
    return TokenKind.OTHER


def strip(token, kind, /):
    """
    Remove the leading dash(es) of a flag token; other tokens pass through.

    Examples
    - strip("--jobs", TokenKind.LONG_FLAG) -> "jobs"
    - strip("-v", TokenKind.SHORT_FLAG)    -> "v"
    """
    match kind:
        case TokenKind.LONG_FLAG:
            return token[2:]
        case TokenKind.SHORT_FLAG:
            return token[1:]
    return token


__all__ = (
    "TokenKind",
    "classify",
    "strip",
)
