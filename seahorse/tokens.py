r"""
Seahorse token normalization.

Rewrites raw argument tokens into a canonical stream so flag matching never
has to special-case inline values or clustered short flags:

    --flag=value   →  --flag value        (split at the first '=' only)
    -f=value       →  -f value
    -abc           →  -a -b -c            (clustering, opt-in)
    -abc=value     →  -a -b -c value      (clustering, opt-in)

Clustering is disabled by default because it conflicts with multi-character
short aliases (e.g. "-ag"); hosts enable it explicitly with cluster=True.
Tokens that do not start with '-' are never touched, so values are passed
through verbatim. Negative numbers ("-5", "-1.5e3") are never clustered.
"""
import re

from loguru import logger

HELP_TOKENS = ("-h", "--help")

_NUMBER = re.compile(r"-(\d+(\.\d*)?|\.\d+)([eE][+-]?\d+)?")


def _expand(token, cluster):
    if not token.startswith("-"):
        return [token]

    designator, separator, value = token.partition("=")
    tail = [value] if separator else []

    if (
        cluster
        and not designator.startswith("--")
        and len(designator) > 2
        and not _NUMBER.fullmatch(designator)
    ):
        return ["-" + char for char in designator[1:]] + tail

    return [designator] + tail


def normalize(tokens, /, *, cluster=False):
    """
    Return the canonical form of an argument token sequence.

    Parameters
    - tokens: Iterable[str]
      raw tokens (the program name already dropped).
    - cluster: bool (keyword-only)
      expand single-dash clusters ("-abc") into individual short flags.

    Returns
    - list[str]: a new list; order is preserved except for splits.

    Guarantees
    - normalize(normalize(x)) == normalize(x) whenever no split-off value itself
      starts with '-' and contains '='.
    """
    tokens = list(tokens)
    normalized = []
    for token in tokens:
        if not isinstance(token, str):
            raise TypeError("normalize() argument must be an iterable of strings")
        normalized.extend(_expand(token, cluster))
    if normalized != tokens:
        logger.debug("normalized {!r} into {!r}", tokens, normalized)
    return normalized


def wants_help(tokens, /):
    """
    Return True when a help token ("-h" or "--help") appears anywhere in the stream.
    """
    return any(token in HELP_TOKENS for token in tokens)


__all__ = (
    "HELP_TOKENS",
    "normalize",
    "wants_help",
)
