"""
Token substitution for {{NAME}} placeholders

Replaces placeholders with config and automatic token values while leaving
code samples untouched.

The processor runs in passes so that a token value may itself contain
placeholders:
1. Config tokens are applied first, then automatic tokens
2. Protected code ranges are recomputed before each token is applied
   (substitution shifts offsets and a value may add backticks)
3. Passes stop when one makes zero replacements or the ceiling is hit
4. Placeholders still present anywhere in the result are reported as unresolved

Values are spliced in as literal text, never as a regex replacement
template, so "$1" or "\\g<0>" in a value stays exactly as written.

Example:
    >>> processor = TokenProcessor({"NAME": "World"}, {})
    >>> processor.substitute("Hello {{NAME}} `{{NAME}}`").text
    'Hello World `{{NAME}}`'
"""

import re
from typing import Iterable, List, Mapping, Optional

from ..models.tokens import Token, TokenOrigin, SubstitutionResult
from .codespans import codeRanges_find, position_isProtected
from .log import LOG

REMAINING_PATTERN = re.compile(r'\{\{([^}]+)\}\}')


def token_replaceOutsideCode(text: str, token: Token) -> tuple[str, int]:
    """
    Replace every unprotected occurrence of one token's placeholder

    Args:
        text: Current text
        token: Token to apply

    Returns:
        Tuple of (new text, number of occurrences replaced)
    """
    placeholder = token.placeholder
    index = text.find(placeholder)
    if index == -1:
        return text, 0

    ranges = codeRanges_find(text)
    parts: List[str] = []
    last = 0
    count = 0

    while index != -1:
        parts.append(text[last:index])
        if position_isProtected(ranges, index):
            parts.append(placeholder)
        else:
            parts.append(token.value)
            count += 1
        last = index + len(placeholder)
        index = text.find(placeholder, last)

    parts.append(text[last:])
    return ''.join(parts), count


def tokens_findRemaining(text: str) -> List[str]:
    """
    Find distinct names of {{...}} placeholders left anywhere in text

    Code is scanned too: a placeholder left in a sample is still reported.

    Args:
        text: Text after substitution

    Returns:
        Sorted list of distinct placeholder names (without braces)
    """
    names = {match.group(1) for match in REMAINING_PATTERN.finditer(text)}
    return sorted(names)


class TokenProcessor:
    """
    Multi-pass, code-aware token substitution

    Handles:
    - Config tokens resolved before automatic tokens in every pass
    - Nested placeholders inside token values
    - Pass ceiling against self-referencing values
    - Unresolved placeholder reporting
    """

    def __init__(
        self,
        config_tokens: Mapping[str, str],
        automatic_tokens: Optional[Mapping[str, str]] = None,
        max_passes: Optional[int] = None,
    ) -> None:
        """
        Initialize processor with token mappings

        Args:
            config_tokens: Tokens supplied by configuration (applied first)
            automatic_tokens: Tokens derived from time and environment
            max_passes: Pass ceiling; defaults to the file-content ceiling
                        from appsettings
        """
        from ..config import appsettings

        self.config_tokens: List[Token] = [
            Token(name, str(value), TokenOrigin.CONFIG)
            for name, value in config_tokens.items()
        ]
        self.automatic_tokens: List[Token] = [
            Token(name, str(value), TokenOrigin.AUTOMATIC)
            for name, value in (automatic_tokens or {}).items()
        ]
        self.max_passes = max_passes if max_passes is not None else appsettings.file_max_passes

    def tokens_ordered(self) -> Iterable[Token]:
        """Tokens in application order: config first, then automatic"""
        yield from self.config_tokens
        yield from self.automatic_tokens

    def pass_run(self, text: str) -> tuple[str, int]:
        """
        Run one substitution pass over text

        Returns:
            Tuple of (new text, replacements made in this pass)
        """
        replacements = 0
        for token in self.tokens_ordered():
            text, count = token_replaceOutsideCode(text, token)
            if count:
                LOG(f"Replaced {token.placeholder} x{count} ({token.origin.value})", level=3)
            replacements += count
        return text, replacements

    def substitute(self, text: str) -> SubstitutionResult:
        """
        Substitute tokens in text until convergence or the pass ceiling

        An empty config mapping is a no-op: the input is returned unchanged
        without scanning, and nothing is reported as unresolved.

        Args:
            text: Document text

        Returns:
            SubstitutionResult with text, unresolved names, counts
        """
        if not self.config_tokens:
            LOG("No config tokens, skipping token substitution", level=2)
            return SubstitutionResult(text=text)

        total = 0
        passes = 0
        for passes in range(1, self.max_passes + 1):
            LOG(f"Token replacement pass {passes}...", level=2)
            text, replacements = self.pass_run(text)
            total += replacements
            if replacements == 0:
                break

        LOG(f"Processed {total} total token replacements", level=1)

        unresolved = tokens_findRemaining(text)
        if unresolved:
            LOG(
                "Found unprocessed tokens: " + ", ".join("{{" + name + "}}" for name in unresolved),
                level=1,
                warning=True,
            )

        return SubstitutionResult(
            text=text,
            unresolved=unresolved,
            replacements=total,
            passes=passes,
        )


def tokens_substitute(
    text: str,
    config_tokens: Mapping[str, str],
    automatic_tokens: Optional[Mapping[str, str]] = None,
    max_passes: Optional[int] = None,
) -> SubstitutionResult:
    """
    Convenience wrapper around TokenProcessor.substitute()

    Example:
        >>> tokens_substitute("{{A}}", {"A": "{{B}}", "B": "x"}).text
        'x'
    """
    return TokenProcessor(config_tokens, automatic_tokens, max_passes).substitute(text)
