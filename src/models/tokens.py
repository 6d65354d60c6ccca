"""
Token models

Placeholder tokens ({{NAME}}) and the outcome of a substitution run.
"""

from enum import Enum
from dataclasses import dataclass, field
from typing import List


class TokenOrigin(Enum):
    """Where a token value comes from"""
    CONFIG = "config"          # token config file / caller mapping
    AUTOMATIC = "automatic"    # derived from time and environment


@dataclass(frozen=True)
class Token:
    """
    A named placeholder and its resolved value

    Attributes:
        name: Case-sensitive identifier (without braces)
        value: Literal replacement text
        origin: CONFIG or AUTOMATIC
    """
    name: str
    value: str
    origin: TokenOrigin

    @property
    def placeholder(self) -> str:
        """The literal {{NAME}} text this token replaces"""
        return "{{" + self.name + "}}"


@dataclass
class SubstitutionResult:
    """
    Result of running token substitution over a text buffer

    Attributes:
        text: Substituted text
        unresolved: Sorted, distinct names of {{...}} placeholders left
                    outside code after the last pass
        replacements: Total number of placeholder occurrences replaced
        passes: Number of passes actually run

    Example:
        SubstitutionResult(
            text="Hello World and {{MISSING}}",
            unresolved=["MISSING"],
            replacements=1,
            passes=2
        )
    """
    text: str
    unresolved: List[str] = field(default_factory=list)
    replacements: int = 0
    passes: int = 0
