"""
Case styles and their conversions.

The word segmentation for every style comes from `textcase`; this module only
names the styles, resolves user input to one of them and applies it.
"""

from __future__ import annotations

from enum import Enum
from typing import Callable, Dict, List, Tuple

import textcase


class FieldCaseError(Exception):
    """Base class for every error the filter reports."""


class UnknownCaseStyle(FieldCaseError):
    def __init__(self, value: str | None):
        self.value = value
        super().__init__(f"invalid case: {value}")


class CaseTransformError(FieldCaseError):
    def __init__(self, case: str, cause: Exception):
        self.case = case
        self.cause = cause
        super().__init__(f"{case}: {cause}")


class CaseStyle(str, Enum):
    CAMEL = "camel"
    PASCAL = "pascal"
    SNAKE = "snake"
    SCREAMING_SNAKE = "screaming-snake"
    KEBAB = "kebab"
    SCREAMING_KEBAB = "screaming-kebab"
    TRAIN = "train"
    TITLE = "title"
    LOWER = "lower"
    UPPER = "upper"

    @property
    def display(self) -> str:
        return _DISPLAY_NAMES[self]

    @property
    def aliases(self) -> Tuple[str, ...]:
        compact = self.value.replace("-", "")
        return (self.value, compact, self.display.lower())

    def apply(self, text: str) -> str:
        """Rewrite `text` in this style, wrapping converter failures."""
        try:
            return _CONVERTERS[self](text)
        except Exception as exc:
            raise CaseTransformError(self.display, exc) from exc

    @classmethod
    def resolve(cls, value: str | None) -> "CaseStyle":
        """
        Resolve user input to a style.

        Matching is case-insensitive. An exact alias match wins; otherwise the
        input has to be a prefix of the aliases of exactly one style.
        """
        if not value:
            raise UnknownCaseStyle(value)
        needle = value.strip().lower()
        if not needle:
            raise UnknownCaseStyle(value)

        for style in cls:
            if needle in style.aliases:
                return style

        matches = [
            style for style in cls
            if any(alias.startswith(needle) for alias in style.aliases)
        ]
        if len(matches) != 1:
            raise UnknownCaseStyle(value)
        return matches[0]


def available_cases() -> List[CaseStyle]:
    return list(CaseStyle)


def _screaming_kebab(text: str) -> str:
    return textcase.kebab(text).upper()


def _train(text: str) -> str:
    return "-".join(textcase.title(text).split(" "))


_DISPLAY_NAMES: Dict[CaseStyle, str] = {
    CaseStyle.CAMEL: "CamelCase",
    CaseStyle.PASCAL: "PascalCase",
    CaseStyle.SNAKE: "SnakeCase",
    CaseStyle.SCREAMING_SNAKE: "ScreamingSnakeCase",
    CaseStyle.KEBAB: "KebabCase",
    CaseStyle.SCREAMING_KEBAB: "ScreamingKebabCase",
    CaseStyle.TRAIN: "TrainCase",
    CaseStyle.TITLE: "TitleCase",
    CaseStyle.LOWER: "LowerCase",
    CaseStyle.UPPER: "UpperCase",
}

# looked up on every call so tests can swap a converter out
_CONVERTERS: Dict[CaseStyle, Callable[[str], str]] = {
    CaseStyle.CAMEL: textcase.camel,
    CaseStyle.PASCAL: textcase.pascal,
    CaseStyle.SNAKE: textcase.snake,
    CaseStyle.SCREAMING_SNAKE: textcase.constant,
    CaseStyle.KEBAB: textcase.kebab,
    CaseStyle.SCREAMING_KEBAB: _screaming_kebab,
    CaseStyle.TRAIN: _train,
    CaseStyle.TITLE: textcase.title,
    CaseStyle.LOWER: textcase.lower,
    CaseStyle.UPPER: textcase.upper,
}
