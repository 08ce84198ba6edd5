"""
Rewrite rules and rule categories.
"""

import re
from dataclasses import dataclass, field
from typing import List, Dict, Any, Optional, Tuple

from ..exceptions import CatalogException, RuleApplicationWarning
from .vocabulary import PUBLIC_TLD_PATTERN


STRATEGIES = ["template", "case_preserving", "noun", "url", "digit_mask"]

_FLAG_NAMES = {
    "IGNORECASE": re.IGNORECASE,
    "MULTILINE": re.MULTILINE,
    "DOTALL": re.DOTALL,
}

_PUBLIC_TLD = re.compile(PUBLIC_TLD_PATTERN, re.IGNORECASE)
_CAMEL_BOUNDARY = re.compile(r"(?<=[a-z0-9])(?=[A-Z])")


def to_snake_case(name: str) -> str:
    """Convert a camelCase name to snake_case."""
    return _CAMEL_BOUNDARY.sub("_", name).lower()


def match_case(source: str, replacement: str) -> str:
    """
    Give ``replacement`` the case shape of ``source``.

    ALL_CAPS sources produce UPPER_SNAKE, snake_case sources produce
    snake_case, and otherwise only the first letter follows the source.

    Args:
        source: Matched text
        replacement: Canonical replacement, usually camelCase

    Returns:
        Replacement in the source's case style
    """
    if not source or not replacement:
        return replacement

    letters = [char for char in source if char.isalpha()]
    if len(letters) > 1 and all(char.isupper() for char in letters):
        return to_snake_case(replacement).upper()

    if "_" in source.strip("_") and source == source.lower():
        return to_snake_case(replacement)

    if source[0].isupper():
        return replacement[0].upper() + replacement[1:]
    if source[0].islower():
        return replacement[0].lower() + replacement[1:]
    return replacement


def mask_digits(source: str, mask: str) -> str:
    """Replace the digits of ``source`` with the tail of ``mask``, keeping separators."""
    digit_count = sum(1 for char in source if char.isdigit())
    if digit_count > len(mask):
        mask = mask * (digit_count // len(mask) + 1)
    digits = iter(mask[len(mask) - digit_count:])
    return "".join(next(digits) if char.isdigit() else char for char in source)


@dataclass
class Rule:
    """A single pattern-to-replacement rewrite."""

    name: str
    pattern: str
    replacement: str
    strategy: str = "template"
    flags: Tuple[str, ...] = ()
    guard: Optional[str] = None
    description: str = ""

    _compiled: Optional[re.Pattern] = field(default=None, init=False, repr=False, compare=False)
    _compiled_guard: Optional[re.Pattern] = field(default=None, init=False, repr=False, compare=False)

    def __post_init__(self):
        """Validate strategy and flag names."""
        if self.strategy not in STRATEGIES:
            raise CatalogException(
                f"Rule '{self.name}' has unknown strategy '{self.strategy}'. "
                f"Must be one of: {STRATEGIES}"
            )

        self.flags = tuple(self.flags)
        unknown_flags = [flag for flag in self.flags if flag not in _FLAG_NAMES]
        if unknown_flags:
            raise CatalogException(
                f"Rule '{self.name}' has unknown flags: {unknown_flags}"
            )

        if self.strategy == "digit_mask" and not self.replacement:
            raise CatalogException(f"Rule '{self.name}' needs a non-empty digit mask")
        if self.strategy == "url" and not self.replacement.partition("|")[0]:
            raise CatalogException(f"Rule '{self.name}' needs a non-empty public placeholder")

    @property
    def compiled(self) -> re.Pattern:
        """Compiled matcher, built on first use."""
        if self._compiled is None:
            self._compiled = self._compile(self.pattern, "pattern")
        return self._compiled

    @property
    def compiled_guard(self) -> Optional[re.Pattern]:
        if self.guard is None:
            return None
        if self._compiled_guard is None:
            self._compiled_guard = self._compile(self.guard, "guard")
        return self._compiled_guard

    def _compile(self, source: str, label: str) -> re.Pattern:
        flags = 0
        for flag in self.flags:
            flags |= _FLAG_NAMES[flag]

        try:
            return re.compile(source, flags)
        except re.error as e:
            raise RuleApplicationWarning(
                f"Rule '{self.name}' has an invalid {label}: {str(e)}",
                rule_name=self.name
            )

    def apply(self, text: str) -> Tuple[str, int]:
        """
        Apply the rule to text.

        Args:
            text: Text to rewrite

        Returns:
            Tuple of (rewritten text, number of changed matches)

        Raises:
            RuleApplicationWarning: If the rule cannot compile or render
        """
        pattern = self.compiled
        guard = self.compiled_guard
        changed = 0

        def substitute(match: re.Match) -> str:
            nonlocal changed
            original = match.group(0)
            if guard is not None and not guard.search(original):
                return original

            rendered = self.render(match)
            if rendered != original:
                changed += 1
            return rendered

        try:
            rewritten = pattern.sub(substitute, text)
        except Exception as e:
            raise RuleApplicationWarning(
                f"Rule '{self.name}' failed to apply: {str(e)}",
                rule_name=self.name
            )

        return rewritten, changed

    def render(self, match: re.Match) -> str:
        """Build the replacement for one match."""
        original = match.group(0)

        if self.strategy == "template":
            return match.expand(self.replacement)

        if self.strategy == "case_preserving":
            return match_case(original, match.expand(self.replacement))

        if self.strategy == "noun":
            singular, _, plural = self.replacement.partition("|")
            word = (plural or singular + "s") if match.groupdict().get("plural") else singular
            return match_case(original, word)

        if self.strategy == "url":
            public, _, private = self.replacement.partition("|")
            private = private or public
            if original in (public, private):
                return original
            host = match.groupdict().get("host") or ""
            return public if _PUBLIC_TLD.search(host) else private

        # digit_mask
        return mask_digits(original, self.replacement)

    def matches(self, text: str) -> List[str]:
        """Return every match of this rule in text."""
        return [match.group(0) for match in self.compiled.finditer(text)]

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule to dictionary."""
        data = {
            "name": self.name,
            "pattern": self.pattern,
            "replacement": self.replacement,
            "strategy": self.strategy,
        }
        if self.flags:
            data["flags"] = list(self.flags)
        if self.guard is not None:
            data["guard"] = self.guard
        if self.description:
            data["description"] = self.description
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Rule":
        """Create rule from dictionary."""
        missing = [key for key in ("name", "pattern", "replacement") if key not in data]
        if missing:
            raise CatalogException(f"Rule definition missing keys: {missing}")

        return cls(
            name=data["name"],
            pattern=data["pattern"],
            replacement=data["replacement"],
            strategy=data.get("strategy", "template"),
            flags=tuple(data.get("flags", ())),
            guard=data.get("guard"),
            description=data.get("description", "")
        )


@dataclass
class RuleCategory:
    """Ordered group of rules addressing one semantic concern."""

    name: str
    min_intensity: float = 0.0
    rules: List[Rule] = field(default_factory=list)
    description: str = ""

    def __post_init__(self):
        if not 0.0 <= self.min_intensity < 1.0:
            raise CatalogException(
                f"Category '{self.name}' min_intensity must be in [0, 1), got {self.min_intensity}"
            )

    def is_active(self, intensity: float) -> bool:
        """Categories switch on strictly above their threshold."""
        return intensity > self.min_intensity

    def get_rule(self, name: str) -> Optional[Rule]:
        for rule in self.rules:
            if rule.name == name:
                return rule
        return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "min_intensity": self.min_intensity,
            "description": self.description,
            "rules": [rule.to_dict() for rule in self.rules]
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuleCategory":
        if "name" not in data:
            raise CatalogException("Category definition missing 'name'")

        return cls(
            name=data["name"],
            min_intensity=float(data.get("min_intensity", 0.0)),
            rules=[Rule.from_dict(rule) for rule in data.get("rules", [])],
            description=data.get("description", "")
        )
