"""
Sensitive-pattern families counted before and after a rewrite.
"""

import re
from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Tuple

from . import vocabulary as vocab


def _never_canonical(text: str) -> bool:
    return False


@dataclass
class PatternFamily:
    """A named group of detectors whose matches are counted together."""

    name: str
    patterns: List[re.Pattern]
    is_canonical: Callable[[str], bool] = _never_canonical
    description: str = ""

    def find(self, text: str) -> List[Tuple[int, int, str]]:
        """
        Find non-overlapping, non-canonical matches across all detectors.

        Overlapping matches from different detectors are counted once, the
        earliest-starting (then longest) match winning.
        """
        spans = []
        for pattern in self.patterns:
            for match in pattern.finditer(text):
                if match.end() > match.start():
                    spans.append((match.start(), match.end(), match.group(0)))

        spans.sort(key=lambda span: (span[0], -(span[1] - span[0])))

        found = []
        last_end = -1
        for start, end, matched in spans:
            if start < last_end:
                continue
            last_end = end
            if not self.is_canonical(matched):
                found.append((start, end, matched))
        return found

    def count(self, text: str) -> int:
        return len(self.find(text))


_CANONICAL_URLS = {vocab.PLACEHOLDER_API_URL, vocab.PLACEHOLDER_HOST_URL}
_CANONICAL_PATHS = {vocab.PLACEHOLDER_API_PATH, vocab.PLACEHOLDER_VERSION_PATH}
_CANONICAL_SENSITIVE = {vocab.PLACEHOLDER_EMAIL, vocab.PLACEHOLDER_IP} | set(vocab.PLACEHOLDER_CONSTANTS.values())
_DIGIT_MASKS = (vocab.PHONE_MASK, vocab.CARD_MASK, vocab.NATIONAL_ID_MASK)


def _is_canonical_sensitive(text: str) -> bool:
    if text in _CANONICAL_SENSITIVE:
        return True
    digits = "".join(char for char in text if char.isdigit())
    if len(digits) >= 9 and any(mask.endswith(digits) for mask in _DIGIT_MASKS):
        return True
    return False


def _compile_all(sources: List[str]) -> List[re.Pattern]:
    return [re.compile(source) for source in sources]


def build_default_families() -> Dict[str, PatternFamily]:
    """Build the six scored families from the shared catalog patterns."""
    method_sources = []
    for _, verbs, nouns, _, _ in vocab.METHOD_FAMILIES:
        method_sources.append(vocab.camel_compound(verbs, nouns))
        method_sources.append(vocab.snake_compound(verbs, nouns))

    type_sources = []
    for _, nouns, _ in vocab.TYPE_FAMILIES:
        type_sources.append(vocab.type_declaration_pattern(nouns))
        type_sources.append(vocab.role_compound_pattern(nouns))

    sensitive_sources = [
        vocab.EMAIL_PATTERN,
        vocab.CARD_PATTERN,
        vocab.NATIONAL_ID_PATTERN,
        vocab.PHONE_PATTERN,
        vocab.IP_PATTERN,
    ] + [vocab.SECRET_PATTERNS[concern] for concern in vocab.SECRET_ORDER]

    families = [
        PatternFamily(
            "business_vocabulary",
            _compile_all([vocab.segment_pattern(vocab.BUSINESS_VOCABULARY)]),
            description="Business words as whole words or identifier segments"
        ),
        PatternFamily(
            "urls",
            _compile_all([vocab.URL_PATTERN]),
            lambda text: text in _CANONICAL_URLS,
            "Absolute URLs"
        ),
        PatternFamily(
            "api_endpoints",
            _compile_all([vocab.API_PATH_PATTERN, vocab.VERSION_PATH_PATTERN]),
            lambda text: text in _CANONICAL_PATHS,
            "Versioned API paths"
        ),
        PatternFamily(
            "sensitive_data",
            _compile_all(sensitive_sources),
            _is_canonical_sensitive,
            "Contact details and secret constants"
        ),
        PatternFamily(
            "method_names",
            _compile_all(method_sources),
            description="verb+noun method names"
        ),
        PatternFamily(
            "type_names",
            _compile_all(type_sources),
            description="Type declarations and role compounds built from business nouns"
        ),
    ]
    return {family.name: family for family in families}


class PatternDetector:
    """Counts every family in a text."""

    def __init__(self, families: Optional[Dict[str, PatternFamily]] = None):
        self.families = families or build_default_families()

    def count(self, text: str) -> Dict[str, int]:
        """
        Count matches of every family.

        Args:
            text: Text to scan

        Returns:
            Mapping of family name to match count
        """
        return {name: family.count(text) for name, family in self.families.items()}

    def find(self, family_name: str, text: str) -> List[str]:
        """Return the matched strings of one family."""
        return [matched for _, _, matched in self.families[family_name].find(text)]
