"""
Rule catalog: the ordered table of rewrite rule categories.
"""

import json
from pathlib import Path
from typing import List, Dict, Any, Optional, Iterator

from ..exceptions import CatalogException
from .rules import Rule, RuleCategory
from . import vocabulary as vocab


CATALOG_VERSION = "1.0"


class RuleCatalog:
    """Ordered, versioned table of rule categories."""

    def __init__(self, categories: List[RuleCategory], version: str = CATALOG_VERSION):
        """
        Initialize the rule catalog.

        Args:
            categories: Rule categories in application order
            version: Catalog version label

        Raises:
            CatalogException: If category names are duplicated
        """
        names = [category.name for category in categories]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise CatalogException(f"Duplicate rule categories: {duplicates}")

        self.categories = list(categories)
        self.version = version

    @classmethod
    def default(cls) -> "RuleCatalog":
        """Build the built-in rule table."""
        return cls(build_default_categories(), version=CATALOG_VERSION)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RuleCatalog":
        """
        Create a catalog from its dictionary form.

        Args:
            data: Dictionary with "categories" and optional "version"

        Returns:
            Rule catalog

        Raises:
            CatalogException: If the table is malformed
        """
        if not isinstance(data, dict) or not isinstance(data.get("categories"), list):
            raise CatalogException("Rule table must be an object with a 'categories' list")

        try:
            categories = [RuleCategory.from_dict(item) for item in data["categories"]]
        except (TypeError, ValueError) as e:
            raise CatalogException(f"Malformed rule table: {str(e)}")
        return cls(categories, version=str(data.get("version", CATALOG_VERSION)))

    @classmethod
    def from_json_file(cls, path: str) -> "RuleCatalog":
        """Load a catalog from a JSON rule table."""
        try:
            with open(Path(path), "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise CatalogException(f"Failed to load rule table from {path}: {str(e)}")

        return cls.from_dict(data)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "version": self.version,
            "categories": [category.to_dict() for category in self.categories]
        }

    def to_json_file(self, path: str) -> None:
        """Write the catalog as a JSON rule table."""
        with open(Path(path), "w", encoding="utf-8") as f:
            json.dump(self.to_dict(), f, indent=2)

    def category_names(self) -> List[str]:
        return [category.name for category in self.categories]

    def get_category(self, name: str) -> Optional[RuleCategory]:
        for category in self.categories:
            if category.name == name:
                return category
        return None

    def active_categories(self, intensity: float) -> List[RuleCategory]:
        """Categories enabled at an intensity, in application order."""
        return [category for category in self.categories if category.is_active(intensity)]

    def add_rule(self, category_name: str, rule: Rule) -> None:
        """
        Append a rule to a category.

        Raises:
            CatalogException: If the category is unknown or the rule name is taken
        """
        category = self.get_category(category_name)
        if category is None:
            raise CatalogException(f"Unknown rule category '{category_name}'")

        if category.get_rule(rule.name) is not None:
            raise CatalogException(
                f"Rule '{rule.name}' already exists in category '{category_name}'"
            )

        category.rules.append(rule)

    def remove_rule(self, category_name: str, rule_name: str) -> bool:
        """Remove a rule by name. Returns False if it was not present."""
        category = self.get_category(category_name)
        if category is None:
            return False

        rule = category.get_rule(rule_name)
        if rule is None:
            return False

        category.rules.remove(rule)
        return True

    def rule_count(self) -> int:
        return sum(len(category.rules) for category in self.categories)

    def __iter__(self) -> Iterator[RuleCategory]:
        return iter(self.categories)

    def __len__(self) -> int:
        return len(self.categories)

    def __repr__(self) -> str:
        return f"RuleCatalog(version='{self.version}', categories={len(self.categories)}, rules={self.rule_count()})"


def _contact_rules() -> List[Rule]:
    return [
        Rule("email", vocab.EMAIL_PATTERN, vocab.PLACEHOLDER_EMAIL,
             description="Email addresses"),
        Rule("payment_card", vocab.CARD_PATTERN, vocab.CARD_MASK, strategy="digit_mask",
             description="16-digit card numbers, separators kept"),
        Rule("national_id", vocab.NATIONAL_ID_PATTERN, vocab.NATIONAL_ID_MASK, strategy="digit_mask",
             description="SSN-shaped identifiers"),
        Rule("phone", vocab.PHONE_PATTERN, vocab.PHONE_MASK, strategy="digit_mask",
             description="North American phone numbers"),
        Rule("ip_address", vocab.IP_PATTERN, vocab.PLACEHOLDER_IP,
             description="IPv4 addresses"),
        Rule("domain", vocab.DOMAIN_PATTERN, vocab.PLACEHOLDER_DOMAIN,
             description="Bare domain names outside URLs and emails"),
    ]


def _secret_rules() -> List[Rule]:
    return [
        Rule(f"{concern}_constant", vocab.SECRET_PATTERNS[concern],
             vocab.PLACEHOLDER_CONSTANTS[concern])
        for concern in vocab.SECRET_ORDER
    ]


def _endpoint_rules() -> List[Rule]:
    rules = [
        Rule("url", vocab.URL_PATTERN,
             f"{vocab.PLACEHOLDER_API_URL}|{vocab.PLACEHOLDER_HOST_URL}", strategy="url",
             description="Full URLs; public hosts and private hosts get separate placeholders"),
        Rule("api_path", vocab.API_PATH_PATTERN, vocab.PLACEHOLDER_API_PATH),
        Rule("version_path", vocab.VERSION_PATH_PATTERN, vocab.PLACEHOLDER_VERSION_PATH),
    ]
    for name, segments, placeholder in vocab.RESOURCE_PATHS:
        rules.append(Rule(name, vocab.resource_path_pattern(segments), placeholder))
    return rules


def _comment_rules() -> List[Rule]:
    guard = vocab.COMMENT_GUARD
    return [
        Rule("block_comment", vocab.BLOCK_COMMENT_PATTERN, "/* Implementation details */", guard=guard),
        Rule("double_docstring", vocab.DOUBLE_DOCSTRING_PATTERN, '"""Generic implementation"""', guard=guard),
        Rule("single_docstring", vocab.SINGLE_DOCSTRING_PATTERN, "'''Generic implementation'''", guard=guard),
        Rule("line_comment", vocab.LINE_COMMENT_PATTERN, "// Core application logic", guard=guard),
        Rule("hash_comment", vocab.HASH_COMMENT_PATTERN, "# Core processing logic", guard=guard),
    ]


def _literal_rules() -> List[Rule]:
    guard = vocab.LITERAL_GUARD
    return [
        Rule("double_quoted", vocab.DOUBLE_QUOTED_PATTERN, '"generic_data_value"', guard=guard),
        Rule("single_quoted", vocab.SINGLE_QUOTED_PATTERN, "'generic_data_value'", guard=guard),
        Rule("template_literal", vocab.TEMPLATE_LITERAL_PATTERN, "`generic_template_value`", guard=guard),
    ]


def _compound_rules(families) -> List[Rule]:
    rules = []
    for name, verbs, nouns, camel, snake in families:
        rules.append(Rule(f"{name}_camel", vocab.camel_compound(verbs, nouns),
                          camel + r"\g<tail>", strategy="case_preserving"))
        rules.append(Rule(f"{name}_snake", vocab.snake_compound(verbs, nouns),
                          snake + r"\g<tail>", strategy="case_preserving"))
    return rules


def _parameter_rules() -> List[Rule]:
    return [
        Rule(name, vocab.parameter_pattern(prefixes, suffixes), replacement,
             strategy="case_preserving")
        for name, prefixes, suffixes, replacement in vocab.PARAMETER_FAMILIES
    ]


def _datastore_rules() -> List[Rule]:
    rules = [
        Rule(f"sql_{name}", pattern, replacement)
        for name, pattern, replacement in vocab.SQL_PATTERNS
    ]
    for name, nouns, replacement in vocab.TABLE_FAMILIES:
        rules.append(Rule(name, vocab.table_pattern(nouns), replacement))
    return rules


def _variable_rules() -> List[Rule]:
    return [
        Rule(f"{word}_holder", vocab.identifier_with_segment(word), replacement,
             strategy="case_preserving")
        for word, replacement in vocab.MONETARY_WORDS
    ]


def _noun_rules(name: str, words: List[str], singular: str, plural: str) -> List[Rule]:
    return [
        Rule(name, vocab.whole_word_pattern(words, plural=True), f"{singular}|{plural}",
             strategy="noun")
    ]


def _type_rules() -> List[Rule]:
    rules = []
    for name, nouns, canonical in vocab.TYPE_FAMILIES:
        rules.append(Rule(f"{name}_declaration", vocab.type_declaration_pattern(nouns),
                          r"\g<kw>\g<ws>" + canonical + r"\g<tail>"))
    for name, nouns, canonical in vocab.TYPE_FAMILIES:
        rules.append(Rule(f"{name}_role", vocab.role_compound_pattern(nouns),
                          canonical + r"\g<role>\g<tail>", strategy="case_preserving"))
    return rules


def _domain_rules() -> List[Rule]:
    return [
        Rule(tag, vocab.whole_word_pattern(words), tag)
        for tag, words in vocab.DOMAIN_CLUSTERS
    ]


def build_default_categories() -> List[RuleCategory]:
    """
    Build the default categories in application order.

    Contextual categories come first so a sensitive literal is redacted as
    a whole before narrower rules touch its substrings. Endpoints precede
    comments and literals so a URL inside a literal still becomes the
    endpoint placeholder. Entity nouns precede type names.
    """
    return [
        RuleCategory("contact_info", 0.0, _contact_rules(),
                     "Emails, phone numbers, national IDs, card numbers, IPs, domains"),
        RuleCategory("secrets_config", 0.0, _secret_rules(),
                     "Credential, endpoint, vendor, database and auth constants"),
        RuleCategory("endpoints", 0.0, _endpoint_rules(),
                     "URLs and API paths"),
        RuleCategory("comments", 0.0, _comment_rules(),
                     "Comments and docstrings containing sensitivity keywords"),
        RuleCategory("string_literals", 0.0, _literal_rules(),
                     "String literals containing sensitivity keywords"),
        RuleCategory("method_names", 0.0, _compound_rules(vocab.METHOD_FAMILIES),
                     "verb+noun method names"),
        RuleCategory("parameters", 0.0, _parameter_rules(),
                     "entity+identifier and entity+data names"),
        RuleCategory("datastore", 0.0, _datastore_rules(),
                     "SQL targets and table identifiers"),
        RuleCategory("variable_names", 0.0, _variable_rules(),
                     "Identifiers carrying monetary or metric words"),
        RuleCategory("entity_nouns", 0.0,
                     _noun_rules("entity_noun", vocab.ENTITY_NOUNS, "entity", "entities")),
        RuleCategory("operation_nouns", 0.0,
                     _noun_rules("operation_noun", vocab.OPERATION_NOUNS, "operation", "operations")),
        RuleCategory("resource_nouns", 0.0,
                     _noun_rules("resource_noun", vocab.RESOURCE_NOUNS, "resource", "resources")),
        RuleCategory("record_nouns", 0.0,
                     _noun_rules("record_noun", vocab.RECORD_NOUNS, "record", "records")),
        RuleCategory("type_names", 0.0, _type_rules(),
                     "Type declarations and role-suffixed compounds"),
        RuleCategory("workflow_verbs", 0.6, _compound_rules(vocab.WORKFLOW_FAMILIES),
                     "Workflow verbs bound to sensitive nouns"),
        RuleCategory("domain_vocabulary", 0.8, _domain_rules(),
                     "Industry jargon mapped to coarse domain tags"),
    ]
