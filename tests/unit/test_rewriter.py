"""
Unit tests for the rewriter.
"""

import pytest

from synthetic_codebase.services.rewriter import Rewriter, coerce_source_text
from synthetic_codebase.services.catalog import RuleCatalog
from synthetic_codebase.services.rules import Rule
from synthetic_codebase.exceptions import InvalidInputError


SCENARIO_A = (
    "function getCustomerData(customerId) { return fetch('https://api.stripe.com/v1/customers/' "
    "+ customerId); }"
)
SCENARIO_A_OUTPUT = (
    "function fetchEntityData(entityIdentifier) { return fetch('https://api.example.com/endpoint' "
    "+ entityIdentifier); }"
)


class TestCoerceSourceText:
    """Test cases for input coercion."""

    def test_str_passes_through(self):
        assert coerce_source_text("abc") == "abc"

    def test_bytes_decoded(self):
        assert coerce_source_text("café".encode("utf-8")) == "café"

    def test_none_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            coerce_source_text(None)

        assert "required" in str(exc_info.value)

    def test_non_text_rejected(self):
        with pytest.raises(InvalidInputError) as exc_info:
            coerce_source_text(42)

        assert "got int" in str(exc_info.value)

    def test_invalid_utf8_rejected(self):
        with pytest.raises(InvalidInputError):
            coerce_source_text(b"\xff\xfe\xfd")


class TestRewriter:
    """Test cases for Rewriter."""

    def setup_method(self):
        self.rewriter = Rewriter()

    def test_scenario_paranoid(self):
        """Vendor URL, entity names and the method name are all generalized."""
        result = self.rewriter.transform(SCENARIO_A, "paranoid")

        assert result.transformed_text == SCENARIO_A_OUTPUT
        assert "customer" not in result.transformed_text.lower()
        assert "stripe" not in result.transformed_text.lower()
        assert result.profile == "paranoid"
        assert result.intensity == 0.9
        assert result.changed is True

    def test_no_sensitive_vocabulary_unchanged(self):
        source = "function add(a, b) { return a + b; }"

        for profile in ("paranoid", "balanced", "performance"):
            result = self.rewriter.transform(source, profile)
            assert result.transformed_text == source
            assert result.changed is False
            assert result.report.total_replacements == 0

    def test_email_replaced(self):
        text = self.rewriter.rewrite("notify alice@acme.com today")

        assert text == "notify contact@example.com today"

    def test_comment_replaced(self):
        assert self.rewriter.rewrite("// proprietary risk model") == "// Core application logic"

    def test_hash_comment_and_docstring(self):
        source = '"""Internal helpers for the clinic."""\n# Confidential scoring weights\n'

        text = self.rewriter.rewrite(source)

        assert text == '"""Generic implementation"""\n# Core processing logic\n'

    def test_floor_division_not_a_comment(self):
        source = "x = total // count  # internal note"

        text = self.rewriter.rewrite(source)

        assert text == "x = aggregateValue // count  # Core processing logic"

    def test_trailing_line_comment_after_code(self):
        text = self.rewriter.rewrite("const limit = 10 // internal pricing cap")

        assert text == "const limit = 10 // Core application logic"

    def test_plain_comment_kept(self):
        assert self.rewriter.rewrite("// add two numbers") == "// add two numbers"

    def test_contact_masks(self):
        text = self.rewriter.rewrite("call 555-867-5309 ssn 078-05-1120")

        assert text == "call 555-123-4567 ssn 123-45-6789"

    def test_secret_constants(self):
        source = "STRIPE_API_KEY DATABASE_URL PAYPAL_CLIENT_SECRET"

        assert self.rewriter.rewrite(source) == "API_CREDENTIAL REMOTE_ENDPOINT CLIENT_CREDENTIALS"

    def test_type_names(self):
        assert self.rewriter.rewrite("class CustomerService {}") == "class EntityService {}"
        assert self.rewriter.rewrite("customerRepository") == "entityRepository"

    def test_variable_names(self):
        text = self.rewriter.rewrite("totalPrice taxRate orderTotal")

        assert text == "unitValue ratioValue aggregateValue"

    def test_sql_target(self):
        text = self.rewriter.rewrite("SELECT * FROM customers WHERE id = 1")

        assert text == "SELECT data FROM entity_table WHERE id = 1"

    def test_snake_case_identifiers(self):
        text = self.rewriter.rewrite("def get_patient(patient_id):")

        assert text == "def fetch_entity(entity_identifier):"

    def test_workflow_verbs_gated_by_profile(self):
        source = "approvePayment(order)"

        assert self.rewriter.rewrite(source, "balanced") == "processPendingRequest(operation)"
        assert self.rewriter.rewrite(source, "performance") == "approvePayment(operation)"

    def test_domain_vocabulary_paranoid_only(self):
        source = "const roi = 0.2;"

        assert self.rewriter.rewrite(source, "paranoid") == "const core_metric = 0.2;"
        assert self.rewriter.rewrite(source, "balanced") == source

    def test_deterministic(self):
        first = self.rewriter.transform(SCENARIO_A, "paranoid")
        second = self.rewriter.transform(SCENARIO_A, "paranoid")

        assert first.transformed_text == second.transformed_text
        assert first.report.to_dict() == second.report.to_dict()

    def test_second_pass_is_stable(self):
        once = self.rewriter.rewrite(SCENARIO_A, "paranoid")

        assert self.rewriter.rewrite(once, "paranoid") == once

    def test_empty_input(self):
        result = self.rewriter.transform("")

        assert result.transformed_text == ""
        assert result.report.total_replacements == 0
        assert len(result.report.categories) == 15

    def test_bytes_input(self):
        assert self.rewriter.rewrite(b"alice@acme.com") == "contact@example.com"

    def test_invalid_input(self):
        with pytest.raises(InvalidInputError):
            self.rewriter.transform(None)

    def test_language_hint_recorded(self):
        result = self.rewriter.transform("x = 1", language_hint="python")

        assert result.language_hint == "python"
        assert result.transformed_text == "x = 1"

    def test_report_counts(self):
        result = self.rewriter.transform(SCENARIO_A, "paranoid")
        report = result.report

        assert [item.category for item in report.categories] == RuleCatalog.default().category_names()
        assert report.skipped_rules == 0
        assert report.degraded is False
        assert report.get("endpoints").replacements == 1
        assert report.get("method_names").replacements == 1
        assert report.get("parameters").replacements == 2


class TestRewriterFailures:
    """Test cases for rules that cannot be applied."""

    def test_broken_rule_skipped_and_reported(self):
        catalog = RuleCatalog.default()
        catalog.add_rule("contact_info", Rule("broken", r"(unclosed", "x"))
        rewriter = Rewriter(catalog)

        result = rewriter.transform("alice@acme.com")

        assert result.transformed_text == "contact@example.com"
        assert result.report.skipped_rules == 1
        assert result.report.degraded is True

        category_report = result.report.get("contact_info")
        assert category_report.rules_skipped == 1
        assert category_report.errors[0].startswith("broken: ")

    def test_rewrite_continues_after_skipped_rule(self):
        catalog = RuleCatalog.default()
        catalog.add_rule("comments", Rule("bad_group", r"TODO", r"\g<missing>"))
        rewriter = Rewriter(catalog)

        text = rewriter.rewrite("TODO alice@acme.com")

        assert text == "TODO contact@example.com"

    def test_render_failure_skipped(self):
        """A rule that fails while rendering is skipped and later rules still run."""
        catalog = RuleCatalog.default()
        catalog.get_category("contact_info").get_rule("national_id").replacement = ""
        rewriter = Rewriter(catalog)

        result = rewriter.transform("ssn 078-05-1120 alice@acme.com")

        assert "contact@example.com" in result.transformed_text
        assert result.report.get("contact_info").rules_skipped == 1
        assert result.report.get("contact_info").errors[0].startswith("national_id: ")

    def test_custom_catalog(self):
        catalog = RuleCatalog.from_dict({
            "categories": [
                {"name": "codenames", "rules": [
                    {"name": "falcon", "pattern": r"\bFalcon\b", "replacement": "Alpha"}
                ]}
            ]
        })
        rewriter = Rewriter(catalog)

        assert rewriter.rewrite("Project Falcon") == "Project Alpha"
        assert rewriter.resolver.catalog is catalog
