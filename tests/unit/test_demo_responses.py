"""
Unit tests for the static demo response provider.
"""

from synthetic_codebase.services.demo_responses import (
    StaticDemoResponseProvider, DEMO_QUERIES, DEFAULT_QUERY_CATEGORY
)


class TestStaticDemoResponseProvider:
    """Test cases for StaticDemoResponseProvider."""

    def setup_method(self):
        self.provider = StaticDemoResponseProvider()

    def test_categories(self):
        assert self.provider.categories() == [
            "code-review", "architecture", "refactoring", "performance", "testing"
        ]
        assert [query.category for query in DEMO_QUERIES] == self.provider.categories()

    def test_get_demo_response(self):
        response = self.provider.get_demo_response("architecture")

        assert response.category == "architecture"
        assert response.query.startswith("Analyze the architecture")
        assert "TradingEngine" in response.original
        assert "TradingEngine" not in response.synthetic

    def test_scores_are_fixed(self):
        """Repeated lookups return identical responses."""
        first = self.provider.get_demo_response("testing")
        second = self.provider.get_demo_response("testing")

        assert first == second
        assert first.similarity_score == 95
        assert first.usefulness == 93

    def test_unknown_category_falls_back(self):
        response = self.provider.get_demo_response("poetry")

        assert response.category == DEFAULT_QUERY_CATEGORY
        assert response.original.startswith("## Code Review Analysis")

    def test_custom_responses(self):
        provider = StaticDemoResponseProvider({
            "code-review": {"original": "o", "synthetic": "s"},
            "custom": {"original": "co", "synthetic": "cs"},
        })

        response = provider.get_demo_response("custom")

        assert response.synthetic == "cs"
        assert response.query == ""

    def test_to_dict(self):
        data = self.provider.get_demo_response("code-review").to_dict()

        assert set(data) == {
            "category", "query", "original", "synthetic", "similarity_score", "usefulness"
        }
