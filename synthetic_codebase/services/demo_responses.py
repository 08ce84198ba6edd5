"""
Static demo responses used to compare assistant output on original and
sanitized code.

This is a lookup table, not model inference, and nothing in the
sanitization pipeline depends on it.
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional


DEFAULT_QUERY_CATEGORY = "code-review"


@dataclass(frozen=True)
class DemoQuery:
    """A canned assistant query."""

    category: str
    title: str
    description: str
    query: str


@dataclass(frozen=True)
class DemoResponse:
    """Canned answers for the original and the sanitized code."""

    category: str
    query: str
    original: str
    synthetic: str
    similarity_score: int = 95
    usefulness: int = 93

    def to_dict(self) -> Dict[str, Any]:
        return {
            "category": self.category,
            "query": self.query,
            "original": self.original,
            "synthetic": self.synthetic,
            "similarity_score": self.similarity_score,
            "usefulness": self.usefulness
        }


DEMO_QUERIES: List[DemoQuery] = [
    DemoQuery(
        "code-review", "Code Review & Bug Detection",
        "Find potential bugs, security issues, and code quality problems",
        "Please review this code for potential bugs, security vulnerabilities, and suggest improvements."
    ),
    DemoQuery(
        "architecture", "Architecture Analysis",
        "Analyze system design and suggest architectural improvements",
        "Analyze the architecture and design patterns in this code. How could the structure be improved?"
    ),
    DemoQuery(
        "refactoring", "Refactoring Recommendations",
        "Suggest code organization and refactoring improvements",
        "How could this code be refactored to be more maintainable and readable?"
    ),
    DemoQuery(
        "performance", "Performance Optimization",
        "Identify performance bottlenecks and optimization opportunities",
        "Analyze this code for performance bottlenecks and optimization opportunities."
    ),
    DemoQuery(
        "testing", "Testing Strategy",
        "Recommend comprehensive testing approaches and test cases",
        "What testing strategy would you recommend for this code?"
    ),
]


_RESPONSES: Dict[str, Dict[str, str]] = {
    "code-review": {
        "original": (
            "## Code Review Analysis\n\n"
            "1. The API key and secret key are stored in plain text in the constructor.\n"
            "2. `getSentimentScore` and `sendOrderToExchange` lack error handling for network failures.\n"
            "3. The risk threshold and weighting coefficients should be configurable constants.\n"
            "4. The trading algorithm is visible and could be reverse-engineered."
        ),
        "synthetic": (
            "## Code Review Analysis\n\n"
            "1. The API credentials are stored in plain text in the constructor.\n"
            "2. `getAnalysisScore` and `sendRequestToEndpoint` lack error handling for network failures.\n"
            "3. The threshold value and weighting coefficients should be configurable constants.\n"
            "4. The calculation logic would benefit from better abstraction."
        ),
    },
    "architecture": {
        "original": (
            "## Architecture Analysis\n\n"
            "The TradingEngine class handles signal calculation, position sizing and order execution.\n"
            "Split it into SignalCalculator, PositionSizer and OrderExecutor, and inject the market "
            "data and sentiment clients."
        ),
        "synthetic": (
            "## Architecture Analysis\n\n"
            "The main class handles analysis, calculation and execution.\n"
            "Split it into AnalysisCalculator, ValueProcessor and RequestExecutor, and inject the "
            "data source clients."
        ),
    },
    "refactoring": {
        "original": (
            "## Refactoring Recommendations\n\n"
            "Extract a TradingConfig class holding RISK_THRESHOLD and the momentum, sentiment and "
            "volatility weights, then move signal logic into SignalCalculator."
        ),
        "synthetic": (
            "## Refactoring Recommendations\n\n"
            "Extract a ProcessingConfig class holding THRESHOLD_VALUE and the primary, secondary and "
            "tertiary weights, then move calculation logic into AnalysisCalculator."
        ),
    },
    "performance": {
        "original": (
            "## Performance Optimization Analysis\n\n"
            "`calculateTradingSignal` makes sequential API calls. Fetch momentum, sentiment and "
            "volatility concurrently and cache market data between requests."
        ),
        "synthetic": (
            "## Performance Optimization Analysis\n\n"
            "`calculateAnalysisValue` makes sequential API calls. Fetch the inputs concurrently "
            "and cache data between requests."
        ),
    },
    "testing": {
        "original": (
            "## Testing Strategy Recommendations\n\n"
            "Mock the sentiment API and order execution, test zero or negative market data, and "
            "verify position size stays under the risk threshold."
        ),
        "synthetic": (
            "## Testing Strategy Recommendations\n\n"
            "Mock the analysis API and request execution, test zero or negative data, and verify "
            "processing size stays under the threshold."
        ),
    },
}


class StaticDemoResponseProvider:
    """Looks up canned responses by query category."""

    def __init__(self, responses: Optional[Dict[str, Dict[str, str]]] = None):
        self.responses = responses or _RESPONSES
        self.queries = {query.category: query for query in DEMO_QUERIES}

    def categories(self) -> List[str]:
        return list(self.responses)

    def get_demo_response(self, query_category: str) -> DemoResponse:
        """
        Return the canned response for a query category.

        Unknown categories fall back to the code review response.
        """
        if query_category not in self.responses:
            query_category = DEFAULT_QUERY_CATEGORY

        texts = self.responses[query_category]
        query = self.queries.get(query_category)
        return DemoResponse(
            category=query_category,
            query=query.query if query else "",
            original=texts["original"],
            synthetic=texts["synthetic"]
        )
