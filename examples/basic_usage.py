#!/usr/bin/env python3
"""
Basic usage example for the synthetic codebase sanitizer.

This example demonstrates:
- Basic configuration
- Sanitizing source text at each privacy profile
- Reading the privacy scores and the security assessment
- Storing and reloading an outcome under a session key
"""

from synthetic_codebase.manager import SanitizationManager
from synthetic_codebase.models.config import (
    SanitizerConfig, RewriteConfig, ObservabilityConfig, StorageConfig
)
from synthetic_codebase.services.demo_responses import StaticDemoResponseProvider


SAMPLE_CODE = """// Proprietary pricing engine
const STRIPE_API_KEY = process.env.STRIPE_API_KEY;
const SUPPORT_EMAIL = "billing@acmefinance.com";

class CustomerService {
  async getCustomerData(customerId) {
    return fetch('https://api.stripe.com/v1/customers/' + customerId);
  }

  calculateTax(orderTotal, taxRate) {
    return orderTotal * taxRate;
  }

  approvePayment(order) {
    const roi = order.amount / order.cost;
    return roi > 1.2;
  }
}
"""


def main():
    """Demonstrate basic sanitizer usage."""

    # Configure the sanitizer
    config = SanitizerConfig(
        rewrite=RewriteConfig(default_profile="balanced"),
        observability=ObservabilityConfig(log_level="WARN", log_format="text"),
        storage=StorageConfig(store_type="local", storage_path="./sanitizer_results")
    )

    manager = SanitizationManager(config)

    print("🔒 Sanitizing sample code...")
    for profile in ("performance", "balanced", "paranoid"):
        outcome = manager.transform(SAMPLE_CODE, profile, language_hint="javascript")
        if not outcome.succeeded:
            print(f"❌ {profile}: {outcome.reason}")
            continue

        metrics = outcome.metrics
        print(f"\n=== {profile} ===")
        print(outcome.transformed_text)
        print(f"   Privacy score:     {metrics.privacy_score}%")
        print(f"   Leakage risk:      {metrics.leakage_risk}%")
        print(f"   Competitive risk:  {metrics.competitive_risk}%")
        print(f"   AI parity:         {metrics.ai_parity_estimate}%")
        print(f"   Compliance ready:  {metrics.compliance_ready}")
        print(f"   Lines changed:     {outcome.diff.changed_lines}/{outcome.diff.total_lines}")

    # Store a result and read it back
    print("\n💾 Storing paranoid outcome under session key 'example'...")
    outcome = manager.transform(SAMPLE_CODE, "paranoid", session_key="example")
    stored = manager.get_result("example")
    print(f"   Stored outcome matches: {stored.transformed_text == outcome.transformed_text}")

    # Security assessment
    assessment = manager.assess(stored)
    print("\n🛡️  Security assessment:")
    print(f"   Privacy rating: {assessment.privacy_rating}")
    for check in assessment.checks:
        print(f"   [{check.status}] {check.name}: {check.description}")

    # Transformation details
    details = stored.metrics.transformation_details
    print("\n📊 Transformation details:")
    print(f"   Business terms reduced:    {details.business_terms_reduced}")
    print(f"   URLs anonymized:           {details.urls_anonymized}")
    print(f"   API endpoints generalized: {details.api_endpoints_generalized}")
    print(f"   Sensitive data obfuscated: {details.sensitive_data_obfuscated}")

    # Canned assistant comparison
    response = StaticDemoResponseProvider().get_demo_response("code-review")
    print("\n🤖 Demo assistant response on sanitized code:")
    print(response.synthetic)

    print(f"\n✅ Health: {manager.health_check()}")
    manager.delete_result("example")


if __name__ == "__main__":
    main()
