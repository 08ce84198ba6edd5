"""
Rule-driven rewriter for source text.
"""

from typing import Optional, Union

from ..exceptions import InvalidInputError, RuleApplicationWarning
from ..models.results import CategoryReport, RewriteReport, TransformationResult
from .catalog import RuleCatalog
from .intensity import IntensityResolver, ProfileLike


def coerce_source_text(source_text: Union[str, bytes, None]) -> str:
    """
    Coerce input to text.

    Args:
        source_text: Source text or UTF-8 bytes

    Returns:
        Decoded text

    Raises:
        InvalidInputError: If the input is missing or not text-coercible
    """
    if source_text is None:
        raise InvalidInputError("Source text is required")

    if isinstance(source_text, bytes):
        try:
            return source_text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise InvalidInputError(f"Source bytes are not valid UTF-8: {str(e)}")

    if not isinstance(source_text, str):
        raise InvalidInputError(
            f"Source text must be str or bytes, got {type(source_text).__name__}"
        )

    return source_text


class Rewriter:
    """Applies the active rule categories to text, in catalog order."""

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        resolver: Optional[IntensityResolver] = None
    ):
        """
        Initialize the rewriter.

        Args:
            catalog: Rule catalog, defaults to the built-in table
            resolver: Profile resolver, defaults to one over the same catalog
        """
        if catalog is None:
            catalog = resolver.catalog if resolver is not None else RuleCatalog.default()
        self.catalog = catalog
        self.resolver = resolver or IntensityResolver(catalog)

    def rewrite(self, source_text: Union[str, bytes], profile: ProfileLike = None) -> str:
        """Rewrite text and return only the transformed text."""
        return self.transform(source_text, profile).transformed_text

    def transform(
        self,
        source_text: Union[str, bytes],
        profile: ProfileLike = None,
        language_hint: Optional[str] = None
    ) -> TransformationResult:
        """
        Rewrite text with every category active for the profile.

        Each rule sees the output of the rule before it. A rule that fails
        to compile or apply is skipped and recorded in the report; the
        rewrite continues with the text as it was before that rule.

        Args:
            source_text: Text to rewrite
            profile: Privacy profile name, intensity, or resolved profile
            language_hint: Optional language label carried into the result

        Returns:
            Transformation result with the per-category report

        Raises:
            InvalidInputError: If the input is not text-coercible
        """
        original = coerce_source_text(source_text)
        resolved = self.resolver.resolve(profile)

        text = original
        report = RewriteReport()

        for category in self.catalog.active_categories(resolved.intensity):
            category_report = CategoryReport(category=category.name)

            for rule in category.rules:
                try:
                    text, replacements = rule.apply(text)
                except RuleApplicationWarning as e:
                    category_report.rules_skipped += 1
                    category_report.errors.append(f"{rule.name}: {str(e)}")
                    continue

                category_report.rules_applied += 1
                category_report.replacements += replacements

            report.categories.append(category_report)

        return TransformationResult(
            original_text=original,
            transformed_text=text,
            profile=resolved.name,
            intensity=resolved.intensity,
            report=report,
            language_hint=language_hint
        )
