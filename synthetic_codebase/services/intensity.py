"""
Intensity resolution: privacy profile name to numeric intensity and active categories.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Union

from ..exceptions import ConfigurationException
from .catalog import RuleCatalog
from .rules import RuleCategory


DEFAULT_PROFILE_INTENSITIES = {"paranoid": 0.9, "balanced": 0.7, "performance": 0.4}


@dataclass(frozen=True)
class IntensityProfile:
    """Named privacy tier and its numeric intensity."""

    name: str
    intensity: float


ProfileLike = Union[None, str, float, IntensityProfile]


class IntensityResolver:
    """Maps privacy profiles to intensities and intensities to rule categories."""

    def __init__(
        self,
        catalog: Optional[RuleCatalog] = None,
        profile_intensities: Optional[Dict[str, float]] = None,
        default_profile: str = "balanced"
    ):
        """
        Initialize the resolver.

        Args:
            catalog: Rule catalog to select categories from
            profile_intensities: Profile name to intensity mapping
            default_profile: Profile used for unknown or missing names

        Raises:
            ConfigurationException: If the default profile is not defined
        """
        self.catalog = catalog or RuleCatalog.default()
        self.profile_intensities = dict(profile_intensities or DEFAULT_PROFILE_INTENSITIES)

        if default_profile not in self.profile_intensities:
            raise ConfigurationException(
                f"Default profile '{default_profile}' is not one of: {list(self.profile_intensities)}"
            )
        self.default_profile = default_profile

    def resolve(self, profile: ProfileLike = None) -> IntensityProfile:
        """
        Resolve a profile to a named intensity.

        Unrecognized names fall back to the default profile. A bare number is
        accepted as a custom intensity and clamped to (0, 1].
        """
        if isinstance(profile, IntensityProfile):
            return profile

        if isinstance(profile, (int, float)) and not isinstance(profile, bool):
            intensity = min(1.0, max(float(profile), 0.01))
            return IntensityProfile("custom", intensity)

        name = profile.strip().lower() if isinstance(profile, str) else ""
        if name not in self.profile_intensities:
            name = self.default_profile

        return IntensityProfile(name, self.profile_intensities[name])

    def active_categories(self, profile: ProfileLike = None) -> List[RuleCategory]:
        """Categories active for a profile, in catalog order."""
        return self.catalog.active_categories(self.resolve(profile).intensity)

    def active_category_names(self, profile: ProfileLike = None) -> List[str]:
        return [category.name for category in self.active_categories(profile)]

    def profiles(self) -> List[IntensityProfile]:
        """Known profiles ordered from weakest to strongest."""
        return sorted(
            (IntensityProfile(name, value) for name, value in self.profile_intensities.items()),
            key=lambda item: item.intensity
        )
