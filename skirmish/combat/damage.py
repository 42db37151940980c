"""
Damage module for the skirmish engine.

Handles damage profiles (per-kind magnitudes) and the pluggable strategies
that turn a creature's base profile into a scalar damage value.
"""

from abc import ABC, abstractmethod
from typing import TypeAlias

from core.constants import DamageKind, DifficultyTier
from core.error_handling import InvalidConfigurationError

DamageProfile: TypeAlias = dict[DamageKind, int]


def validate_profile(profile: DamageProfile, name: str = "profile") -> DamageProfile:
    """
    Checks that every key is a DamageKind and every magnitude is non-negative.

    Args:
        profile (DamageProfile): The profile to validate.
        name (str): Name used in error messages.

    Returns:
        DamageProfile: The same profile.

    Raises:
        ValueError: If a key or a magnitude is invalid.

    """
    for kind, value in profile.items():
        if not isinstance(kind, DamageKind):
            raise ValueError(f"{name} has an invalid damage kind: {kind!r}")
        if isinstance(value, bool) or not isinstance(value, int) or value < 0:
            raise ValueError(f"{name}[{kind}] must be a non-negative integer, got {value!r}")
    return profile


def profile_total(profile: DamageProfile) -> int:
    """Returns the sum of all magnitudes in the profile."""
    return sum(profile.values())


def merge_profiles(*profiles: DamageProfile) -> DamageProfile:
    """
    Sums several profiles kind by kind into a new dictionary.

    None of the inputs is modified.
    """
    merged: DamageProfile = {}
    for profile in profiles:
        for kind, value in profile.items():
            merged[kind] = merged.get(kind, 0) + value
    return merged


def describe_profile(profile: DamageProfile) -> str:
    """Returns a rich-markup description such as `10 🗡️ Physical, 5 🔥 Fire`."""
    if not profile:
        return "[dim]none[/]"
    return ", ".join(
        f"{kind.colorize(str(value))} {kind.emoji} {kind.colored_name}"
        for kind, value in profile.items()
    )


class DamageStrategy(ABC):
    """Maps a base damage profile and a difficulty tier to a damage value."""

    @abstractmethod
    def calculate(self, base_profile: DamageProfile, tier: DifficultyTier) -> int:
        """
        Computes the base damage of an attack.

        Args:
            base_profile (DamageProfile): The attacker's base damage profile.
            tier (DifficultyTier): The difficulty tier of the run.

        Returns:
            int: The computed damage.

        """


class DifficultyDamageStrategy(DamageStrategy):
    """Sums the profile and scales it by the tier multiplier."""

    def calculate(self, base_profile: DamageProfile, tier: DifficultyTier) -> int:
        if not isinstance(tier, DifficultyTier):
            raise InvalidConfigurationError(f"Invalid difficulty tier: {tier!r}")
        return profile_total(base_profile) * tier.multiplier


class FlatDamageStrategy(DamageStrategy):
    """Ignores the tier; the damage is the plain sum of the profile."""

    def calculate(self, base_profile: DamageProfile, tier: DifficultyTier) -> int:
        if not isinstance(tier, DifficultyTier):
            raise InvalidConfigurationError(f"Invalid difficulty tier: {tier!r}")
        return profile_total(base_profile)
