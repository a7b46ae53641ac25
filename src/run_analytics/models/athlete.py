"""Athlete physiology used by the training load model."""

import logging
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict

from ..config import Settings, get_settings


logger = logging.getLogger(__name__)

# Banister TRIMP weighting coefficients
MALE_TRIMP_CONSTANT = 1.92
FEMALE_TRIMP_CONSTANT = 1.67


class Sex(str, Enum):
    """Presets for the TRIMP exponential weighting coefficient."""

    MALE = "male"
    FEMALE = "female"

    @property
    def trimp_constant(self) -> float:
        if self is Sex.FEMALE:
            return FEMALE_TRIMP_CONSTANT
        return MALE_TRIMP_CONSTANT

    @classmethod
    def from_string(cls, s: str) -> Optional["Sex"]:
        """Parse a sex preset from a loose string ("M", "female"...)."""
        mapping = {
            "male": cls.MALE,
            "m": cls.MALE,
            "female": cls.FEMALE,
            "f": cls.FEMALE,
        }
        return mapping.get(s.strip().lower())


class PhysioProfile(BaseModel):
    """
    Physiological parameters for TRIMP.

    Values are not validated here: the load model clamps out-of-range
    inputs instead of rejecting them.

    Attributes:
        max_hr: Maximum heart rate (bpm)
        resting_hr: Resting heart rate (bpm)
        trimp_constant: Exponential weighting coefficient ``k``
    """

    model_config = ConfigDict(frozen=True)

    max_hr: float
    resting_hr: float
    trimp_constant: float = MALE_TRIMP_CONSTANT

    @property
    def heart_rate_reserve(self) -> float:
        return self.max_hr - self.resting_hr

    @classmethod
    def for_sex(cls, max_hr: float, resting_hr: float, sex: Sex) -> "PhysioProfile":
        return cls(max_hr=max_hr, resting_hr=resting_hr, trimp_constant=sex.trimp_constant)

    @classmethod
    def from_settings(cls, settings: Optional[Settings] = None) -> "PhysioProfile":
        """Build the profile from configured defaults."""
        settings = settings or get_settings()

        if settings.trimp_constant is not None:
            constant = settings.trimp_constant
        else:
            sex = Sex.from_string(settings.sex)
            if sex is None:
                logger.warning(
                    f"Unknown sex preset '{settings.sex}', using male TRIMP coefficient"
                )
                sex = Sex.MALE
            constant = sex.trimp_constant

        return cls(
            max_hr=settings.max_hr,
            resting_hr=settings.resting_hr,
            trimp_constant=constant,
        )
