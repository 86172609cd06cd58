# services/extraction/config_loader.py
"""
Loads the extraction profiles from ``extraction.yaml`` (shipped inside this
package) and validates them with Pydantic models.  The file can contain a
top‑level ``profiles`` key or just the mapping of profile names → config dictionaries.

Public API:
* ``get_extraction_profile(name)`` – returns a validated ``ExtractionProfile``
  or raises ``ProfileNotFoundError``.
* ``list_available_profiles()`` – convenience helper for the API / CLI.
"""

from pathlib import Path
from typing import Dict, List

import yaml
from pydantic import BaseModel, Field, field_validator


# ----------------------------------------------------------------------
# Pydantic schemas – runtime validation with readable error messages
# ----------------------------------------------------------------------
class ExtractionProfile(BaseModel):
    """CSS selectors and thresholds that steer page → text normalization."""

    strip_selectors: List[str] = Field(default_factory=list)
    landmark_selectors: List[str] = Field(default_factory=list)
    # Tunable: below this many characters a landmark counts as a teaser
    min_landmark_chars: int = Field(default=50, ge=0)

    @field_validator("strip_selectors", "landmark_selectors")
    @classmethod
    def _no_blank_selectors(cls, selectors: List[str]) -> List[str]:
        cleaned = [s.strip() for s in selectors]
        if any(not s for s in cleaned):
            raise ValueError("selectors must not be blank")
        return cleaned


class AllProfiles(BaseModel):
    """Top‑level container – maps profile name → its config."""
    profiles: Dict[str, ExtractionProfile]


# ----------------------------------------------------------------------
# Internal helpers & caching
# ----------------------------------------------------------------------
# Shipped as package data of services.extraction
CONFIG_PATH = Path(__file__).resolve().parent / "extraction.yaml"

# In‑process cache so the YAML is read/validated only once per process
_cached_all: AllProfiles | None = None


def _load_yaml() -> dict:
    """Read the YAML file and return the inner ``profiles`` mapping."""
    with CONFIG_PATH.open("r", encoding="utf-8") as fh:
        raw = yaml.safe_load(fh) or {}
        return raw.get("profiles", raw)


def _load_all() -> AllProfiles:
    """
    Parse the entire YAML, validate it against ``AllProfiles`` and cache the
    result.  Any validation problem raises ``pydantic.ValidationError``.
    """
    global _cached_all
    if _cached_all is None:
        _cached_all = AllProfiles(profiles=_load_yaml())
    return _cached_all


# ----------------------------------------------------------------------
# Custom exception for a missing profile
# ----------------------------------------------------------------------
class ProfileNotFoundError(KeyError):
    """Raised when a requested profile does not exist in extraction.yaml."""

    def __init__(self, profile_name: str):
        super().__init__(f"Extraction profile '{profile_name}' not found.")
        self.profile_name = profile_name


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------
def get_extraction_profile(profile_name: str = "default") -> ExtractionProfile:
    """
    Return a **validated** ``ExtractionProfile`` for the requested name.

    Raises
    ------
    ProfileNotFoundError
        If the profile name is not present in the YAML.
    ValidationError
        If the YAML exists but does not conform to the Pydantic schema.
    """
    all_cfg = _load_all()
    try:
        return all_cfg.profiles[profile_name]
    except KeyError as exc:
        raise ProfileNotFoundError(profile_name) from exc


def list_available_profiles() -> List[str]:
    return list(_load_all().profiles.keys())
