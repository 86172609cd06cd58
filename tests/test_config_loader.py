# tests/test_config_loader.py
"""
Tests for the Pydantic‑based ``services.extraction.config_loader`` module.

The loader returns **validated Pydantic models**, so the tests use attribute
access (e.g. ``profile.landmark_selectors``) rather than key‑lookup.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from services.extraction.config_loader import (
    ExtractionProfile,
    ProfileNotFoundError,
    get_extraction_profile,
    list_available_profiles,
)


# ----------------------------------------------------------------------
# Every profile in ``extraction.yaml`` must be usable as-is.
# ----------------------------------------------------------------------
@pytest.mark.parametrize("profile_name", list_available_profiles())
def test_all_profiles_have_required_sections(profile_name):
    profile = get_extraction_profile(profile_name)

    assert isinstance(profile, ExtractionProfile)
    assert profile.landmark_selectors, f"{profile_name} missing landmark selectors"
    assert profile.strip_selectors, f"{profile_name} missing strip selectors"
    # script/style must always go, whatever else a profile strips
    assert {"script", "style"} <= set(profile.strip_selectors)


def test_default_profile_matches_documented_policy():
    profile = get_extraction_profile()

    assert profile.min_landmark_chars == 50
    assert profile.landmark_selectors[:2] == ["main", "article"]
    assert ".job-description" in profile.landmark_selectors
    assert 'link[rel="stylesheet"]' in profile.strip_selectors
    for tag in ("nav", "footer", "header", "aside", ".sidebar", "#sidebar"):
        assert tag in profile.strip_selectors


def test_profiles_are_cached():
    assert get_extraction_profile("default") is get_extraction_profile("default")


# ----------------------------------------------------------------------
# Unknown profile must raise the domain‑specific error.
# ----------------------------------------------------------------------
def test_unknown_profile_raises_custom_error():
    unknown_name = "this_profile_does_not_exist_12345"
    with pytest.raises(ProfileNotFoundError) as exc_info:
        get_extraction_profile(unknown_name)

    # The error message should contain the missing name for easier debugging.
    assert unknown_name in str(exc_info.value)
    assert isinstance(exc_info.value, KeyError)


# ----------------------------------------------------------------------
# Schema validation
# ----------------------------------------------------------------------
def test_blank_selector_is_rejected():
    with pytest.raises(ValidationError):
        ExtractionProfile(landmark_selectors=["main", "   "])


def test_negative_threshold_is_rejected():
    with pytest.raises(ValidationError):
        ExtractionProfile(min_landmark_chars=-1)


def test_selectors_are_trimmed():
    profile = ExtractionProfile(strip_selectors=[" script ", "style"])
    assert profile.strip_selectors == ["script", "style"]


# ----------------------------------------------------------------------
# The profile file ships inside the package, not at the project root.
# ----------------------------------------------------------------------
def test_profiles_file_lives_in_the_package():
    import services.extraction as extraction_pkg
    from services.extraction.config_loader import CONFIG_PATH

    assert CONFIG_PATH.is_file()
    assert CONFIG_PATH.parent == Path(extraction_pkg.__file__).resolve().parent
