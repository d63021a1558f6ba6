"""Tests for athlete profile serialization."""

from __future__ import annotations

import json

import pytest

from threshold_engine.models.athlete_profile import AthleteProfile
from threshold_engine.models.enums import DetectionMethod
from threshold_engine.serialization.profile import (
    profile_from_dict,
    profile_from_json_string,
    profile_to_dict,
    profile_to_json_string,
)


class TestProfileToDict:
    def test_top_level_fields(self, calibrated_profile) -> None:
        data = profile_to_dict(calibrated_profile)
        assert data["schema_version"] == 1
        assert data["athlete_id"] == "athlete-1"
        assert data["ratings_since_recalc"] == 0
        assert data["max_hr_bpm"] is None

    def test_thresholds(self, calibrated_profile) -> None:
        thresholds = profile_to_dict(calibrated_profile)["thresholds"]
        assert thresholds["anaerobic_pace_s_per_km"] == 250.0
        assert thresholds["aerobic_hr_bpm"] == 150.0
        assert thresholds["method"] == "SLOPE_INFLECTION"
        assert thresholds["samples_used"] == 10

    def test_zones_written_for_readers(self, calibrated_profile) -> None:
        zones = profile_to_dict(calibrated_profile)["zones"]
        assert zones["critical_pace_s_per_km"] == 250.0
        assert [z["zone"] for z in zones["zones"]] == [1, 2, 3, 4, 5]
        z4 = zones["zones"][3]
        assert z4["name"] == "Threshold"
        assert z4["lower"] == pytest.approx(242.5)
        assert z4["upper"] == pytest.approx(270.0)
        assert zones["zones"][0]["upper"] is None

    def test_empty_profile(self) -> None:
        data = profile_to_dict(AthleteProfile(athlete_id="new"))
        assert data["thresholds"] is None
        assert data["zones"] is None

    def test_json_serializable(self, calibrated_profile) -> None:
        json.dumps(profile_to_dict(calibrated_profile))


class TestProfileFromDict:
    def test_roundtrip(self, calibrated_profile) -> None:
        assert profile_from_dict(profile_to_dict(calibrated_profile)) == calibrated_profile

    def test_empty_roundtrip(self) -> None:
        profile = AthleteProfile(athlete_id="new", ratings_since_recalc=0, max_hr_bpm=188.0)
        assert profile_from_dict(profile_to_dict(profile)) == profile

    def test_zones_rederived_from_thresholds(self, calibrated_profile) -> None:
        data = profile_to_dict(calibrated_profile)
        data["zones"]["zones"][3]["lower"] = 1.0
        restored = profile_from_dict(data)
        assert restored.zones == calibrated_profile.zones

    def test_method_defaults_when_absent(self, calibrated_profile) -> None:
        data = profile_to_dict(calibrated_profile)
        del data["thresholds"]["method"]
        assert profile_from_dict(data).thresholds.method == DetectionMethod.SLOPE_INFLECTION

    def test_unknown_schema_version(self, calibrated_profile) -> None:
        data = profile_to_dict(calibrated_profile)
        data["schema_version"] = 99
        with pytest.raises(ValueError, match="schema version"):
            profile_from_dict(data)

    def test_missing_threshold_field(self, calibrated_profile) -> None:
        data = profile_to_dict(calibrated_profile)
        del data["thresholds"]["aerobic_pace_s_per_km"]
        with pytest.raises(KeyError):
            profile_from_dict(data)


class TestJsonString:
    def test_roundtrip(self, calibrated_profile) -> None:
        text = profile_to_json_string(calibrated_profile)
        assert profile_from_json_string(text) == calibrated_profile

    def test_indent(self, calibrated_profile) -> None:
        text = profile_to_json_string(calibrated_profile, indent=4)
        assert '\n    "athlete_id"' in text
