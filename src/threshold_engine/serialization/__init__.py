"""Serialization module — export athlete profiles for storage."""

from threshold_engine.serialization.profile import (
    profile_from_dict,
    profile_from_json_string,
    profile_to_dict,
    profile_to_json_string,
)

__all__ = [
    "profile_from_dict",
    "profile_from_json_string",
    "profile_to_dict",
    "profile_to_json_string",
]
