"""Ingestion of activity-platform records into engine inputs."""

from threshold_engine.ingestion.strava_mapper import map_activities, map_activity

__all__ = ["map_activities", "map_activity"]
