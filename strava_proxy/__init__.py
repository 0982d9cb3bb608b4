"""Backend proxy between a front-end site and Strava's OAuth and activities API."""

__version__ = "1.0.0"
