"""Utility functions for moodcapsule."""

from moodcapsule.utils.date_parser import parse_date, parse_datetime, calendar_day

__all__ = ["parse_date", "parse_datetime", "calendar_day"]
