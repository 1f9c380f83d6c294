"""SkyCast - time intervals for a voice-assistant weather skill

Turns the time slots recognised by the NLU engine into the merged, sorted
intervals a forecast lookup should cover.
"""

__version__ = "0.1.0"
__author__ = "SkyCast Team"
__description__ = "Time-slot interval extraction for weather forecasts"

from .processors import IntervalExtractor, TimeInterval

__all__ = ["IntervalExtractor", "TimeInterval"]
