"""
Fitness Tracker - Personal daily-metrics tracking and charting.

Records per-day health measurements (weight, calories, steps, cardio,
workout notes) and renders them as a multi-series chart where every metric
is scaled to its own range.
"""

__version__ = "0.1.0"
