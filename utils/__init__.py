"""
Utility functions for the placements service
"""

from utils.chart_data_extractor import extract_body_readings, extract_house_cusps

__all__ = [
    "extract_body_readings",
    "extract_house_cusps",
]
