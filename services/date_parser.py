"""
Date Parsing Service
Handles parsing of "YYYY-MM-DD" birth dates and "HH:MM" birth times
"""

import re

from constants.messages import ErrorMessages
from core.exceptions import InvalidArgumentError
from models.astrology import BirthEvent

DATE_PATTERN = re.compile(r"^\s*(\d{4})-(\d{1,2})-(\d{1,2})\s*$")
# Seconds are accepted and dropped
TIME_PATTERN = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::\d{2})?\s*$")


def parse_birth_event(dob: str, tob: str, birthplace: str) -> BirthEvent:
    """
    Build a BirthEvent from form strings.

    Args:
        dob: Birth date, e.g. "1990-06-15"
        tob: Birth time (24h), e.g. "14:30"
        birthplace: Free-text birthplace, e.g. "Paris, France"

    Returns:
        Validated BirthEvent

    Raises:
        InvalidArgumentError: If a field is malformed or out of range
    """
    date_match = DATE_PATTERN.match(str(dob or ""))
    time_match = TIME_PATTERN.match(str(tob or ""))

    if not date_match or not time_match:
        raise InvalidArgumentError(
            ErrorMessages.INVALID_DATE_FORMAT,
            details={"dob": dob, "tob": tob},
        )

    year, month, day = (int(part) for part in date_match.groups())
    hour, minute = (int(part) for part in time_match.groups())

    if not birthplace or not str(birthplace).strip():
        raise InvalidArgumentError(ErrorMessages.MISSING_BIRTHPLACE)

    return BirthEvent(
        year=year,
        month=month,
        day=day,
        hour=hour,
        minute=minute,
        birthplace=str(birthplace).strip(),
    )
