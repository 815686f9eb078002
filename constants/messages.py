"""
User-facing messages and error strings.

Centralized location for all UI messages to ensure consistency
and make internationalization easier in the future.
"""


class ErrorMessages:
    """Error messages returned to clients."""

    # Validation
    MISSING_FIELDS = "Missing required fields (email, dob, tob, birthplace)"
    INVALID_REQUEST = "Invalid request body: {fields}"
    INVALID_DATE_FORMAT = "dob must be YYYY-MM-DD and tob must be HH:MM"
    MISSING_BIRTHPLACE = "birthplace must not be empty"
    NON_FINITE_DEGREE = "Degree must be a finite number, got: {value}"
    INVALID_CUSP_SET = "Expected 12 house cusps numbered 1-12, got: {houses}"

    # Location
    PLACE_NOT_FOUND = "Birthplace not found. Tried: {attempted}"

    # External Services
    TIMEZONE_UNRESOLVED = "Timezone lookup failed (no timezone returned)"
    EPHEMERIS_ERROR = "AstrologyAPI {endpoint} error: {body}"
    NORTH_NODE_DEGREE_MISSING = "North Node degree missing; South Node cannot be derived"
    PLACEMENTS_INCOMPLETE = "Could not extract {missing} from ephemeris responses"
    CONTACT_CREATE_FAILED = "Kit subscribe error: {body}"
    CONTACT_ID_MISSING = "Kit subscribe failed (no subscriber id). Response: {body}"

    # Internal
    INTERNAL_ERROR = "An unexpected error occurred"
