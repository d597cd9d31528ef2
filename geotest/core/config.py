"""Configuration management for the transliteration checker."""
import os
from pathlib import Path
from typing import Optional, FrozenSet
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


def _split_codes(value: str) -> FrozenSet[str]:
    return frozenset(code.strip() for code in value.split(",") if code.strip())


# Directory of JSON transliteration maps
MAPS_DIR: Optional[Path] = Path(os.environ["GEOTEST_MAPS_DIR"]) if os.getenv("GEOTEST_MAPS_DIR") else None

# Name type codes marking the original (non-Latin) script form of a name
SCRIPT_NAME_TYPES: FrozenSet[str] = _split_codes(os.getenv("GEOTEST_SCRIPT_NAME_TYPES", "NS,DS,VS"))

# Error kinds left out of the error report unless --bugs is given
SUPPRESSED_ERRORS: FrozenSet[str] = _split_codes(os.getenv("GEOTEST_SUPPRESSED_ERRORS", "unsupported_map"))

# Restrict reverse map detection to maps whose identifier mentions the record's language code
DETECT_BY_LANGUAGE: bool = os.getenv("GEOTEST_DETECT_BY_LANGUAGE", "true").lower() == "true"

# Logging / error tracking
LOG_LEVEL: str = os.getenv("LOG_LEVEL", "WARNING")
SENTRY_DSN: Optional[str] = os.getenv("SENTRY_DSN")
ENVIRONMENT: str = os.getenv("ENVIRONMENT", "development")

# Input columns, keyed by lowercased header name. Both the plain field names
# and the GNS gazetteer column names are accepted.
HEADER_ALIASES = {
    "ufi": "place_id",
    "place_id": "place_id",
    "uni": "name_id",
    "name_id": "name_id",
    "nt": "name_type",
    "name_type": "name_type",
    "lc": "language_code",
    "language_code": "language_code",
    "full_name_ro": "full_name",
    "full_name": "full_name",
    "full_name_rg": "full_name_rg",
    "name_link": "link_id",
    "link_id": "link_id",
    "transl_cd": "translit_system_code",
    "translit_system_code": "translit_system_code",
    "mgrs": "mgrs",
    "script_cd": "script_code",
    "script_code": "script_code",
}

INT_FIELDS = ("place_id", "name_id", "link_id")

# Error report columns, in output order
REPORT_COLUMNS = [
    "error_id",
    "error_type",
    "place_id",
    "name_id",
    "name_type",
    "full_name",
    "language_code",
    "translit_system_code",
    "script_variant_code",
    "attempted_transliteration",
    "other_matching_maps",
]
