"""
Core constants used across the application. Keep these simple and documented.
"""

from tastematch.core.config import settings

_PREFIX = settings.REDIS_KEY_PREFIX

# Persistence keys
IDENTITY_KEY: str = _PREFIX + "identity:{identity_id}"
IDENTITY_BY_DEVICE_KEY: str = _PREFIX + "identity:device:{device_id}"
PENDING_KEY: str = _PREFIX + "pending:{identity_id}"
CALIBRATION_KEY: str = _PREFIX + "calibration:space:{profile_id}"
OBJECT_CALIBRATION_KEY: str = _PREFIX + "calibration:objects:{profile_id}"
PROFILE_NAMING_KEY: str = _PREFIX + "naming:{profile_id}:{domain}"
FAVORITES_KEY: str = _PREFIX + "favorites:{identity_id}"
ADVISORY_SIGNALS_KEY: str = _PREFIX + "advisory:signals:{profile_id}"
ADVISORY_TOLERANCE_KEY: str = _PREFIX + "advisory:tolerance:{profile_id}"
DISCOVERY_SIGNALS_KEY: str = _PREFIX + "discovery:signals:{profile_id}"
CALIBRATION_STATE_KEY: str = _PREFIX + "calibration:state:{profile_id}:{domain}"

# Catalog files, relative to settings.CATALOG_DIR
CATALOG_FILES: dict[str, str] = {
    "space": "commerce_space.json",
    "objects": "commerce_objects.json",
    "art": "commerce_art.json",
}
DISCOVERY_FILES: dict[str, str] = {
    "space": "discovery_space.ndjson",
    "objects": "discovery_objects.ndjson",
    "art": "discovery_art.ndjson",
}

SECONDS_PER_DAY: int = 86400
