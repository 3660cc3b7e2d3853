"""Default configuration values for photoCatalogue."""

from __future__ import annotations

from datetime import time
from typing import Final

# Descriptor files are plain-text ``.txt`` files anywhere below the catalogue
# root.  Hidden directories are skipped so editor swap folders and VCS
# metadata never contribute photos.
DEFAULT_INCLUDE: Final[list[str]] = ["**/*.txt"]
DEFAULT_EXCLUDE: Final[list[str]] = ["**/.*/**"]

# Representations are numbered ``res-0`` (full resolution) to ``res-5``.
MAX_REPRESENTATIONS: Final[int] = 6
PRIMARY_REPRESENTATION: Final[int] = 0

# Attribute keys whose values are comma separated sets.  Baking appends the
# per-item value to the common value instead of replacing it.
SET_VALUED_KEYS: Final[frozenset[str]] = frozenset({"tags", "geoLocationTags"})
TOKEN_SET_SEPARATOR: Final[str] = ","

# Descriptor ``date`` values carry no time of day; they are pinned to this
# local time until an EXIF timestamp replaces them.
BASIC_DATE_TIME_OF_DAY: Final[time] = time(1, 1, 1)

# Widths and heights are stored as unsigned 16-bit values.
MAX_DIMENSION: Final[int] = 65535

RESULT_CACHE_SIZE: Final[int] = 10

LOCATION_PATH_SEPARATOR: Final[str] = "/"

SETTINGS_DIR_NAME: Final[str] = "photoCatalogue"
SETTINGS_FILE_NAME: Final[str] = "settings.json"
