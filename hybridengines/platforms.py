"""Platform identifiers understood by the engine resolver."""

from typing import Final

ANDROID: Final = "android"
IOS: Final = "ios"
WINDOWS: Final = "windows"

# Iteration order of this tuple is the output order of engines read from
# platforms.json.
SUPPORTED_PLATFORMS: Final = (ANDROID, IOS, WINDOWS)

PACKAGE_PREFIX: Final = "cordova-"


def platform_from_package_name(package_name: str) -> str | None:
    """Map an engine package name such as ``cordova-android`` to its platform id."""
    if not package_name:
        return None
    name = package_name.strip().lower()
    if name.startswith(PACKAGE_PREFIX):
        name = name[len(PACKAGE_PREFIX):]
    return name if name in SUPPORTED_PLATFORMS else None
