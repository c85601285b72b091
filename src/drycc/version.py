"""Controller API version this SDK speaks, and the skew check against it.

Using an SDK that is a minor version out of date with the controller is
generally safe: the controller API follows semantic versioning and stays
backward compatible within a major version. A different major version is not.
"""

from __future__ import annotations

from enum import Enum

API_VERSION = "2.3"
DEFAULT_USER_AGENT = f"Drycc Python SDK V{API_VERSION}"

API_VERSION_HEADER = "DRYCC_API_VERSION"
PLATFORM_VERSION_HEADER = "DRYCC_PLATFORM_VERSION"


class Compatibility(str, Enum):
    COMPATIBLE = "compatible"
    MINOR_SKEW = "minor_skew"
    INCOMPATIBLE = "incompatible"
    UNKNOWN = "unknown"  # controller did not announce a parseable version

    @property
    def severity(self) -> int:
        return _SEVERITY[self]


_SEVERITY = {
    Compatibility.COMPATIBLE: 0,
    Compatibility.UNKNOWN: 1,
    Compatibility.MINOR_SKEW: 2,
    Compatibility.INCOMPATIBLE: 3,
}


def worst(*tiers: Compatibility) -> Compatibility:
    """Return the most severe of `tiers` (COMPATIBLE when none are given)."""
    return max(tiers, key=lambda t: t.severity, default=Compatibility.COMPATIBLE)


def _split(version: str) -> tuple[int, int] | None:
    """Parse ``[v]MAJOR.MINOR[.PATCH...]``; None when the first two parts are not numbers."""
    parts = version.strip().lstrip("vV").split(".")
    if len(parts) < 2:
        return None
    try:
        return int(parts[0].strip()), int(parts[1].strip())
    except ValueError:
        return None


def check_compatibility(server_version: str | None, client_version: str = API_VERSION) -> Compatibility:
    if not server_version:
        return Compatibility.UNKNOWN
    server = _split(server_version)
    client = _split(client_version)
    if server is None or client is None:
        return Compatibility.UNKNOWN
    if server[0] != client[0]:
        return Compatibility.INCOMPATIBLE
    if server[1] != client[1]:
        return Compatibility.MINOR_SKEW
    return Compatibility.COMPATIBLE
