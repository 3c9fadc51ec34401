"""Media metadata probing."""

from .analyzer import MediaInfo, MediaProber, probe, probe_all, probe_field

__all__ = [
    "MediaInfo",
    "MediaProber",
    "probe",
    "probe_all",
    "probe_field",
]
