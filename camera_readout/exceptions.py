"""
Exception hierarchy for camera parameter readout.

All errors raised by this package derive from CameraReadoutError so callers
can catch them in one place. Each subclass also derives from the builtin
exception it refines (ValueError, KeyError), so code written against the
builtins keeps working.
"""


class CameraReadoutError(Exception):
    """Base class for all camera readout errors."""


class GeometryError(CameraReadoutError, ValueError):
    """
    Invalid geometric input.

    Raised for transforms with the wrong shape, non-finite entries, or a
    rotation block that is not a proper rotation within tolerance.
    """


class InvalidDimensionError(CameraReadoutError, ValueError):
    """Image or sensor dimension that is zero, negative or not finite."""

    def __init__(self, name: str, value: float):
        self.name = name
        self.value = value
        super().__init__(f"{name} must be a finite value > 0, got {value!r}")


class PresetNotFoundError(CameraReadoutError, KeyError):
    """Camera preset id missing from the preset registry."""

    def __init__(self, preset_id: str):
        self.preset_id = preset_id
        super().__init__(preset_id)

    def __str__(self) -> str:
        return f"Unknown camera preset: {self.preset_id!r}"
