"""Controller status codes carried by cycle data."""

from __future__ import annotations

from enum import Enum


class OpMode(str, Enum):
    """Operating modes of a controller."""

    Unknown = "Unknown"
    Manual = "Manual"
    SemiAutomatic = "SemiAutomatic"
    Automatic = "Automatic"
    Others = "Others"
    # Both the op mode and the job mode read Offline when a controller is off-line.
    Offline = "Offline"

    def is_unknown(self) -> bool:
        return self is OpMode.Unknown

    def is_offline(self) -> bool:
        return self is OpMode.Offline

    def is_online(self) -> bool:
        return self not in (OpMode.Unknown, OpMode.Offline)

    def is_producing(self) -> bool:
        """A machine is producing in either Automatic or Semi-Automatic mode."""
        return self in (OpMode.SemiAutomatic, OpMode.Automatic)


class JobMode(str, Enum):
    """Job modes of a controller; ID01-ID15 can be user-defined on some models."""

    Unknown = "Unknown"
    ID01 = "ID01"
    ID02 = "ID02"
    ID03 = "ID03"
    ID04 = "ID04"
    ID05 = "ID05"
    ID06 = "ID06"
    ID07 = "ID07"
    ID08 = "ID08"
    ID09 = "ID09"
    ID10 = "ID10"
    ID11 = "ID11"
    ID12 = "ID12"
    ID13 = "ID13"
    ID14 = "ID14"
    ID15 = "ID15"
    Offline = "Offline"

    def is_unknown(self) -> bool:
        return self is JobMode.Unknown

    def is_offline(self) -> bool:
        return self is JobMode.Offline

    def is_online(self) -> bool:
        return self not in (JobMode.Unknown, JobMode.Offline)
