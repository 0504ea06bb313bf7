"""Value objects handed from the sampling engine to the renderer."""

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SensorSnapshot:
    """Read-only view of one sensor as of the last poll pass."""

    index: int
    battery: str = ""
    temperature: str = ""
    light: str = ""
    online: bool = False
