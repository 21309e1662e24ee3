"""
Timing settings of the bus world, in simulation time units.
"""

from dataclasses import dataclass, asdict, fields
from typing import Any, Dict


@dataclass(frozen=True)
class BusEnvironmentSettings:
    """
    Attributes:
        pickup_delay: Time to board one passenger
        drop_off_delay: Time to drop off one passenger
        next_stop_delay: Travel time between two consecutive stops
        initial_delay: Offset between the departures of consecutive buses
    """
    pickup_delay: int = 1
    drop_off_delay: int = 1
    next_stop_delay: int = 5
    initial_delay: int = 2

    def __post_init__(self):
        for f in fields(self):
            if getattr(self, f.name) < 0:
                raise ValueError(f"{f.name} must be >= 0, got {getattr(self, f.name)}")
        # travel between stops must take time
        if self.next_stop_delay < 1:
            raise ValueError(f"next_stop_delay must be >= 1, got {self.next_stop_delay}")

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> "BusEnvironmentSettings":
        known = {f.name for f in fields(cls)}
        unknown = set(values) - known
        if unknown:
            raise ValueError(f"Unknown bus settings: {sorted(unknown)}")
        return cls(**values)

    def to_dict(self) -> Dict[str, int]:
        return asdict(self)

    def __str__(self) -> str:
        return (f"pickup: {self.pickup_delay}, drop_off: {self.drop_off_delay}, "
                f"next_stop: {self.next_stop_delay}, initial: {self.initial_delay}")
