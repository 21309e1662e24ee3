"""
Passenger waiting at, or travelling between, bus stops.
"""

from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional


@dataclass
class Passenger:
    uid: int
    origin: str
    destination: str
    arrival_time: int = 0
    pickup_time: Optional[int] = None

    def wait_time(self, until: int) -> int:
        """Time spent waiting, up to pickup or ``until`` if not yet picked up."""
        end = self.pickup_time if self.pickup_time is not None else until
        return max(0, end - self.arrival_time)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def __str__(self) -> str:
        return f"P{self.uid}->{self.destination}"
