from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Optional, Tuple

import pandas as pd


@dataclass(frozen=True)
class Service:
    identifier: int
    name: str
    price: int = 0

    @property
    def label(self) -> str:
        return f"{self.name} - ${self.price}"


SERVICES: Tuple[Service, ...] = (
    Service(1, "Plumbing", 0),
    Service(2, "Electrical", 0),
    Service(3, "Carpentry", 0),
)


def get_service(identifier: int) -> Optional[Service]:
    for service in SERVICES:
        if service.identifier == identifier:
            return service
    return None


def catalog_frame() -> pd.DataFrame:
    """Service catalog as a table for the overview expander."""
    frame = pd.DataFrame([asdict(service) for service in SERVICES])
    return frame.rename(columns={"identifier": "ID", "name": "Service", "price": "Price ($)"})
