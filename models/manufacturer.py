"""
models/manufacturer.py
----------------------
Domain model for car manufacturers.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Manufacturer:
    """
    Represents a car manufacturer.

    Attributes:
        id: Database primary key (None for new records).
        name: Brand name (e.g., 'Toyota').
        country: Country of origin.
    """
    name: str
    country: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.name} ({self.country})"
