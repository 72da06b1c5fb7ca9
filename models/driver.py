"""
models/driver.py
----------------
Domain model for drivers that can be assigned to cars.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class Driver:
    """
    Represents a driver.

    Attributes:
        id: Database primary key (None for new records).
        name: Full name of the driver.
        license_number: Driving license number.
    """
    name: str
    license_number: str
    id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.name} [{self.license_number}]"
