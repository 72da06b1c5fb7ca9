"""
models/car.py
-------------
Domain model for cars, the aggregate that owns the car/driver links.
"""

from dataclasses import dataclass, field
from typing import Optional

from models.driver import Driver
from models.manufacturer import Manufacturer


@dataclass
class Car:
    """
    Represents a car.

    Attributes:
        id: Database primary key (None until the car is created).
        model: Model name (e.g., 'Corolla').
        manufacturer: The manufacturer; must already exist in storage.
        drivers: Drivers assigned to this car, in assignment order.
    """
    model: str
    manufacturer: Manufacturer
    drivers: list[Driver] = field(default_factory=list)
    id: Optional[int] = None

    def __str__(self) -> str:
        driver_ids = ", ".join(str(d.id) for d in self.drivers)
        return f"Car #{self.id} {self.manufacturer.name} {self.model} | drivers: [{driver_ids}]"
