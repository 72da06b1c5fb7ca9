"""
repositories/car_repo.py
------------------------
Data access layer for cars.
All SQL queries related to the `cars` and `cars_drivers` tables live here.

Cars and drivers are soft-deleted: rows with `is_deleted = TRUE` are never
returned by any read, and `delete()` only flips the flag.
"""

from typing import Optional

import psycopg2
from psycopg2.extensions import cursor as PGCursor

from db.connection import ConnectionProvider, transaction
from db.exceptions import StorageError
from models.car import Car
from models.driver import Driver
from models.manufacturer import Manufacturer
from utils.logger import get_logger

logger = get_logger(__name__)

_SELECT_CARS = """
    SELECT c.id, c.model, m.id, m.name, m.country
    FROM cars c
    JOIN manufacturers m ON c.manufacturer_id = m.id
    WHERE c.is_deleted = FALSE
"""


class CarRepository:
    """Repository for CRUD operations on the cars table and its driver links."""

    def __init__(self, provider: ConnectionProvider):
        self.provider = provider

    # ── CREATE ────────────────────────────────────────────

    def create(self, car: Car) -> Car:
        """
        Insert a new car and link its drivers.

        Args:
            car: The Car to persist. Its manufacturer and drivers must exist.

        Returns:
            The same Car with its `id` populated. If the database hands back
            no generated key, the id stays None and no drivers are linked.

        Raises:
            StorageError: If any statement fails.
        """
        sql = """
            INSERT INTO cars (model, manufacturer_id)
            VALUES (%s, %s)
            RETURNING id;
        """
        try:
            with transaction(self.provider) as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (car.model, car.manufacturer.id))
                    row = cur.fetchone()
                    if row is None:
                        logger.warning(f"No id generated for {car}; drivers not linked")
                        return car
                    car_id = row[0]
                    self._insert_driver_links(cur, car_id, car.drivers)
        except psycopg2.Error as e:
            logger.error(f"Failed to create car {car}: {e}")
            raise StorageError(f"Can't create car: {car}", e) from e
        # assigned only once the insert is committed
        car.id = car_id
        logger.info(f"Created car #{car.id} with {len(car.drivers)} driver(s)")
        return car

    # ── READ ──────────────────────────────────────────────

    def get(self, car_id: int) -> Optional[Car]:
        """
        Fetch a single non-deleted car with its manufacturer and drivers.

        Returns:
            A Car object or None if not found.
        """
        sql = _SELECT_CARS + " AND c.id = %s;"
        try:
            with transaction(self.provider) as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (car_id,))
                    row = cur.fetchone()
                    if row is None:
                        return None
                    car = self._row_to_car(row)
                    car.drivers = self._fetch_drivers(cur, car.id)
                    return car
        except psycopg2.Error as e:
            logger.error(f"Failed to get car #{car_id}: {e}")
            raise StorageError(f"Can't get car by id {car_id}", e) from e

    def get_all(self) -> list[Car]:
        """Fetch every non-deleted car, each with its manufacturer and drivers."""
        try:
            with transaction(self.provider) as conn:
                with conn.cursor() as cur:
                    cur.execute(_SELECT_CARS + ";")
                    cars = [self._row_to_car(r) for r in cur.fetchall()]
                    for car in cars:
                        car.drivers = self._fetch_drivers(cur, car.id)
                    return cars
        except psycopg2.Error as e:
            logger.error(f"Failed to list cars: {e}")
            raise StorageError("Can't get a list of cars from DB", e) from e

    def get_all_by_driver(self, driver_id: int) -> list[Car]:
        """
        Fetch every non-deleted car linked to a driver.

        Each car is loaded through `get()`, so it carries its full driver
        list, not just the driver that was searched for. A car deleted
        between the id lookup and its `get()` is left out of the result
        rather than returned as None.
        """
        sql = """
            SELECT cd.car_id
            FROM cars_drivers cd
            JOIN cars c ON c.id = cd.car_id
            WHERE cd.driver_id = %s AND c.is_deleted = FALSE;
        """
        try:
            with transaction(self.provider) as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (driver_id,))
                    car_ids = [r[0] for r in cur.fetchall()]
        except psycopg2.Error as e:
            logger.error(f"Failed to get cars for driver #{driver_id}: {e}")
            raise StorageError(f"Can't get all cars for driver with id {driver_id}", e) from e

        cars = []
        for car_id in car_ids:
            car = self.get(car_id)
            # deleted between the two queries
            if car is not None:
                cars.append(car)
        return cars

    # ── UPDATE ────────────────────────────────────────────

    def update(self, car: Car) -> Car:
        """
        Update a car's model and manufacturer and replace its driver links.

        Updating a missing or deleted car is not an error; its links are
        still rewritten from `car.drivers`.

        Args:
            car: Car with updated fields (must have id set).

        Returns:
            The same Car, unchanged.
        """
        sql = """
            UPDATE cars
            SET model = %s, manufacturer_id = %s
            WHERE id = %s AND is_deleted = FALSE;
        """
        try:
            with transaction(self.provider) as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (car.model, car.manufacturer.id, car.id))
                    if cur.rowcount == 0:
                        logger.debug(f"Update matched no active car #{car.id}")
                    cur.execute("DELETE FROM cars_drivers WHERE car_id = %s;", (car.id,))
                    self._insert_driver_links(cur, car.id, car.drivers)
        except psycopg2.Error as e:
            logger.error(f"Failed to update car #{car.id}: {e}")
            raise StorageError(f"Can't update {car} in DB", e) from e
        logger.info(f"Updated car #{car.id}")
        return car

    # ── DELETE ────────────────────────────────────────────

    def delete(self, car_id: int) -> bool:
        """
        Soft-delete a car by ID. Driver links are left in place.

        Returns:
            True if a row was marked deleted, False if the id does not exist.
        """
        sql = "UPDATE cars SET is_deleted = TRUE WHERE id = %s;"
        try:
            with transaction(self.provider) as conn:
                with conn.cursor() as cur:
                    cur.execute(sql, (car_id,))
                    deleted = cur.rowcount > 0
        except psycopg2.Error as e:
            logger.error(f"Failed to delete car #{car_id}: {e}")
            raise StorageError(f"Can't delete car with id {car_id}", e) from e
        if deleted:
            logger.info(f"Deleted car #{car_id}")
        return deleted

    # ── HELPERS ───────────────────────────────────────────

    @staticmethod
    def _insert_driver_links(cur: PGCursor, car_id: int, drivers: list[Driver]) -> None:
        """Insert one cars_drivers row per driver, in list order."""
        if not drivers:
            return
        cur.executemany(
            "INSERT INTO cars_drivers (car_id, driver_id) VALUES (%s, %s);",
            [(car_id, driver.id) for driver in drivers],
        )

    @classmethod
    def _fetch_drivers(cls, cur: PGCursor, car_id: int) -> list[Driver]:
        """Load the non-deleted drivers linked to a car, in storage order."""
        sql = """
            SELECT d.id, d.name, d.license_number
            FROM drivers d
            JOIN cars_drivers cd ON d.id = cd.driver_id
            WHERE cd.car_id = %s AND d.is_deleted = FALSE;
        """
        cur.execute(sql, (car_id,))
        return [cls._row_to_driver(r) for r in cur.fetchall()]

    @staticmethod
    def _row_to_car(row: tuple) -> Car:
        """Convert a cars/manufacturers join row to a Car without drivers."""
        manufacturer = Manufacturer(id=row[2], name=row[3], country=row[4])
        return Car(id=row[0], model=row[1], manufacturer=manufacturer)

    @staticmethod
    def _row_to_driver(row: tuple) -> Driver:
        """Convert a database row tuple to a Driver domain object."""
        return Driver(id=row[0], name=row[1], license_number=row[2])
