"""
db/init_db.py
-------------
Creates the database schema (tables) if they do not already exist.
Run this module directly to initialize a fresh database:
    python -m db.init_db
"""

from db.connection import ConnectionProvider, transaction
from utils.logger import get_logger

logger = get_logger(__name__)

SCHEMA_SQL = """
-- Manufacturers table: car makers referenced by every car
CREATE TABLE IF NOT EXISTS manufacturers (
    id              BIGSERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL,
    country         VARCHAR(255) NOT NULL
);

-- Drivers table: soft-deleted through is_deleted
CREATE TABLE IF NOT EXISTS drivers (
    id              BIGSERIAL PRIMARY KEY,
    name            VARCHAR(255) NOT NULL,
    license_number  VARCHAR(255) NOT NULL,
    is_deleted      BOOLEAN NOT NULL DEFAULT FALSE
);

-- Cars table: each car belongs to exactly one manufacturer
CREATE TABLE IF NOT EXISTS cars (
    id              BIGSERIAL PRIMARY KEY,
    model           VARCHAR(255) NOT NULL,
    manufacturer_id BIGINT NOT NULL REFERENCES manufacturers(id),
    is_deleted      BOOLEAN NOT NULL DEFAULT FALSE
);

-- Cars <-> drivers link table; duplicate pairs are not prevented
CREATE TABLE IF NOT EXISTS cars_drivers (
    car_id          BIGINT NOT NULL REFERENCES cars(id),
    driver_id       BIGINT NOT NULL REFERENCES drivers(id)
);

-- Indexes for faster queries
CREATE INDEX IF NOT EXISTS idx_cars_drivers_car ON cars_drivers(car_id);
CREATE INDEX IF NOT EXISTS idx_cars_drivers_driver ON cars_drivers(driver_id);
"""


def create_tables(provider: ConnectionProvider) -> None:
    """
    Execute the schema SQL to create all tables.
    Safe to call multiple times (uses IF NOT EXISTS).
    """
    try:
        with transaction(provider) as conn:
            with conn.cursor() as cur:
                cur.execute(SCHEMA_SQL)
        logger.info("Database schema initialized successfully.")
    except Exception as e:
        logger.error(f"Failed to initialize schema: {e}")
        raise


if __name__ == "__main__":
    from db.connection import PooledConnectionProvider
    provider = PooledConnectionProvider()
    try:
        create_tables(provider)
    finally:
        provider.close()
    print("Database schema created successfully.")
