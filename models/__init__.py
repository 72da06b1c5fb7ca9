"""
models/ - Domain Layer
======================
Plain dataclasses describing cars, their manufacturer and their drivers.
"""
