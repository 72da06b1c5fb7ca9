"""
db/ - Database Layer
====================
Handles PostgreSQL connections, schema initialization and storage errors.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""
