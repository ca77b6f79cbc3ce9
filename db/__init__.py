"""
db/ - Database Layer
====================
Builds parameterized SQL, manages per-statement PostgreSQL connections and maps
result rows into records. This layer is the lowest in the architecture and has
no dependencies on other layers.
"""
