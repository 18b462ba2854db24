"""
db/ - Database Layer
====================
Handles PostgreSQL connections, schema initialization, and streaming
the rows of join queries. This layer does not know about domain models.
"""
