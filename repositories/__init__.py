"""
repositories/ - Data Access Layer
==================================
Each repository owns the queries for one aggregate.
Repositories stream raw rows from the database and return domain model objects.
"""
