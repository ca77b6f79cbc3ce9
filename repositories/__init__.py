"""
repositories/ - Data Access Layer
==================================
Each repository binds the generic data access verbs to one table.
Repositories receive records from the database and return domain model objects.
"""
