"""
Service layer abstraction.

Song storage lives here.  Both stores share the same small interface,
so the API handlers never know whether records are kept in memory or
in the database.
"""
