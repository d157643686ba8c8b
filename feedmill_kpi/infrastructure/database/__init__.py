"""
Database package - Infrastructure Layer

MongoDB connection used by the record store and the health check.
"""

from feedmill_kpi.infrastructure.database.mongo_database import MongoDatabase

__all__ = ["MongoDatabase"]
