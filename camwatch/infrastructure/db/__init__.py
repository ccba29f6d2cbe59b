from .mongo_connection import get_database, close_mongo_client
from .mongo_remote_store import MongoRemoteStore, MongoSubscription

__all__ = [
    "get_database",
    "close_mongo_client",
    "MongoRemoteStore",
    "MongoSubscription",
]
