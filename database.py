# database.py
import logging
import sys

from pymongo import MongoClient
from pymongo.errors import PyMongoError

from config import get_settings
from services.trip_store import TripStore
from utils.errors import StorageError

logger = logging.getLogger(__name__)

settings = get_settings()
# connect=False: nothing touches the network until connect_db() runs at startup
client = MongoClient(settings.mongo_uri, serverSelectionTimeoutMS=5000, connect=False)
db = client[settings.mongo_db_name]

# Collections
trips = db.trips


def connect_db():
    """Verify the store is reachable and indexed; exit the process otherwise."""
    if not settings.mongo_uri:
        logger.critical("MONGO_URI_TRIP is not defined in the environment")
        sys.exit(1)
    try:
        client.admin.command("ping")
        TripStore(trips).ensure_indexes()
    except (PyMongoError, StorageError) as exc:
        logger.critical("Error connecting to MongoDB: %s", exc)
        sys.exit(1)
    logger.info("TripService MongoDB connected (database=%s)", settings.mongo_db_name)


def close_db():
    client.close()
