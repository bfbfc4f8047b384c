import logging
import os
from pathlib import Path

from dotenv import load_dotenv
from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorGridFSBucket

logger = logging.getLogger(__name__)

# Load .env from the project root, falling back to the working directory
env_path = Path(__file__).resolve().parent.parent / ".env"
if env_path.exists():
    load_dotenv(dotenv_path=env_path)
else:
    load_dotenv()

MONGO_URI = os.getenv("MONGO_URI")
DATABASE_NAME = os.getenv("DATABASE_NAME", "workboard")
DOCUMENTS_BUCKET = "documents"

client = None
db = None
fs_bucket = None


async def connect_to_mongo():
    global client, db, fs_bucket

    if not MONGO_URI:
        raise ValueError("MONGO_URI environment variable is not set! Check your .env file.")

    if "localhost" in MONGO_URI or "127.0.0.1" in MONGO_URI:
        logger.warning("Connecting to a LOCAL MongoDB instance")

    client = AsyncIOMotorClient(MONGO_URI)
    db = client[DATABASE_NAME]
    fs_bucket = AsyncIOMotorGridFSBucket(db, bucket_name=DOCUMENTS_BUCKET)
    await client.admin.command("ping")

    logger.info("Connected to MongoDB database %r", DATABASE_NAME)


async def close_mongo_connection():
    if client:
        client.close()
        logger.info("MongoDB connection closed")


def get_fs_bucket():
    return fs_bucket


def get_db():
    return db
