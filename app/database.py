from motor.motor_asyncio import AsyncIOMotorClient
from decouple import config

MONGO_URL = config("MONGO_URL", default="mongodb://localhost:27017")
MONGO_DB = config("MONGO_DB", default="tutoring")
client = AsyncIOMotorClient(MONGO_URL)
db = client[MONGO_DB]


def get_db():
    return db
