from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorDatabase

from railway_defects.config.settings import Settings


def create_database(settings: Settings) -> AsyncIOMotorDatabase:
    # Pool settings sized for a single API process
    client = AsyncIOMotorClient(
        settings.mongodb_uri,
        maxPoolSize=10,
        minPoolSize=1,
        connectTimeoutMS=5000,
    )
    print(f"MongoDB client created for database {settings.mongodb_database}")
    return client[settings.mongodb_database]
