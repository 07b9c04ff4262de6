from fastapi import Request

from infrastructure.database import MongoDatabase


def get_database(request: Request) -> MongoDatabase:
    """
    Dependency for the MongoDB connection opened in the application lifespan.
    """
    return request.app.state.database
