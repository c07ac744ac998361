"""
Persistence layer: SQLAlchemy models and the DBStorage wrapper.

DBStorage is created by the application factory (api.create_app) and handed
to services through the app state; there is no module-level storage object.
"""
from models.base_model import Base
from models.user import User
from models.chirp import Chirp
from models.refresh_token import RefreshToken
from models.db_storage import DBStorage

__all__ = ["Base", "User", "Chirp", "RefreshToken", "DBStorage"]
