"""Business logic used by the API blueprints."""
from services.accounts import AccountService
from services.chirps import ChirpService

__all__ = ["AccountService", "ChirpService"]
