"""
RefreshToken model: stores opaque refresh tokens so they can be looked up and revoked
Fields:
- token (64 hex chars, unique)
- user_id (String(36)) - FK to users.id
- expires_at
- revoked_at (null while the token is live)
"""
from sqlalchemy import Column, String, DateTime, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import BaseModel, Base, as_utc


class RefreshToken(BaseModel, Base):
    __tablename__ = "refresh_tokens"

    token = Column(String(64), unique=True, nullable=False, index=True)
    user_id = Column(String(36), ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    revoked_at = Column(DateTime(timezone=True), nullable=True)

    user = relationship("User", back_populates="refresh_tokens")

    def is_usable(self, now) -> bool:
        return self.revoked_at is None and now < as_utc(self.expires_at)

    def __repr__(self):
        return f"<RefreshToken user_id={self.user_id} revoked={self.revoked_at is not None}>"
