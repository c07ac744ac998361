from sqlalchemy import Column, String, Text, ForeignKey
from sqlalchemy.orm import relationship

from models.base_model import Base, BaseModel


class Chirp(BaseModel, Base):
    __tablename__ = "chirps"

    # stored after profanity cleaning
    body = Column(Text, nullable=False)
    user_id = Column(
        String(36),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    user = relationship("User", back_populates="chirps")

    def __repr__(self):
        return f"<Chirp id={self.id} user_id={self.user_id}>"
