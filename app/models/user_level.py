"""UserLevel model: per-user unlock/completion state of a level.

A missing row means the user has not reached the level yet.
"""
from sqlalchemy import Column, Integer, Boolean, ForeignKey, UniqueConstraint
from sqlalchemy.orm import relationship

from app.db.session import Base


class UserLevel(Base):
    __tablename__ = "user_levels"
    __table_args__ = (UniqueConstraint("user_id", "level_id", name="uq_user_levels_user_level"),)

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    level_id = Column(Integer, ForeignKey("levels.id"), nullable=False)
    unlocked = Column(Boolean, nullable=False, default=False)
    completed = Column(Boolean, nullable=False, default=False)

    user = relationship("User", back_populates="levels")
    level = relationship("Level", back_populates="user_levels")
