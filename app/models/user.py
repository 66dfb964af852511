"""User model: registered learner or admin."""
from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship

from app.db.session import Base


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(255), unique=True, nullable=False, index=True)
    username = Column(String(64), nullable=False)
    hashed_password = Column(String(255), nullable=False)
    role = Column(String(16), nullable=False, default="user")  # user | admin
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=True)

    # Progress rows go with the account
    attempts = relationship("Attempt", back_populates="user", cascade="all, delete-orphan")
    levels = relationship("UserLevel", back_populates="user", cascade="all, delete-orphan")
    badges = relationship("UserBadge", back_populates="user", cascade="all, delete-orphan")
