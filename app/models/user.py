"""User account model."""
from sqlalchemy import Boolean, Column, DateTime, Integer, String, false
from app.database import Base


class User(Base):
    """A registered account and its block state."""
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = Column(String(255), nullable=False)
    last_seen = Column(DateTime(timezone=True), nullable=False)
    is_blocked = Column(Boolean, nullable=False, default=False, server_default=false())

    def __repr__(self):
        return f"<User(id={self.id}, email={self.email}, is_blocked={self.is_blocked})>"
