from sqlalchemy import Column, String
from .base import Base

class User(Base):
    __tablename__ = "users"

    email = Column(String(100), unique=True, index=True, nullable=False)
    username = Column(String(50), unique=True, index=True, nullable=False)
    name = Column(String(100), nullable=True)
    image_id = Column(String(36), nullable=True)
