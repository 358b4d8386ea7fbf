from sqlalchemy import Column, String, Integer
from .base import BaseModel, TimestampMixin


class User(BaseModel, TimestampMixin):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    ivd_id = Column(String(50), unique=True, nullable=False, index=True)
    password = Column(String(255), nullable=False)
