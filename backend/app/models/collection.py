# File: app/models/collection.py
from sqlalchemy import Column, String, Boolean, Text
from app.models.base import Base

class Collection(Base):
    __tablename__ = "schema_collections"

    collection = Column(String(64), primary_key=True)
    versioning = Column(Boolean, nullable=False, default=False)
    note = Column(Text, nullable=True)
