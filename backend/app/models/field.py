# File: app/models/field.py
from sqlalchemy import Column, Integer, String, Boolean, JSON, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from app.models.base import Base

class Field(Base):
    __tablename__ = "schema_fields"

    id = Column(Integer, primary_key=True, index=True)
    collection = Column(String(64), ForeignKey("schema_collections.collection"), nullable=False)
    field = Column(String(64), nullable=False)
    name = Column(String, nullable=True)
    type = Column(String(32), nullable=False, default="alias")

    # meta
    group = Column(String(64), nullable=True)
    special = Column(JSON, nullable=True)
    sort = Column(Integer, nullable=True)
    hidden = Column(Boolean, nullable=False, default=False)
    readonly = Column(Boolean, nullable=False, default=False)
    required = Column(Boolean, nullable=False, default=False)

    # schema
    foreign_key_table = Column(String(64), nullable=True)

    owner = relationship("Collection", backref="fields")

    __table_args__ = (
        UniqueConstraint("collection", "field", name="uq_field_collection_field"),
        Index("idx_field_collection_group", "collection", "group"),
    )
