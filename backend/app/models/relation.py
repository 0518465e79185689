# File: app/models/relation.py
from sqlalchemy import Column, Integer, String, Index, UniqueConstraint
from app.models.base import Base

class Relation(Base):
    __tablename__ = "schema_relations"

    id = Column(Integer, primary_key=True, index=True)
    many_collection = Column(String(64), nullable=False)
    many_field = Column(String(64), nullable=False)
    one_collection = Column(String(64), nullable=True)
    one_field = Column(String(64), nullable=True)

    __table_args__ = (
        UniqueConstraint("many_collection", "many_field", name="uq_relation_many"),
        Index("idx_relation_one_collection", "one_collection"),
    )
