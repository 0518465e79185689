# backend/app/api/api_v1/schema.py
import logging
from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
from typing import List

from app.core.database import SessionLocal
from app.crud import schema_crud
from app.schemas import CollectionInfo, FieldInfo, SchemaSnapshot, SnapshotImportResponse

logger = logging.getLogger("uvicorn")

router = APIRouter()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

@router.get("/schema/collections", response_model=List[CollectionInfo])
def list_collections(db: Session = Depends(get_db)):
    return schema_crud.get_collections(db)

@router.get("/schema/collections/{collection}/fields", response_model=List[FieldInfo])
def list_fields(collection: str, db: Session = Depends(get_db)):
    """Fields of a collection; unknown collections have none."""
    return schema_crud.get_fields(db, collection)

@router.post("/schema/snapshot", response_model=SnapshotImportResponse)
def import_snapshot(payload: SchemaSnapshot, db: Session = Depends(get_db)):
    """Replace the stored schema metadata with a snapshot."""
    try:
        counts = schema_crud.replace_snapshot(db, payload.collections, payload.fields, payload.relations)
    except SQLAlchemyError as e:
        logger.error(f"❌ Snapshot import failed: {e}")
        raise HTTPException(status_code=400, detail="Snapshot could not be stored")
    logger.info(f"📥 Imported schema snapshot: {counts}")
    return SnapshotImportResponse(**counts)
