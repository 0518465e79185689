# backend/app/api/api_v1/fields.py
from fastapi import APIRouter, Depends, Query, HTTPException
from sqlalchemy.orm import Session
from typing import Optional, List

from app.core.database import SessionLocal
from app.field_picker import FieldPicker, SchemaDirectory
from app.schemas import (
    PickerOptions,
    FieldTreeResponse,
    BranchResponse,
    AddRequest,
    AddEvent,
)

router = APIRouter()

def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()

def get_picker_options(
    restrict_to_root: bool = Query(False, description="Hide fields of related collections"),
    field: Optional[str] = Query(None, description="Narrow the result to a single field key"),
    disabled: List[str] = Query([], description="Field keys shown but not selectable"),
    allow_select_all: bool = Query(False, description="Offer the bulk 'add all' action"),
) -> PickerOptions:
    return PickerOptions(
        restrict_to_root_collection_fields=restrict_to_root,
        single_field_filter=field,
        explicitly_disabled_keys=set(disabled),
        allow_bulk_select=allow_select_all,
    )

@router.get("/fields/{collection}/tree", response_model=FieldTreeResponse)
def get_field_tree(
    collection: str,
    search: str = Query("", description="Case-insensitive search on field names"),
    options: PickerOptions = Depends(get_picker_options),
    db: Session = Depends(get_db),
):
    """Get the filtered field tree of a collection; relation branches are left unloaded."""
    picker = FieldPicker(SchemaDirectory.from_db(db), collection, options)
    tree = picker.search(search)
    return FieldTreeResponse(
        collection=collection,
        search=search,
        show_search=picker.show_search,
        allow_select_all=options.allow_bulk_select,
        select_all_disabled=picker.select_all_disabled,
        tree=tree,
    )

@router.get("/fields/{collection}/tree/branch", response_model=BranchResponse)
def get_relation_branch(
    collection: str,
    key: str = Query(..., min_length=1, description="Dotted key of a relational node"),
    search: str = Query(""),
    options: PickerOptions = Depends(get_picker_options),
    db: Session = Depends(get_db),
):
    """Load the children of a relational node."""
    picker = FieldPicker(SchemaDirectory.from_db(db), collection, options)
    picker.search(search)
    picker.reveal(key)
    children = picker.expand(key)
    if children is None:
        raise HTTPException(status_code=404, detail=f"No expandable relation '{key}' in {collection}")
    return BranchResponse(collection=collection, key=key, children=children)

@router.post("/fields/{collection}/add", response_model=AddEvent)
def add_fields(collection: str, payload: AddRequest, db: Session = Depends(get_db)):
    """Pick a single field, or every top-level field when ``all`` is set."""
    picker = FieldPicker(SchemaDirectory.from_db(db), collection, payload.options)
    picker.search(payload.search)

    event = picker.add_all() if payload.all else picker.add(payload.key)
    if event is None:
        raise HTTPException(status_code=409, detail="Nothing selectable for this request")
    return event
