from fastapi import APIRouter
from app.api.api_v1 import fields, schema


api_router = APIRouter()

api_router.include_router(fields.router, prefix="", tags=["fields"])
api_router.include_router(schema.router, prefix="", tags=["schema"])
