import logging
from datetime import datetime
from typing import Optional

from sqlalchemy import inspect
from sqlalchemy.orm import Session

from app.core.database import engine
from app.crud import schema_crud
from app.models import Base
from app.preprocessing.loader import SchemaSnapshotLoader

logger = logging.getLogger("uvicorn")


class ApplicationInitializer:
    """Handles application initialization: schema tables and snapshot import."""

    def __init__(self, snapshot_path: Optional[str] = None, bind=None):
        self.loader = SchemaSnapshotLoader(snapshot_path)
        self.engine = bind or engine

    def initialize_database(self, db: Session, load_snapshot: bool = True) -> dict:
        logger.info("🔍 Checking database initialization status...")
        try:
            logger.info("🛠️ Creating database schema...")
            Base.metadata.create_all(bind=self.engine)
            logger.info("✅ Database schema created successfully")

            n_fields = schema_crud.count_fields(db)
            status = {
                "fields_count": n_fields,
                "needs_import": n_fields == 0,
                "import_completed": False,
                "import_time": 0.0,
            }

            if n_fields > 0:
                logger.info(f"✅ Database already holds {n_fields:,} schema fields!")
                status["import_completed"] = True
            elif load_snapshot:
                logger.info("📦 No schema metadata yet, importing snapshot...")
                status.update(self._run_import(db))
            else:
                logger.info("↪️ Snapshot import disabled; starting with an empty schema.")

            return status

        except Exception as e:
            logger.error(f"❌ Database initialization failed: {e}")
            return {
                "fields_count": 0,
                "needs_import": True,
                "import_completed": False,
                "import_time": 0.0,
                "error": str(e),
            }

    def _run_import(self, db: Session) -> dict:
        """Load the snapshot file and write it to the schema tables."""
        if not self.loader.exists():
            logger.warning(f"⚠️ {self.loader.path} not found. Schema will stay empty.")
            return {"import_completed": False, "import_time": 0.0}

        try:
            start_time = datetime.now()

            snapshot = self.loader.load()
            counts = schema_crud.replace_snapshot(
                db, snapshot.collections, snapshot.fields, snapshot.relations
            )

            import_time = (datetime.now() - start_time).total_seconds()
            logger.info(f"✅ Imported {counts['collections']} collections, {counts['fields']:,} fields "
                        f"and {counts['relations']} relations in {import_time:.2f} seconds.")

            return {
                "import_completed": True,
                "import_time": import_time,
                "fields_count": counts["fields"],
            }

        except Exception as e:
            logger.error(f"❌ Snapshot import failed: {e}")
            import traceback
            logger.error(f"Full traceback: {traceback.format_exc()}")
            return {
                "import_completed": False,
                "import_time": 0.0,
                "error": str(e),
            }

    def get_initialization_summary(self, db: Session) -> dict:
        """Get summary of current initialization status."""
        try:
            tables = inspect(self.engine).get_table_names()
            if "schema_fields" not in tables:
                return {"database": {"fields": 0, "initialized": False}}

            n_fields = schema_crud.count_fields(db)
            collections = schema_crud.get_collections(db)

            return {
                "database": {
                    "fields": n_fields,
                    "initialized": n_fields > 0,
                },
                "collections": [c.collection for c in collections],
                "snapshot": {
                    "path": self.loader.path,
                    "exists": self.loader.exists(),
                },
            }

        except Exception as e:
            logger.error(f"Failed to get initialization summary: {e}")
            return {"error": str(e)}
