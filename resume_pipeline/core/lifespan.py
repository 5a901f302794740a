from contextlib import asynccontextmanager
import logging

from resume_pipeline.core.config import settings
from resume_pipeline.store import ResumeRecordStore, SQLiteConnection

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app):
    connection = SQLiteConnection(settings.record_store_db_path)
    app.state.record_store = ResumeRecordStore(connection)
    logger.info("resume_service_started store=%s", connection.db_path)
    try:
        yield
    finally:
        app.state.record_store = None
        connection.close()
