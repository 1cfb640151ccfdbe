"""Upload ingestor lifespan event."""

from upload_api.core.lifespan import BaseEvent
from upload_api.core.settings import settings as st
from upload_api.services.ingestor import UploadIngestor


class UploadIngestorEvent(BaseEvent[UploadIngestor]):
    """Builds the shared UploadIngestor for the configured form field."""

    name = "ingestor"

    async def startup(self) -> UploadIngestor:
        return UploadIngestor(field=st.UPLOAD_FIELD)
