"""robyn-upload-api - File upload metadata API powered by Robyn."""

from robyn import Robyn

from upload_api.api.health import router as health_router
from upload_api.api.upload import router as upload_router
from upload_api.core.lifespan import create_lifespan
from upload_api.core.logger import LogIcon, logger
from upload_api.core.settings import settings as st
from upload_api.events.ingestor import UploadIngestorEvent
from upload_api.middlewares.base import MiddlewareHandler
from upload_api.middlewares.files import FormUploadOpenAPIMiddleware

app = Robyn(__file__)

# Lifespan events, created before routers are included so they share its state
lifespan = create_lifespan(app)
lifespan.register(UploadIngestorEvent)

app.startup_handler(lifespan.startup)
app.shutdown_handler(lifespan.shutdown)

# Routers
app.include_router(health_router)
app.include_router(upload_router)

# Middlewares
middlewares = MiddlewareHandler(app)
middlewares.register(FormUploadOpenAPIMiddleware())


def main() -> None:
    logger.info(f"Starting {st.API_NAME}", icon=LogIcon.START, host=st.API_HOST, port=st.API_PORT)
    app.start(host=st.API_HOST, port=st.API_PORT)


if __name__ == "__main__":
    main()
