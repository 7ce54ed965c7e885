import logging
import sys
from contextlib import asynccontextmanager

from fastapi import FastAPI

from app.config import Settings
from app.exceptions.custom import DataUnavailableError, RequestRejectedError
from app.exceptions.handlers import (
    data_unavailable_error_handler,
    request_rejected_error_handler,
)
from app.routers.availability import router as availability_router
from app.services.availability import AvailabilityService


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )

    app.state.availability_service = AvailabilityService(
        settings.rates_file, settings.offers_file
    )

    yield


app = FastAPI(title="Hotel Availability Search", lifespan=lifespan)

app.add_exception_handler(DataUnavailableError, data_unavailable_error_handler)
app.add_exception_handler(RequestRejectedError, request_rejected_error_handler)

app.include_router(availability_router)
