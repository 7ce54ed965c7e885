from typing import Annotated

from fastapi import Depends, Request

from app.services.availability import AvailabilityService


def get_availability_service(request: Request) -> AvailabilityService:
    return request.app.state.availability_service


AvailabilityDep = Annotated[AvailabilityService, Depends(get_availability_service)]
