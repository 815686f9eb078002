"""
Chart Router
Computes Big Three placements for a birth event and tags the requester
"""

from fastapi import APIRouter, Depends

from api.dependencies import get_pipeline
from constants.messages import ErrorMessages
from core.exceptions import InvalidArgumentError
from models.api import ChartRequest, ChartResponse
from models.astrology import Subscriber
from services.date_parser import parse_birth_event
from services.pipeline import PlacementPipeline

router = APIRouter(tags=["Placements"])


@router.post(
    "/generate-chart",
    response_model=ChartResponse,
    summary="Compute Sun, Moon and Rising",
    description="Resolve the birthplace, compute placements and subscribe the requester to the mailing list"
)
async def generate_chart(
    request: ChartRequest,
    pipeline: PlacementPipeline = Depends(get_pipeline),
):
    """
    Compute the placement list and Big Three for a birth event.
    Errors are rendered by the registered AppException handler.
    """
    required = (request.email, request.dob, request.tob, request.birthplace)
    if not all(value and value.strip() for value in required):
        raise InvalidArgumentError(ErrorMessages.MISSING_FIELDS)

    birth = parse_birth_event(request.dob, request.tob, request.birthplace)
    subscriber = Subscriber(email=request.email.strip(), first_name=request.first_name or "")

    result = await pipeline.compute_placements(birth, subscriber)

    # Raw upstream payloads let the page list planet and house per body
    return ChartResponse(
        ok=True,
        placements=result.big_three,
        points=result.placements,
        chart={
            "planets": result.raw.get("planets", []),
            "houseCusps": result.raw.get("house_cusps", {}),
            "meta": result.meta.model_dump() if result.meta else {},
        },
    )
