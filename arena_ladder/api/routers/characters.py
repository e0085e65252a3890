"""Character detail endpoint."""

from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import APIRouter, Depends, Response

from ...core.errors import AuthError, ValidationError
from ...services import LadderService
from ...services.validation import validate_region
from ..deps import get_ladder_service

router = APIRouter(tags=["characters"])


def _require_params(
    region: Optional[str] = None,
    realm: Optional[str] = None,
    character: Optional[str] = None,
) -> Dict[str, str]:
    if not region or not realm or not character:
        raise ValidationError("region, realm and character are required", "Missing required parameters")
    return {"region": validate_region(region), "realm": realm, "character": character}


@router.get("/character-details")
async def character_details(
    response: Response,
    params: Dict[str, str] = Depends(_require_params),
    service: LadderService = Depends(get_ladder_service),
) -> Dict[str, Any]:
    """Merged profile and active specialization for one character."""

    try:
        details = await service.get_character(
            params["region"], params["realm"], params["character"]
        )
    except AuthError as exc:
        exc.status_code = 401
        exc.user_message = "Authentication failed"
        raise

    response.headers["Cache-Control"] = "public, max-age=600"
    return details


__all__ = ["router"]
