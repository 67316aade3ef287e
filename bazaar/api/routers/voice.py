from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from bazaar.api.deps import get_current_user, http_error
from bazaar.data.database import get_db
from bazaar.data.models.user import UserModel
from bazaar.domain.enums import Language
from bazaar.domain.errors import ConflictError, NotFoundError, PermissionDenied, ValidationError
from bazaar.utils.settings import DEFAULT_LANGUAGE
from bazaar.domain.schemas import (
    VoiceCartIn,
    VoiceCartOut,
    VoiceCommandsOut,
    VoiceIntentIn,
    VoiceIntentOut,
)
from bazaar.services.voice_service import (
    VOICE_COMMANDS,
    VoiceService,
    announcement,
    describe_intent,
    match_intent,
    speech_locale,
)

router = APIRouter(prefix="/api/voice", tags=["voice"])


@router.get("/commands", response_model=VoiceCommandsOut)
def list_commands(language: Language = Query(Language(DEFAULT_LANGUAGE))):
    return {
        "locale": speech_locale(language),
        "announcement": announcement(language),
        "commands": [
            {"key": c.key, "name_key": c.name_key, "spoken_name": c.spoken_name(language)}
            for c in VOICE_COMMANDS
        ],
    }


@router.post("/intent", response_model=VoiceIntentOut)
def recognise_intent(payload: VoiceIntentIn):
    return describe_intent(match_intent(payload.transcript), payload.language)


@router.post("/cart", response_model=VoiceCartOut, status_code=201)
def add_by_voice(
    payload: VoiceCartIn,
    user: UserModel = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    svc = VoiceService(db)
    try:
        intent, item = svc.add_to_cart(
            user,
            payload.transcript,
            payload.language,
            quantity=payload.quantity,
            wholesaler_id=payload.wholesaler_id,
        )
    except ValidationError as e:
        raise http_error(400, e)
    except PermissionDenied as e:
        raise http_error(403, e)
    except NotFoundError as e:
        raise http_error(404, e)
    except ConflictError as e:
        raise http_error(409, e)
    return {"intent": intent, "item": item}
