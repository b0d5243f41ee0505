"""
Signup API: registers a user together with one face descriptor.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.errors import ApiError
from api.schemas import SignupRequest, MessageResponse
from core.embedder import FaceEmbedder, FaceDetectionError, extract_descriptor, get_face_embedder
from db.crud import create_user, get_user_by_email, UserAlreadyExists
from db.session import get_db
from services.audit_logger import log_auth_event

router = APIRouter()
logger = logging.getLogger(__name__)

FAILED = "Signup failed. Try again."


@router.post("", status_code=201, response_model=MessageResponse)
def signup(
    body: SignupRequest,
    db: Session = Depends(get_db),
    embedder: FaceEmbedder = Depends(get_face_embedder),
):
    """
    Create an account whose only credential is the face in `image`.

    - **name**, **age**, **email**, **role**: account details
    - **image**: base64 image (or data URL) containing the user's face
    """
    if body.missing_fields():
        raise ApiError(400, "All fields are required")

    try:
        if get_user_by_email(db, body.email) is not None:
            log_auth_event("signup", body.email, False, "user already exists")
            raise ApiError(400, "User already exists")

        descriptor = extract_descriptor(body.image, embedder)
        create_user(db, body.name, body.age, body.email, body.role, descriptor)
    except ApiError:
        raise
    except UserAlreadyExists:
        log_auth_event("signup", body.email, False, "user already exists")
        raise ApiError(400, "User already exists")
    except FaceDetectionError as e:
        log_auth_event("signup", body.email, False, str(e))
        raise ApiError(500, FAILED)
    except Exception as e:
        logger.exception("Signup error: %s", e)
        log_auth_event("signup", body.email, False, "internal error")
        raise ApiError(500, FAILED)

    log_auth_event("signup", body.email, True, "account created")
    return {"message": "Signup successful"}
