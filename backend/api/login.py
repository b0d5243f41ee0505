"""
Login API: authenticates a user by comparing a fresh face descriptor
against the descriptors stored at signup.
"""
import logging

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from api.errors import ApiError
from api.schemas import LoginRequest, LoginResponse
from config_loader import get_config
from core.embedder import FaceEmbedder, FaceDetectionError, extract_descriptor, get_face_embedder
from core.verifier import verify
from db.crud import get_user_by_email, get_user_descriptors
from db.session import get_db
from services.audit_logger import log_auth_event

router = APIRouter()
logger = logging.getLogger(__name__)

FAILED = "Login failed. Try again."


def get_match_threshold() -> float:
    return float(get_config()["matching"]["distance_threshold"])


@router.post("", response_model=LoginResponse, response_model_exclude_none=True)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    embedder: FaceEmbedder = Depends(get_face_embedder),
    threshold: float = Depends(get_match_threshold),
):
    """
    Log in with an email and a face image; returns the account role on match.
    """
    if body.missing_fields():
        raise ApiError(400, "Email and image are required")

    try:
        user = get_user_by_email(db, body.email)
        if user is None:
            log_auth_event("login", body.email, False, "user not found")
            raise ApiError(400, "User not found")

        probe = extract_descriptor(body.image, embedder)
        matched, distance = verify(get_user_descriptors(user), probe, threshold)
    except ApiError:
        raise
    except FaceDetectionError as e:
        log_auth_event("login", body.email, False, str(e))
        raise ApiError(500, FAILED)
    except Exception as e:
        logger.exception("Login error: %s", e)
        log_auth_event("login", body.email, False, "internal error")
        raise ApiError(500, FAILED)

    label = user.email if matched else "unknown"
    logger.info("Best match: %s (%.4f)", label, distance)

    if not matched:
        log_auth_event("login", body.email, False, "face does not match", distance)
        raise ApiError(400, "Face does not match", success=False)

    log_auth_event("login", body.email, True, "face matched", distance)
    return {"success": True, "message": "Login successful", "role": user.role}
