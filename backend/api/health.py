from fastapi import APIRouter, Depends

from core.embedder import FaceEmbedder, get_face_embedder

SERVICE = "face-login-backend"
VERSION = "1.0.0"

router = APIRouter()


@router.get("")
def health(embedder: FaceEmbedder = Depends(get_face_embedder)):
    """Health check endpoint for monitoring."""
    return {
        "status": "healthy",
        "service": SERVICE,
        "version": VERSION,
        "models_loaded": embedder.loaded,
    }
