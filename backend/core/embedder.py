"""
InsightFace-based face descriptor extraction with the buffalo_l model pack.

FaceAnalysis runs detection and recognition in one pass on the full image;
the descriptor of the most confident detection identifies the person.
"""
import logging
import os

import cv2
import numpy as np

from config_loader import get_config
from utils.image import decode_base64_image, InvalidImageError

logger = logging.getLogger(__name__)


class FaceDetectionError(Exception):
    """Raised when no usable face descriptor can be derived from an image."""


class FaceEmbedder:
    """
    Face descriptor extractor backed by InsightFace FaceAnalysis.

    Models are loaded on first use, or eagerly through load() at startup.
    """

    def __init__(self, model_name="buffalo_l", model_root="./models/insightface",
                 det_size=640, ctx_id=-1):
        self.model_name = model_name
        self.model_root = model_root
        self.det_size = det_size
        self.ctx_id = ctx_id
        self.app = None

    @property
    def loaded(self):
        return self.app is not None

    def load(self):
        """Initialize InsightFace FaceAnalysis (detection + recognition only)."""
        if self.app is not None:
            return
        from insightface.app import FaceAnalysis

        os.makedirs(self.model_root, exist_ok=True)
        app = FaceAnalysis(
            name=self.model_name,
            root=self.model_root,
            allowed_modules=["detection", "recognition"],
            providers=["CPUExecutionProvider"],
        )
        app.prepare(ctx_id=self.ctx_id, det_size=(self.det_size, self.det_size))
        self.app = app
        logger.info("Face models loaded: %s from %s", self.model_name, self.model_root)

    def describe(self, img):
        """
        Return the L2-normalized descriptor of the most confident face in an RGB image.

        Raises FaceDetectionError when no face is found.
        """
        self.load()
        # InsightFace expects BGR image
        img_bgr = cv2.cvtColor(img, cv2.COLOR_RGB2BGR)
        faces = self.app.get(img_bgr)
        if not faces:
            raise FaceDetectionError("No face detected")

        best = max(faces, key=lambda f: float(f.det_score))
        emb = np.asarray(best.embedding, dtype=np.float32).flatten()

        # L2 normalize
        emb = emb / (np.linalg.norm(emb) + 1e-8)

        return emb.astype(np.float32)


def extract_descriptor(image_b64, embedder):
    """Decode a base64 image and return its face descriptor as a list of floats."""
    try:
        img = decode_base64_image(image_b64)
        return embedder.describe(img).tolist()
    except (InvalidImageError, FaceDetectionError) as e:
        logger.error("Face detection error: %s", e)
        raise FaceDetectionError("Face detection failed. Try again.") from e


# Singleton
_face_embedder = None


def get_face_embedder() -> FaceEmbedder:
    """Get or create the face embedder singleton."""
    global _face_embedder
    if _face_embedder is None:
        models = get_config()["models"]
        _face_embedder = FaceEmbedder(
            model_name=models["name"],
            model_root=models["root"],
            det_size=int(models["det_size"]),
            ctx_id=int(models["ctx_id"]),
        )
    return _face_embedder
