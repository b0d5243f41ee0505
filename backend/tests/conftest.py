"""
Pytest configuration and fixtures for Face Login Backend tests.
Provides test client, in-memory database, and a mock face embedder.
"""

import sys
import os
import base64
import tempfile
from pathlib import Path

# Add backend to path for imports
backend_path = Path(__file__).parent.parent
sys.path.insert(0, str(backend_path))

# Keep test runs away from the real database and audit log
os.environ.setdefault("DATABASE_URL", "sqlite:///:memory:")
os.environ.setdefault("SECURITY_LOG", os.path.join(tempfile.gettempdir(), "face_login_test_security.log"))

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool
from unittest.mock import MagicMock
import numpy as np

from db.models import Base
from db.session import get_db
from core.embedder import get_face_embedder


TEST_DATABASE_URL = "sqlite:///:memory:"
DESCRIPTOR_DIM = 512


def random_descriptor(seed):
    """Normalized descriptor, deterministic per seed."""
    rng = np.random.default_rng(seed)
    emb = rng.standard_normal(DESCRIPTOR_DIM).astype(np.float32)
    return emb / np.linalg.norm(emb)


@pytest.fixture(scope="function")
def test_engine():
    """Create a fresh in-memory database engine for each test."""
    engine = create_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine):
    """Create a test database session."""
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)
    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture(scope="function")
def mock_face_embedder():
    """Mock FaceEmbedder to avoid loading InsightFace models."""
    mock = MagicMock()
    mock.loaded = True
    mock.describe.return_value = random_descriptor(0)
    return mock


@pytest.fixture(scope="function")
def client(test_engine, mock_face_embedder):
    """
    TestClient over the real application with the database and the face
    embedder swapped out. Startup hooks are not run, so no models are loaded.
    """
    from main import app

    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=test_engine)

    def override_get_db():
        db = TestingSessionLocal()
        try:
            yield db
        finally:
            db.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_face_embedder] = lambda: mock_face_embedder

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def sample_image_bytes():
    """Generate a simple test image as bytes."""
    import io
    from PIL import Image

    # Create a simple 200x200 RGB image
    img = Image.new('RGB', (200, 200), color='white')
    buffer = io.BytesIO()
    img.save(buffer, format='JPEG')
    buffer.seek(0)
    return buffer.read()


@pytest.fixture
def sample_image_b64(sample_image_bytes):
    return base64.b64encode(sample_image_bytes).decode("ascii")


@pytest.fixture
def signup_payload(sample_image_b64):
    return {
        "name": "Ada",
        "age": 36,
        "email": "ada@example.com",
        "role": "teacher",
        "image": sample_image_b64,
    }
