import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from api.signup import router as signup_router
from api.login import router as login_router
from api.health import router as health_router
from api.errors import register_error_handlers
from api.limits import BodySizeLimitMiddleware
from config_loader import get_config
from core.embedder import get_face_embedder
from db.session import init_db

config = get_config()
logger = logging.getLogger(__name__)
logging.basicConfig(
    level=config["logging"].get("level", "INFO"),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)

app = FastAPI(
    title="Face Login Backend",
    description="Password-less signup and login by facial recognition",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config["cors"]["origins"],
    allow_credentials=bool(config["cors"].get("allow_credentials", True)),
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(BodySizeLimitMiddleware, settings=config["server"])

register_error_handlers(app)


@app.on_event("startup")
def startup():
    print("🚀 Starting Face Login Backend...")

    print("📊 Initializing database...")
    init_db()

    # A model loading failure is reported but does not stop the server;
    # requests will retry the load lazily.
    print("🧠 Loading face models...")
    try:
        get_face_embedder().load()
        print("✅ Face models loaded")
    except Exception:
        print("⚠️ Face models not loaded, will retry on first request")
        logger.exception("Error loading face models")

    print("✅ System ready!")


# Mount routers
app.include_router(signup_router, prefix="/signup", tags=["Signup"])
app.include_router(login_router, prefix="/login", tags=["Login"])
app.include_router(health_router, prefix="/health", tags=["Health"])


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host=config["server"]["host"],
        port=int(config["server"]["port"]),
        log_level=config["logging"].get("level", "INFO").lower(),
    )
