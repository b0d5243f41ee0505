import copy
import os

import yaml

DEFAULTS = {
    "server": {"host": "0.0.0.0", "port": 6001, "max_body_bytes": 10 * 1024 * 1024},
    "database": {"url": "sqlite:///./face_login.db"},
    "cors": {"origins": ["http://localhost:3000"], "allow_credentials": True},
    "matching": {"distance_threshold": 1.0},
    "models": {"name": "buffalo_l", "root": "./models/insightface", "det_size": 640, "ctx_id": -1},
    "logging": {"level": "INFO", "security_log": "security.log"},
}

_config = None


def default_config_path():
    base = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
    return os.path.join(base, "config", "settings.yaml")


def load_yaml(path):
    if not os.path.exists(path):
        return {}
    with open(path, "r") as f:
        return yaml.safe_load(f) or {}


def _merge(base, override):
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(base.get(key), dict):
            _merge(base[key], value)
        else:
            base[key] = value
    return base


def _apply_env(cfg, env):
    if env.get("DATABASE_URL"):
        cfg["database"]["url"] = env["DATABASE_URL"]
    if env.get("HOST"):
        cfg["server"]["host"] = env["HOST"]
    if env.get("PORT"):
        cfg["server"]["port"] = int(env["PORT"])
    if env.get("CORS_ORIGINS"):
        cfg["cors"]["origins"] = [o.strip() for o in env["CORS_ORIGINS"].split(",") if o.strip()]
    if env.get("FACE_MATCH_THRESHOLD"):
        cfg["matching"]["distance_threshold"] = float(env["FACE_MATCH_THRESHOLD"])
    if env.get("FACE_MODEL_ROOT"):
        cfg["models"]["root"] = env["FACE_MODEL_ROOT"]
    if env.get("SECURITY_LOG"):
        cfg["logging"]["security_log"] = env["SECURITY_LOG"]
    return cfg


def load_config(path=None, env=None):
    """
    Build the service configuration.

    Built-in defaults are overlaid with the YAML settings file and then with
    environment variables, so deployments can override single values
    (DATABASE_URL, PORT, ...) without shipping a new file.
    """
    env = os.environ if env is None else env
    path = path or env.get("FACE_LOGIN_CONFIG") or default_config_path()
    cfg = copy.deepcopy(DEFAULTS)
    _merge(cfg, load_yaml(path))
    return _apply_env(cfg, env)


def get_config():
    """Cached configuration for the running process."""
    global _config
    if _config is None:
        _config = load_config()
    return _config
