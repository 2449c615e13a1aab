from pathlib import Path
from pydantic_settings import BaseSettings

PACKAGE_DIR = Path(__file__).resolve().parent


class Settings(BaseSettings):
    dataset_path: Path = PACKAGE_DIR / "data" / "departments.json"
    api_prefix: str = "/api/v1"
    host: str = "127.0.0.1"
    port: int = 8080
    log_level: str = "INFO"
    # Pooled read connections into the in-memory search index.
    index_pool_size: int = 5
    # Debounce window used by the search client while the user is typing.
    search_wait_seconds: float = 0.25
    server_url: str = "http://127.0.0.1:8080"

    model_config = {"env_prefix": "SUNSHINE_"}


settings = Settings()
