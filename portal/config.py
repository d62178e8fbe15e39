from __future__ import annotations

from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Paths
    base_dir: Path = Path(__file__).resolve().parent.parent
    data_dir: Path = base_dir / "data"
    db_path: Path = data_dir / "portal.duckdb"

    # Server
    host: str = "127.0.0.1"
    port: int = 8080

    # Backend REST API
    api_base_url: str = "http://localhost:3000"
    access_token_header: str = "x-access-token"
    request_timeout: float = 5.0  # httpx default, no retries anywhere

    # Signup draft
    signup_draft_key: str = "signupForm"
    signup_draft_ttl: int = 60 * 60  # seconds

    # Views
    recent_applications_limit: int = 5
    default_company_name: str = "Centurion University"

    model_config = {"env_prefix": "CAREERS_PORTAL_"}


settings = Settings()
