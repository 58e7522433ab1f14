from pathlib import Path

from pydantic_settings import BaseSettings

# .env lookup: backend/.env → project root/.env
_backend_dir = Path(__file__).resolve().parent.parent
_env_candidates = [_backend_dir / ".env", _backend_dir.parent / ".env"]
_env_file = next((p for p in _env_candidates if p.exists()), ".env")


class Settings(BaseSettings):
    model_config = {"env_file": str(_env_file), "env_file_encoding": "utf-8"}

    # Application
    app_env: str = "development"
    debug: bool = True

    # Government data sources
    nadlan_base_url: str = "https://www.nadlan.gov.il/Nadlan/rest"
    data_gov_base_url: str = "https://data.gov.il/api/3/action"
    data_gov_resource_id: str = "real-estate-transactions"
    cbs_base_url: str = "https://www.cbs.gov.il/he/publications/pages/api.aspx"
    user_agent: str = "AppraisalPro/1.0"

    # Fetch policy
    source_timeout_seconds: float = 30.0
    rate_limit_interval_seconds: float = 0.3

    # Fallback synthesis
    fallback_total_budget: int = 100
    fallback_min_per_city: int = 3

    # Server
    host: str = "0.0.0.0"
    port: int = 8000
    cors_origins: list[str] = ["http://localhost:5173"]


settings = Settings()
