import sys

from pydantic_settings import BaseSettings

_ENV_FILE = None if "pytest" in sys.modules else ".env"


class Settings(BaseSettings):
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = False

    EMPLOYEE_API_BASE_URL: str = ""
    EMPLOYEE_API_TOKEN: str = ""
    EMPLOYEE_API_TIMEOUT: float = 30.0
    EMPLOYEE_LIST_PAGE_SIZE: int = 100

    CORS_ORIGINS: list[str] = ["http://localhost:3000"]

    model_config = {
        "env_file": _ENV_FILE,
        "env_file_encoding": "utf-8",
        "case_sensitive": True,
    }


settings = Settings()
