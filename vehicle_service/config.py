"""
Configuration de l'application / Application configuration.
Utilise pydantic-settings pour charger depuis .env ou variables d'environnement.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Application
    APP_NAME: str = "Vehicle Service"
    APP_VERSION: str = "0.1.0"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"

    # Database - SQLite par défaut pour le développement
    # Database - SQLite by default for development (postgresql+asyncpg:// in prod)
    DATABASE_URL: str = "sqlite+aiosqlite:///./vehicle_service.db"

    # CORS - origines autorisées / allowed origins
    CORS_ORIGINS: list[str] = ["http://localhost:5173", "http://localhost:3000"]

    # Prefixe des routes (vide derriere la gateway) / Route prefix (empty behind the gateway)
    API_PREFIX: str = ""

    # Photos
    UPLOAD_DIR: str = "uploads/vehicle-photos"
    PHOTO_URL_PREFIX: str = "/api/v1/vehicles"
    MAX_PHOTO_SIZE_BYTES: int = 10 * 1024 * 1024  # 10 MB

    # Identifiants / Identifiers
    VEHICLE_ID_MAX_ATTEMPTS: int = 5

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_DEFAULT: str = "120/minute"
    RATE_LIMIT_REGISTER: str = "20/minute"
    RATE_LIMIT_UPLOAD: str = "30/minute"

    # Donnees de demo / Demo data (dev only)
    SEED_DEMO_DATA: bool = False

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
