from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

load_dotenv()  # Загружаем .env, если он есть


class Settings(BaseSettings):
    # Firebase. Без пути к ключу используются Application Default Credentials
    FIREBASE_CREDENTIALS_PATH: Optional[Path] = None
    FIREBASE_PROJECT_ID: Optional[str] = None

    # Firestore
    USERS_COLLECTION: str = "users"
    DEVICE_TOKENS_FIELD: str = "deviceTokens"
    ALERT_DOCUMENT_PATH: str = "users/{uid}/alerts/{alertId}"

    # Тексты уведомления, если у алерта нет своих
    ALERT_DEFAULT_TITLE: str = "PRANA-G Alert"
    ALERT_DEFAULT_BODY: str = "New alert received."

    PUSH_PRIORITY: str = "high"
    FIREBASE_IO_WORKERS: int = 4

    # Логи: без LOG_DIR пишем только в stdout
    LOG_LEVEL: str = "INFO"
    LOG_DIR: Optional[Path] = None

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


settings = Settings()
