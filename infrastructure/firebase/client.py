from dataclasses import dataclass
from typing import Optional

import firebase_admin
from firebase_admin import credentials, firestore

from infrastructure.logging.logger import setup_logger
from settings import Settings, settings as default_settings

logger = setup_logger("firebase")

_clients: Optional["FirebaseClients"] = None


@dataclass(frozen=True)
class FirebaseClients:
    """Хэндл на Firebase-приложение процесса и его Firestore-клиент."""
    app: firebase_admin.App
    db: firestore.Client


def _init_app(cfg: Settings) -> firebase_admin.App:
    if firebase_admin._apps:
        return firebase_admin.get_app()

    options = {"projectId": cfg.FIREBASE_PROJECT_ID} if cfg.FIREBASE_PROJECT_ID else None
    if cfg.FIREBASE_CREDENTIALS_PATH:
        logger.info(f"Initializing Firebase with key {cfg.FIREBASE_CREDENTIALS_PATH}")
        cred = credentials.Certificate(str(cfg.FIREBASE_CREDENTIALS_PATH))
    else:
        logger.info("Initializing Firebase with application default credentials")
        cred = credentials.ApplicationDefault()
    return firebase_admin.initialize_app(cred, options)


def get_firebase_clients(cfg: Settings = default_settings) -> FirebaseClients:
    """
    Инициализация (один раз на процесс).

    Повторные вызовы возвращают тот же хэндл, явного закрытия нет —
    клиенты живут столько же, сколько процесс.
    """
    global _clients
    if _clients is None:
        app = _init_app(cfg)
        _clients = FirebaseClients(app=app, db=firestore.client(app))
    return _clients
