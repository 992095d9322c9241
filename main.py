import asyncio
from typing import Optional

from firebase_functions import firestore_fn

from core.alerts.notifier import AlertNotifier
from infrastructure.firebase.client import get_firebase_clients
from infrastructure.firebase.push import PushDispatcher
from infrastructure.firebase.tokens import DeviceTokenRepository
from infrastructure.logging.logger import setup_logger
from settings import settings

logger = setup_logger("alerts")

_notifier: Optional[AlertNotifier] = None


def get_notifier() -> AlertNotifier:
    """Собирает AlertNotifier один раз на процесс поверх общего Firebase-хэндла."""
    global _notifier
    if _notifier is None:
        clients = get_firebase_clients(settings)
        _notifier = AlertNotifier(
            tokens=DeviceTokenRepository(
                clients.db,
                collection=settings.USERS_COLLECTION,
                field=settings.DEVICE_TOKENS_FIELD,
            ),
            dispatcher=PushDispatcher(app=clients.app, priority=settings.PUSH_PRIORITY),
            default_title=settings.ALERT_DEFAULT_TITLE,
            default_body=settings.ALERT_DEFAULT_BODY,
        )
    return _notifier


def handle_alert_created(event) -> None:
    """Разбирает событие создания алерта и прогоняет его через AlertNotifier."""
    snapshot = event.data
    data = (snapshot.to_dict() if snapshot is not None else None) or {}
    uid = event.params["uid"]
    alert_id = event.params["alertId"]

    try:
        asyncio.run(get_notifier().handle(data, uid=uid, alert_id=alert_id))
    except Exception:
        logger.exception(f"[alerts] notify failed user={uid} alert={alert_id}")
        raise
    return None


@firestore_fn.on_document_created(document=settings.ALERT_DOCUMENT_PATH)
def notify_new_alert(event: firestore_fn.Event[Optional[firestore_fn.DocumentSnapshot]]) -> None:
    handle_alert_created(event)

