# PRANA-G Alerts - push notifications for herd alerts
# Copyright (C) 2025-2026 Olga Kalinina

# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published
# by the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.

# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.

"""
Уведомление о новом алерте.

Пайплайн на один вызов: алерт -> токены пользователя -> payload ->
multicast в FCM -> удаление токенов, которые FCM признал мёртвыми.
Ошибки Firestore и FCM не ловятся, их обрабатывает (и ретраит) триггер.
"""

from typing import Dict, List, Mapping, Optional

from infrastructure.logging.logger import setup_logger
from models.alert_models import Alert, NotificationPayload, TokenResult

logger = setup_logger("alert_notifier")


def active_tokens(tokens_map: Mapping[str, object]) -> List[str]:
    """Токены с истинным флагом, в порядке карты. Выключенные не удаляются."""
    return [token for token, enabled in tokens_map.items() if enabled]


def build_payload(alert: Alert, alert_id: str, default_title: str, default_body: str) -> NotificationPayload:
    return NotificationPayload(
        title=alert.title or default_title,
        body=alert.description or default_body,
        data={
            "alertId": alert_id,
            "cattleId": alert.cattle_id,
            "type": alert.alert_type,
        },
    )


def tokens_to_prune(results: List[TokenResult]) -> List[str]:
    to_remove = []
    for result in results:
        if result.success:
            continue
        if result.is_permanent_failure:
            to_remove.append(result.token)
        else:
            logger.warning(f"send error token={result.token[:12]}… code={result.error_code}, keeping token")
    return to_remove


class AlertNotifier:
    """
    Отправляет push по новому алерту и чистит невалидные токены.

    Args:
        tokens: Репозиторий карты токенов (DeviceTokenRepository).
        dispatcher: Отправитель multicast-пушей (PushDispatcher).
        default_title: Заголовок, если у алерта его нет.
        default_body: Текст, если у алерта нет description.
    """

    def __init__(self, tokens, dispatcher, default_title: str, default_body: str):
        self.tokens = tokens
        self.dispatcher = dispatcher
        self.default_title = default_title
        self.default_body = default_body

    async def handle(self, alert_data: Optional[Dict], uid: str, alert_id: str) -> None:
        alert = Alert.model_validate(alert_data or {})
        if alert.is_deleted:
            logger.info(f"skip deleted alert user={uid} alert={alert_id}")
            return None

        tokens_map = await self.tokens.get_device_tokens(uid)
        tokens = active_tokens(tokens_map)
        if not tokens:
            logger.info(f"no active devices user={uid} alert={alert_id}")
            return None

        payload = build_payload(alert, alert_id, self.default_title, self.default_body)
        logger.info(f"sending alert={alert_id} user={uid} devices={len(tokens)}")
        results = await self.dispatcher.send_multicast(tokens, payload)

        to_remove = tokens_to_prune(results)
        if to_remove:
            await self.tokens.remove_tokens(uid, to_remove)

        return None
