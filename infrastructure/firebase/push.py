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
Отправка push-уведомлений через FCM HTTP v1 (firebase-admin).

Один multicast-запрос на все токены пользователя, результаты —
по одному на токен, в том же порядке.
"""

from typing import List, Optional

from firebase_admin import exceptions, messaging

from infrastructure.logging.logger import setup_logger
from infrastructure.utils.threading_tools import run_blocking
from models.alert_models import (
    INVALID_REGISTRATION_TOKEN,
    REGISTRATION_TOKEN_NOT_REGISTERED,
    NotificationPayload,
    TokenResult,
)

logger = setup_logger("push")

# Лимит токенов в одном MulticastMessage
MAX_MULTICAST_TOKENS = 500


def classify_send_error(error: Optional[Exception]) -> str:
    """Переводит исключение FCM в код вида messaging/<kebab-case>."""
    if isinstance(error, messaging.UnregisteredError):
        return REGISTRATION_TOKEN_NOT_REGISTERED
    if isinstance(error, exceptions.InvalidArgumentError) and "registration token" in str(error).lower():
        return INVALID_REGISTRATION_TOKEN
    code = getattr(error, "code", None) or "unknown"
    return "messaging/" + str(code).lower().replace("_", "-")


class PushDispatcher:
    def __init__(self, app=None, priority: str = "high"):
        self.app = app
        self.priority = priority

    def build_message(self, tokens: List[str], payload: NotificationPayload) -> messaging.MulticastMessage:
        apns_priority = "10" if self.priority == "high" else "5"
        return messaging.MulticastMessage(
            tokens=tokens,
            notification=messaging.Notification(title=payload.title, body=payload.body),
            data=payload.data,
            android=messaging.AndroidConfig(
                priority=self.priority,  # важно для фоновой доставки
            ),
            apns=messaging.APNSConfig(headers={"apns-priority": apns_priority}),
        )

    async def send_multicast(self, tokens: List[str], payload: NotificationPayload) -> List[TokenResult]:
        results: List[TokenResult] = []
        for start in range(0, len(tokens), MAX_MULTICAST_TOKENS):
            batch = tokens[start:start + MAX_MULTICAST_TOKENS]
            response = await run_blocking(
                messaging.send_each_for_multicast, self.build_message(batch, payload), app=self.app
            )
            for token, send_response in zip(batch, response.responses):
                if send_response.success:
                    results.append(TokenResult(token=token))
                else:
                    results.append(TokenResult(token=token, error_code=classify_send_error(send_response.exception)))
            logger.info(f"multicast sent ok={response.success_count} failed={response.failure_count}")
        return results
