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
Модели алертов и push-уведомлений.

Alert — документ users/{uid}/alerts/{alertId}, создаётся снаружи и здесь
только читается. NotificationPayload собирается на каждый вызов,
TokenResult — результат отправки на один токен устройства.
"""

from dataclasses import dataclass
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

# Коды ошибок FCM, после которых токен уже никогда не заработает
INVALID_REGISTRATION_TOKEN = "messaging/invalid-registration-token"
REGISTRATION_TOKEN_NOT_REGISTERED = "messaging/registration-token-not-registered"

PERMANENT_TOKEN_ERRORS = frozenset({
    INVALID_REGISTRATION_TOKEN,
    REGISTRATION_TOKEN_NOT_REGISTERED,
})


class Alert(BaseModel):
    """
    Алерт пользователя.

    Все поля необязательные. cattleId и type в Firestore бывают и числами,
    поэтому сразу приводятся к строке; пустое или ложное значение даёт "".

    Attributes:
        title: Заголовок уведомления.
        description: Текст уведомления.
        alert_type: Тип алерта (поле "type").
        cattle_id: ID животного (поле "cattleId").
        deleted: Флаг мягкого удаления. Сырое значение, без приведения.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: Optional[str] = None
    description: Optional[str] = None
    alert_type: str = Field(default="", alias="type")
    cattle_id: str = Field(default="", alias="cattleId")
    deleted: Any = None

    @field_validator("title", "description", mode="before")
    @classmethod
    def _text_or_none(cls, value):
        return str(value) if value else None

    @field_validator("alert_type", "cattle_id", mode="before")
    @classmethod
    def _text_or_empty(cls, value):
        return str(value) if value else ""

    @property
    def is_deleted(self) -> bool:
        # Только настоящий True: "true" или 1 удалением не считаются
        return self.deleted is True


class NotificationPayload(BaseModel):
    """Видимая часть уведомления и data-бандл для приложения."""
    title: str
    body: str
    data: Dict[str, str] = Field(default_factory=dict)


@dataclass
class TokenResult:
    """Результат отправки на один токен. error_code=None — успех."""
    token: str
    error_code: Optional[str] = None

    @property
    def success(self) -> bool:
        return self.error_code is None

    @property
    def is_permanent_failure(self) -> bool:
        return self.error_code in PERMANENT_TOKEN_ERRORS
