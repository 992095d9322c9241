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

"""Чтение и чистка карты токенов устройств пользователя в Firestore."""

from typing import Dict, Iterable, List

from firebase_admin import firestore
from google.cloud.firestore_v1.field_path import FieldPath

from infrastructure.logging.logger import setup_logger
from infrastructure.utils.threading_tools import run_blocking

logger = setup_logger("device_tokens")


class DeviceTokenRepository:
    """
    Работает с полем-картой token -> enabled в документе users/{uid}.

    Репозиторий никогда не добавляет токены, только читает и удаляет.
    """

    def __init__(self, db, collection: str = "users", field: str = "deviceTokens"):
        self.db = db
        self.collection = collection
        self.field = field

    def _user_ref(self, uid: str):
        return self.db.collection(self.collection).document(uid)

    async def get_device_tokens(self, uid: str) -> Dict[str, object]:
        """Возвращает карту токенов; нет документа или поля — пустая карта."""
        snapshot = await run_blocking(self._user_ref(uid).get)
        if not snapshot.exists:
            logger.info(f"user={uid} document not found")
            return {}

        tokens_map = (snapshot.to_dict() or {}).get(self.field) or {}
        if not isinstance(tokens_map, dict):
            logger.warning(f"user={uid} field {self.field} is not a map: {type(tokens_map).__name__}")
            return {}
        return tokens_map

    def build_delete_update(self, tokens: Iterable[str]) -> Dict[str, object]:
        # FieldPath экранирует токены с ':' '-' '.' обратными кавычками
        return {
            FieldPath(self.field, token).to_api_repr(): firestore.DELETE_FIELD
            for token in tokens
        }

    async def remove_tokens(self, uid: str, tokens: List[str]) -> None:
        """Одним update удаляет из карты ровно переданные ключи."""
        if not tokens:
            return
        updates = self.build_delete_update(tokens)
        await run_blocking(self._user_ref(uid).update, updates)
        logger.info(f"user={uid} removed {len(tokens)} invalid token(s)")
