from settings import Settings


def test_settings_defaults(monkeypatch):
    for name in ("USERS_COLLECTION", "DEVICE_TOKENS_FIELD", "ALERT_DEFAULT_TITLE", "ALERT_DEFAULT_BODY", "PUSH_PRIORITY"):
        monkeypatch.delenv(name, raising=False)

    cfg = Settings(_env_file=None)

    assert cfg.USERS_COLLECTION == "users"
    assert cfg.DEVICE_TOKENS_FIELD == "deviceTokens"
    assert cfg.ALERT_DEFAULT_TITLE == "PRANA-G Alert"
    assert cfg.ALERT_DEFAULT_BODY == "New alert received."
    assert cfg.PUSH_PRIORITY == "high"


def test_settings_has_only_used_fields():
    assert set(Settings.model_fields) == {
        "FIREBASE_CREDENTIALS_PATH",
        "FIREBASE_PROJECT_ID",
        "USERS_COLLECTION",
        "DEVICE_TOKENS_FIELD",
        "ALERT_DOCUMENT_PATH",
        "ALERT_DEFAULT_TITLE",
        "ALERT_DEFAULT_BODY",
        "PUSH_PRIORITY",
        "FIREBASE_IO_WORKERS",
        "LOG_LEVEL",
        "LOG_DIR",
    }
