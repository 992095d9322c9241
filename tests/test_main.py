from types import SimpleNamespace

import pytest
from unittest.mock import AsyncMock, MagicMock, patch

import main


def _event(data, uid="u1", alert_id="a1"):
    snapshot = None
    if data is not None:
        snapshot = MagicMock()
        snapshot.to_dict.return_value = data
    return SimpleNamespace(data=snapshot, params={"uid": uid, "alertId": alert_id})


def _stub_notifier(side_effect=None):
    notifier = MagicMock()
    notifier.handle = AsyncMock(side_effect=side_effect)
    return notifier


def test_handle_alert_created_passes_document_and_path_params():
    notifier = _stub_notifier()

    with patch("main.get_notifier", return_value=notifier):
        result = main.handle_alert_created(_event({"title": "Fever"}, uid="farmer", alert_id="alert-9"))

    assert result is None
    notifier.handle.assert_awaited_once_with({"title": "Fever"}, uid="farmer", alert_id="alert-9")


@pytest.mark.parametrize("data", [None, {}])
def test_handle_alert_created_missing_snapshot_becomes_empty_dict(data):
    notifier = _stub_notifier()

    with patch("main.get_notifier", return_value=notifier):
        main.handle_alert_created(_event(data))

    notifier.handle.assert_awaited_once_with({}, uid="u1", alert_id="a1")


def test_handle_alert_created_logs_and_reraises():
    notifier = _stub_notifier(side_effect=RuntimeError("firestore unavailable"))

    with patch("main.get_notifier", return_value=notifier), patch.object(main, "logger") as logger:
        with pytest.raises(RuntimeError):
            main.handle_alert_created(_event({}))

    logger.exception.assert_called_once()
    assert "alert=a1" in logger.exception.call_args.args[0]
