import logging
from datetime import datetime

import pytest

from app.notifier import (
    LogNotifier,
    Notifier,
    deliver_in_background,
    render_response_receipt,
)


class BrokenNotifier(Notifier):
    def send(self, recipient, message):
        raise ConnectionError("smtp down")


def test_receipt_template_renders_title_and_time():
    message = render_response_receipt("Coffee Survey", datetime(2026, 10, 19, 8, 30))

    assert message.subject == "Your response to Coffee Survey"
    assert "\"Coffee Survey\"" in message.body
    assert "2026-10-19 08:30" in message.body


def test_delivery_failure_is_logged_not_raised(caplog):
    message = render_response_receipt("Coffee Survey", datetime(2026, 10, 19))

    with caplog.at_level(logging.ERROR, logger="app.notifier"):
        deliver_in_background(BrokenNotifier(), "bob@x.com", message)

    assert "bob@x.com" in caplog.text


def test_log_notifier_logs_subject(caplog):
    message = render_response_receipt("Coffee Survey", datetime(2026, 10, 19))

    with caplog.at_level(logging.INFO, logger="app.notifier"):
        LogNotifier().send("bob@x.com", message)

    assert "Your response to Coffee Survey" in caplog.text


def test_backend_without_send_cannot_be_created():
    class SilentNotifier(Notifier):
        pass

    with pytest.raises(TypeError):
        SilentNotifier()
