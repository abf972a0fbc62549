import requests

import notifier as notifier_module
from notifier import MontroyashiNotifier


class FakeResponse:
    def __init__(self, status_code=200, text=""):
        self.status_code = status_code
        self.text = text


class TestNotify:
    def test_prints_without_url(self, capsys):
        assert MontroyashiNotifier().notify("hello") is True
        assert "Message From Nordo Service: hello" in capsys.readouterr().out

    def test_posts_when_url_configured(self, monkeypatch):
        calls = []

        def fake_post(url, json, timeout):
            calls.append((url, json))
            return FakeResponse()

        monkeypatch.setattr(notifier_module.requests, "post", fake_post)
        notifier = MontroyashiNotifier(url="http://montroyashi.local/notify")

        assert notifier.notify("Starting to boil potatoes") is True
        assert calls == [(
            "http://montroyashi.local/notify",
            {"robot": "Nordo Service", "message": "Starting to boil potatoes"},
        )]

    def test_connection_error_is_reported(self, monkeypatch, capsys):
        def fake_post(url, json, timeout):
            raise requests.exceptions.ConnectionError("refused")

        monkeypatch.setattr(notifier_module.requests, "post", fake_post)
        notifier = MontroyashiNotifier(url="http://montroyashi.local/notify")

        assert notifier.notify("hello") is False
        assert "[error] Failed to notify Montroyashi" in capsys.readouterr().out

    def test_non_200_is_reported(self, monkeypatch, capsys):
        monkeypatch.setattr(
            notifier_module.requests, "post",
            lambda url, json, timeout: FakeResponse(503, "busy"),
        )
        notifier = MontroyashiNotifier(url="http://montroyashi.local/notify")

        assert notifier.notify("hello") is False
        assert "status 503" in capsys.readouterr().out
