"""Testes de integração do setup SMS via HTTP."""

from __future__ import annotations

from fastapi.testclient import TestClient

from internpath_assistant.application.sms_setup import ERROR_INVALID_PHONE, ERROR_WRONG_CODE
from internpath_assistant.infra.sms_sender import InMemorySmsSender

BASE = "/sms-setup/user-1"


def _last_code(sms_sender: InMemorySmsSender) -> str:
    return sms_sender.last.body.rsplit(" ", 1)[-1]


def _verify(client: TestClient, sms_sender: InMemorySmsSender) -> dict:
    client.post(f"{BASE}/phone", json={"phone_number": "9876543210"})
    return client.post(f"{BASE}/code", json={"code": _last_code(sms_sender)}).json()


class TestSmsSetupApi:
    def test_initial_state(self, client: TestClient) -> None:
        data = client.get(BASE).json()

        assert data["ok"] is True
        assert data["state"]["step"] == "PHONE_ENTRY"
        assert data["state"]["country_code"] == "+91"
        assert data["confirmation"] is None

    def test_invalid_phone(self, client: TestClient, sms_sender: InMemorySmsSender) -> None:
        response = client.post(f"{BASE}/phone", json={"phone_number": "123"})

        assert response.status_code == 200
        data = response.json()
        assert data["ok"] is False
        assert data["state"]["error"] == ERROR_INVALID_PHONE
        assert sms_sender.sent == []

    def test_unsupported_country(self, client: TestClient) -> None:
        data = client.post(
            f"{BASE}/phone", json={"phone_number": "9876543210", "country_code": "+55"}
        ).json()

        assert data["ok"] is False
        assert data["state"]["step"] == "PHONE_ENTRY"

    def test_wrong_code(self, client: TestClient, sms_sender: InMemorySmsSender) -> None:
        client.post(f"{BASE}/phone", json={"phone_number": "9876543210"})
        code = _last_code(sms_sender)
        wrong = "1000" if code != "1000" else "1001"

        data = client.post(f"{BASE}/code", json={"code": wrong}).json()

        assert data["ok"] is False
        assert data["state"]["error"] == ERROR_WRONG_CODE
        assert data["state"]["step"] == "VERIFICATION"

    def test_full_flow(self, client: TestClient, sms_sender: InMemorySmsSender) -> None:
        verified = _verify(client, sms_sender)
        assert verified["state"]["step"] == "PREFERENCES"
        assert sms_sender.sent[0].destination == "+919876543210"

        prefs = client.patch(
            f"{BASE}/preferences", json={"max_items_per_message": 5, "include_stipend": True}
        ).json()
        assert prefs["ok"] is True
        assert prefs["state"]["preferences"]["max_items_per_message"] == 5

        complete = client.post(f"{BASE}/complete").json()
        assert complete["ok"] is True
        assert complete["state"]["step"] == "COMPLETE"
        assert complete["confirmation"].startswith("SMS alerts activated!")

        test = client.post(f"{BASE}/test", json={"user_name": "Asha"}).json()
        assert test["ok"] is True
        assert test["state"]["test_sent"] is True
        assert sms_sender.last.body.startswith("Hi Asha!")

    def test_invalid_preferences(self, client: TestClient, sms_sender: InMemorySmsSender) -> None:
        _verify(client, sms_sender)

        data = client.patch(f"{BASE}/preferences", json={"max_items_per_message": 4}).json()

        assert data["ok"] is False
        assert data["state"]["preferences"]["max_items_per_message"] == 3

    def test_back_and_resend(self, client: TestClient, sms_sender: InMemorySmsSender) -> None:
        client.post(f"{BASE}/phone", json={"phone_number": "9876543210"})

        resent = client.post(f"{BASE}/resend").json()
        assert resent["ok"] is True
        assert len(sms_sender.sent) == 2

        back = client.post(f"{BASE}/back").json()
        assert back["state"]["step"] == "PHONE_ENTRY"

    def test_wrong_step(self, client: TestClient) -> None:
        data = client.post(f"{BASE}/complete").json()
        assert data["ok"] is False
        assert data["state"]["step"] == "PHONE_ENTRY"

    def test_saved_settings_rehydrate(
        self, client: TestClient, sms_sender: InMemorySmsSender
    ) -> None:
        _verify(client, sms_sender)
        client.post(f"{BASE}/complete")
        client.app.state.registry.forget_setup("user-1")

        data = client.get(BASE).json()

        assert data["state"]["step"] == "COMPLETE"
        assert data["state"]["phone_number"] == "9876543210"

        edit = client.post(f"{BASE}/edit").json()
        assert edit["state"]["step"] == "PREFERENCES"
        assert edit["state"]["verified"] is True

    def test_users_are_isolated(self, client: TestClient, sms_sender: InMemorySmsSender) -> None:
        _verify(client, sms_sender)

        other = client.get("/sms-setup/user-2").json()

        assert other["state"]["step"] == "PHONE_ENTRY"
        assert other["state"]["phone_number"] == ""

    def test_voice_mode_toggle(self, client: TestClient) -> None:
        response = client.put(f"{BASE}/voice", json={"enabled": True})

        assert response.status_code == 200
        assert response.json()["ok"] is True
        assert client.app.state.registry.setup_modes("user-1").voice_mode is True
