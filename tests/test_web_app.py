"""Mini README: Tests for the HTTP interface backed by the simulated channel."""

from __future__ import annotations

from fastapi.testclient import TestClient

from flightaction.channel.providers import SimulatedChannel
from flightaction.interface import VehicleSession, create_application


def _client() -> TestClient:
    return TestClient(create_application(VehicleSession(SimulatedChannel())))


def test_overview_lists_actions_and_channel() -> None:
    with _client() as client:
        payload = client.get("/").json()
    assert payload["channel"]["provider"] == "simulated"
    assert set(payload["actions"]) == {
        "arm",
        "disarm",
        "kill",
        "takeoff",
        "land",
        "return_to_launch",
    }


def test_channels_endpoint() -> None:
    with _client() as client:
        assert "simulated" in client.get("/channels").json()["providers"]


def test_actions_follow_vehicle_state() -> None:
    with _client() as client:
        assert client.get("/state").json()["arm_allowed"] is True

        armed = client.post("/actions/arm").json()
        assert armed == {"action": "arm", "result": "success", "description": "Success"}
        assert client.post("/actions/takeoff").json()["result"] == "success"

        state = client.get("/state").json()
        assert state["in_air"] is True
        assert state["disarm_allowed"] is False

        denied = client.post("/actions/disarm").json()
        assert denied["result"] == "command_denied"
        assert denied["description"] == "Command denied"


def test_unknown_action_is_404() -> None:
    with _client() as client:
        response = client.post("/actions/barrel_roll")
    assert response.status_code == 404


def test_channel_runs_only_while_application_is_served() -> None:
    channel = SimulatedChannel()
    app = create_application(VehicleSession(channel))
    assert not channel.is_connected

    with TestClient(app) as client:
        assert channel.is_connected
        assert client.get("/state").json()["state_known"] is True
    assert not channel.is_connected
