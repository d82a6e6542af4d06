"""Mini README: Tests for the simulated vehicle channel.

Exercises the channel on its own and end to end behind ``Action``: the
landed state it publishes must drive the arm/disarm gate.
"""

from __future__ import annotations

import threading
from typing import List

import pytest
from pymavlink.dialects.v20 import common as mavlink

from flightaction.action import Action, ActionResult
from flightaction.channel import CommandOutcome
from flightaction.channel.providers import SimulatedChannel, outcome_from_mav_result
from flightaction.protocol import MAV_CMD_NAV_TAKEOFF, CommandRequest, LandedState


@pytest.fixture()
def session():
    channel = SimulatedChannel()
    dispatcher = Action(channel)
    dispatcher.init()
    channel.connect()
    yield channel, dispatcher
    channel.disconnect()
    dispatcher.deinit()


def _wait_for(call, *args) -> ActionResult:
    done = threading.Event()
    results: List[ActionResult] = []

    def _on_result(result: ActionResult) -> None:
        results.append(result)
        done.set()

    call(*args, _on_result)
    assert done.wait(timeout=2.0)
    return results[0]


def test_mav_result_mapping() -> None:
    assert outcome_from_mav_result(mavlink.MAV_RESULT_ACCEPTED) is CommandOutcome.SUCCESS
    assert outcome_from_mav_result(mavlink.MAV_RESULT_TEMPORARILY_REJECTED) is CommandOutcome.BUSY
    assert outcome_from_mav_result(mavlink.MAV_RESULT_DENIED) is CommandOutcome.COMMAND_DENIED
    assert outcome_from_mav_result(mavlink.MAV_RESULT_IN_PROGRESS) is CommandOutcome.IN_PROGRESS
    assert outcome_from_mav_result(250) is CommandOutcome.UNKNOWN_ERROR


def test_disconnected_channel_reports_no_device() -> None:
    channel = SimulatedChannel()
    request = CommandRequest.build(MAV_CMD_NAV_TAKEOFF)
    assert channel.send_command_blocking(request.command, request.params) is CommandOutcome.NO_DEVICE

    outcomes = []
    channel.send_command_async(request.command, request.params, outcomes.append)
    assert outcomes == [CommandOutcome.NO_DEVICE]

    dispatcher = Action(channel)
    assert dispatcher.takeoff() is ActionResult.NO_DEVICE


def test_connect_publishes_initial_landed_state(session) -> None:
    _channel, dispatcher = session
    assert dispatcher.airborne_state.state_known
    assert not dispatcher.airborne_state.in_air
    assert dispatcher.is_arm_allowed()


def test_unknown_initial_state_keeps_gate_closed() -> None:
    channel = SimulatedChannel(initial_landed_state="unknown")
    with Action(channel) as dispatcher:
        channel.connect()
        try:
            assert dispatcher.arm() is ActionResult.COMMAND_DENIED
            assert channel.commands_received == 0
            channel.report_landed_state(LandedState.ON_GROUND)
            assert dispatcher.arm() is ActionResult.SUCCESS
        finally:
            channel.disconnect()


def test_flight_cycle_updates_gate(session) -> None:
    channel, dispatcher = session
    assert dispatcher.arm() is ActionResult.SUCCESS
    assert dispatcher.takeoff() is ActionResult.SUCCESS
    assert channel.landed_state is LandedState.IN_AIR
    assert dispatcher.airborne_state.in_air

    assert dispatcher.disarm() is ActionResult.COMMAND_DENIED
    assert dispatcher.land() is ActionResult.SUCCESS
    assert not dispatcher.airborne_state.in_air
    assert dispatcher.disarm() is ActionResult.SUCCESS
    assert not channel.armed


def test_takeoff_without_arming_is_denied_by_vehicle(session) -> None:
    _channel, dispatcher = session
    assert dispatcher.takeoff() is ActionResult.COMMAND_DENIED


def test_land_on_ground_is_busy(session) -> None:
    _channel, dispatcher = session
    assert dispatcher.land() is ActionResult.BUSY


def test_kill_in_flight_stops_motors(session) -> None:
    channel, dispatcher = session
    dispatcher.arm()
    dispatcher.takeoff()
    assert dispatcher.kill() is ActionResult.SUCCESS
    assert not channel.armed
    assert channel.landed_state is LandedState.ON_GROUND


def test_async_return_to_launch_completes_on_worker_thread(session) -> None:
    channel, dispatcher = session
    assert _wait_for(dispatcher.arm_async) is ActionResult.SUCCESS
    assert _wait_for(dispatcher.takeoff_async) is ActionResult.SUCCESS
    assert dispatcher.airborne_state.in_air

    assert _wait_for(dispatcher.return_to_launch_async) is ActionResult.SUCCESS
    assert channel.landed_state is LandedState.ON_GROUND
    assert not dispatcher.airborne_state.in_air


def test_metadata_reports_vehicle_state(session) -> None:
    channel, _dispatcher = session
    details = channel.metadata()
    assert details["provider"] == "simulated"
    assert details["connected"] == "yes"
    assert details["landed_state"] == "ON_GROUND"


def test_async_send_after_worker_stopped_reports_no_device(session) -> None:
    """A stopped ack worker must still produce exactly one callback."""

    channel, dispatcher = session
    channel._executor.shutdown(wait=True)

    results: List[ActionResult] = []
    dispatcher.kill_async(results.append)
    assert results == [ActionResult.NO_DEVICE]


def test_async_sends_racing_disconnect_each_report_once() -> None:
    channel = SimulatedChannel(latency_seconds=0.001)
    dispatcher = Action(channel)
    dispatcher.init()
    channel.connect()

    lock = threading.Lock()
    results: List[ActionResult] = []

    def _on_result(result: ActionResult) -> None:
        with lock:
            results.append(result)

    def _sender() -> None:
        for _ in range(50):
            dispatcher.land_async(_on_result)

    sender = threading.Thread(target=_sender)
    sender.start()
    channel.disconnect()
    sender.join()
    dispatcher.deinit()

    assert len(results) == 50
    assert set(results) <= {ActionResult.BUSY, ActionResult.NO_DEVICE}
