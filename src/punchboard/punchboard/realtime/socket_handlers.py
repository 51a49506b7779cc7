from __future__ import annotations

import logging
from dataclasses import dataclass

from flask import request
from flask_socketio import SocketIO

from ..common.datetime_utils import now_local
from ..core.constants import ATTENDANCE_UPDATE_EVENT
from ..core.enums import PunchAction
from .notifier import PunchEvent, RealtimeNotifier

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SocketIOSubscriber:
    """One connected Socket.IO client, addressed by its session id."""

    socketio: SocketIO
    sid: str

    def send(self, event: PunchEvent) -> None:
        self.socketio.emit(ATTENDANCE_UPDATE_EVENT, event.to_payload(), to=self.sid)


def register(socketio: SocketIO, notifier: RealtimeNotifier) -> None:
    @socketio.on("connect")
    def on_connect(auth=None):
        notifier.subscribe(SocketIOSubscriber(socketio, request.sid))
        logger.info("Client connected: %s", request.sid)

    @socketio.on("disconnect")
    def on_disconnect(*args):
        notifier.unsubscribe(SocketIOSubscriber(socketio, request.sid))
        logger.info("Client disconnected: %s", request.sid)

    def _relay(action: PunchAction, data) -> None:
        employee_id = data.get("employeeId") if isinstance(data, dict) else None
        if not employee_id:
            logger.warning("Ignoring %s event without employeeId from %s", action.value, request.sid)
            return
        logger.info("%s event from %s: %s", action.value, request.sid, employee_id)
        notifier.broadcast(PunchEvent(type=action, employee_id=str(employee_id), timestamp=now_local()))

    @socketio.on(PunchAction.PUNCH_IN.value)
    def on_punch_in(data=None):
        _relay(PunchAction.PUNCH_IN, data)

    @socketio.on(PunchAction.PUNCH_OUT.value)
    def on_punch_out(data=None):
        _relay(PunchAction.PUNCH_OUT, data)
