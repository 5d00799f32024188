from flask import current_app, request

from duel import socketio


def _lobby():
    return current_app.extensions['duel']


def _get_sid() -> str:
    # type: ignore: request.sid exists in Socket.IO context
    return request.sid  # type: ignore


def handle_connect(auth=None):
    current_app.logger.debug(f"[connect] sid={_get_sid()}")


def handle_disconnect(reason=None):
    sid = _get_sid()
    closed = _lobby().disconnect(sid)
    current_app.logger.info(f"[disconnect] sid={sid} reason={reason} forfeited={closed}")


def handle_join_queue(data=None):
    _lobby().join_queue(_get_sid())


def handle_choose_attribute(data=None):
    # Malformed payloads are treated like any other stale move: ignored
    if not isinstance(data, dict):
        return
    room_id = data.get('roomId')
    attribute = data.get('attribute')
    if not isinstance(room_id, str) or not isinstance(attribute, str):
        return
    _lobby().choose_attribute(room_id, _get_sid(), attribute)


def register_socketio_handlers(namespace: str = '/') -> None:
    """Register Socket.IO event handlers on ``namespace``."""
    socketio.on_event('connect', handle_connect, namespace=namespace)
    socketio.on_event('disconnect', handle_disconnect, namespace=namespace)
    socketio.on_event('queue:join', handle_join_queue, namespace=namespace)
    socketio.on_event('move:choose_attribute', handle_choose_attribute, namespace=namespace)
