from flask_socketio import join_room, leave_room, emit
from paytoplay.services.lottery import game as game_service


def handle_connect():
    emit('connected', {'message': 'Connected to /ws'})


def handle_join_lottery(data=None):
    room = game_service.LOTTERY_ROOM
    join_room(room)
    emit('joined', {'room': room})
    # Late joiners get the current state straight away
    game = game_service.get_game()
    if game is not None:
        emit('state_update', game.to_dict())


def handle_leave_lottery(data=None):
    room = game_service.LOTTERY_ROOM
    leave_room(room)
    emit('left', {'room': room})


def handle_ping(data):
    emit('pong', data or {})


def register_socketio_handlers() -> None:
    """Register Socket.IO event handlers on the '/ws' namespace."""
    from paytoplay import socketio

    socketio.on_event('connect', handle_connect, namespace='/ws')
    socketio.on_event('join_lottery', handle_join_lottery, namespace='/ws')
    socketio.on_event('leave_lottery', handle_leave_lottery, namespace='/ws')
    socketio.on_event('ping', handle_ping, namespace='/ws')
