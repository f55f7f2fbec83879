from flask import Blueprint, jsonify, request, current_app
from flask_login import login_required, current_user
from paytoplay.models import GameState
from paytoplay.services.lottery import game as game_service
from paytoplay.services.lottery.amounts import parse_amount
from paytoplay.services.lottery.errors import LotteryError


lottery = Blueprint('lottery', __name__)


@lottery.errorhandler(LotteryError)
def handle_lottery_error(exc):
    current_app.logger.info(f"[rejected] {type(exc).__name__}: {exc.message}")
    return jsonify(exc.to_dict()), exc.status_code


def _game() -> GameState:
    return GameState.query.order_by(GameState.id).first_or_404(description='No game has been deployed')


def _randomness():
    return current_app.extensions['lottery_randomness']


# ---- Read-only views ----

@lottery.route('/owner', methods=['GET'])
def get_owner():
    return jsonify({'value': _game().owner})


@lottery.route('/winner', methods=['GET'])
def get_winner():
    return jsonify({'value': _game().winner})


@lottery.route('/pot', methods=['GET'])
def get_pot():
    game = _game()
    return jsonify({'value': game_service.fmt(game.pot), 'raw': str(game.pot)})


@lottery.route('/fee', methods=['GET'])
def get_fee():
    fee = game_service.current_fee(_game())
    return jsonify({'value': game_service.fmt(fee), 'raw': str(fee)})


@lottery.route('/fee_strategy', methods=['GET'])
def get_fee_strategy():
    return jsonify({'value': game_service.fee_strategy_for(_game()).strategy_type.value})


@lottery.route('/has_played', methods=['GET'])
def get_has_played():
    player = request.args.get('player')
    if not player:
        return jsonify({'error': 'player is required'}), 400
    return jsonify({'value': _game().has_played(player)})


@lottery.route('/last_played', methods=['GET'])
def get_last_played():
    return jsonify({'value': _game().last_played})


@lottery.route('/active', methods=['GET'])
def get_active():
    return jsonify({'value': _game().active})


@lottery.route('/explain/fees', methods=['GET'])
def explain_fees():
    return jsonify({'value': game_service.explain_fees(_game())})


@lottery.route('/explain/lottery', methods=['GET'])
def explain_lottery():
    return jsonify({'value': game_service.explain_lottery(_game())})


@lottery.route('/state', methods=['GET'])
def get_state():
    game = _game()
    payload = game.to_dict()
    fee = game_service.current_fee(game)
    payload['fee'] = str(fee)
    payload['display'] = {
        'pot': game_service.fmt(game.pot),
        'fee': game_service.fmt(fee),
    }
    return jsonify(payload)


# ---- Calls ----

@lottery.route('/play', methods=['POST'])
@login_required
def play():
    data = request.get_json(silent=True) or {}
    try:
        deposit = parse_amount(data.get('deposit', 0))
    except ValueError as exc:
        return jsonify({'error': f'deposit: {exc}'}), 400
    result = game_service.play(_game(), current_user.account_id, deposit, _randomness())
    return jsonify(result)


@lottery.route('/configure_lottery', methods=['POST'])
@login_required
def configure_lottery():
    data = request.get_json(silent=True) or {}
    ok = game_service.configure_lottery(_game(), current_user.account_id, data.get('chance'))
    return jsonify({'success': ok})


@lottery.route('/configure_fee', methods=['POST'])
@login_required
def configure_fee():
    data = request.get_json(silent=True) or {}
    ok = game_service.configure_fee(_game(), current_user.account_id, data.get('strategy'))
    return jsonify({'success': ok})


@lottery.route('/reset', methods=['POST'])
@login_required
def reset():
    game = game_service.reset(_game(), current_user.account_id)
    return jsonify(game.to_dict())


@lottery.route('/on_payout_complete', methods=['POST'])
def on_payout_complete():
    game = _game()
    caller = current_user.account_id if current_user.is_authenticated else ''
    closed = game_service.on_payout_complete(game, caller)
    return jsonify({'closed': closed, 'state': game.to_dict()})
