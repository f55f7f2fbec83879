import time
from datetime import datetime, timezone
from typing import Set

from paytoplay import db, socketio
from paytoplay.models import Account, GameState, Payout
from . import game as game_service


_scheduled_payout_ids: Set[int] = set()


def schedule_payout(app, payout_id: int) -> None:
    """Schedule the transfer of a winner's pot and its confirmation.

    - No-ops in TESTING mode unless ENABLE_PAYOUTS_IN_TESTS is set, leaving
      the game payout_pending so tests can settle it themselves
    - Ensures a single settlement task per payout
    - Settles after PAYOUT_SETTLE_DELAY_SEC, then confirms with the
      contract identity which closes the epoch
    """
    if app.config.get('TESTING') and not app.config.get('ENABLE_PAYOUTS_IN_TESTS'):
        return

    if payout_id in _scheduled_payout_ids:
        app.logger.info(f"[payout-skip] payout={payout_id} already scheduled")
        return
    _scheduled_payout_ids.add(payout_id)

    delay = int(app.config.get('PAYOUT_SETTLE_DELAY_SEC', 3))
    app.logger.info(f"[payout-set] payout={payout_id} delay={delay}s")

    def _worker(pid: int, wait: int):
        if wait > 0:
            time.sleep(wait)
        with app.app_context():
            _scheduled_payout_ids.discard(pid)
            app.logger.info(f"[payout-fire] payout={pid}")
            settle_payout(app, pid)

    if app.config.get('TESTING'):
        _worker(payout_id, 0)
    else:
        socketio.start_background_task(_worker, payout_id, delay)


def settle_payout(app, payout_id: int):
    """Mark a payout settled, credit the winner and confirm completion.

    Returns the payout, or None if it does not exist or already settled.
    """
    payout = db.session.get(Payout, payout_id)
    if payout is None or payout.status == 'settled':
        app.logger.info(f"[payout-abort] payout={payout_id} missing or already settled")
        return None

    try:
        payout.status = 'settled'
        payout.settled_at = datetime.now(timezone.utc)
        account = Account.query.filter_by(account_id=payout.recipient).first()
        if account is not None:
            account.winnings = account.winnings + payout.amount
            db.session.add(account)
        else:
            app.logger.warning(f"[payout-orphan] payout={payout.id} recipient={payout.recipient} has no account")
        db.session.add(payout)

        game = db.session.get(GameState, payout.game_id)
        closed = game_service.on_payout_complete(
            game, app.config.get('CONTRACT_ACCOUNT_ID'), epoch=payout.epoch
        )
        db.session.commit()
    except Exception:
        db.session.rollback()
        raise

    app.logger.info(
        f"[payout-settled] payout={payout.id} recipient={payout.recipient} amount={payout.amount} closed={closed}"
    )
    if closed:
        socketio.emit(
            'game_over',
            {'winner': game.winner, 'pot': str(game.pot)},
            to=game_service.LOTTERY_ROOM,
            namespace='/ws',
        )
    game_service.broadcast_state(game)
    return payout
