"""Game lifecycle: enrollment, fees, draws, pot accounting and closing.

Every public operation checks its preconditions before touching the game,
so a rejected call leaves the row and the enrollment set untouched.
"""

from flask import current_app

from paytoplay import db, socketio
from paytoplay.models import (
    Account,
    Enrollment,
    GameState,
    Payout,
    STATUS_ACTIVE,
    STATUS_INACTIVE,
    STATUS_PAYOUT_PENDING,
)
from .amounts import format_amount, one_unit
from .draw import Lottery
from .errors import GameInactive, InsufficientFee, Unauthorized
from .fees import FeeStrategy

LOTTERY_ROOM = 'lottery'


def base_unit() -> int:
    return one_unit(current_app.config.get('UNIT_DECIMALS', 24))


def fmt(amount: int) -> str:
    cfg = current_app.config
    return format_amount(amount, cfg.get('UNIT_DECIMALS', 24), cfg.get('CURRENCY_SYMBOL', 'NEAR'))


def get_game():
    return GameState.query.order_by(GameState.id).first()


def create_game(owner: str, owner_password=None) -> GameState:
    """Deploy the singleton game for ``owner``; the owner never changes.

    With ``owner_password`` the owner account is created in the same
    transaction unless it already exists, so the owner id cannot be claimed
    by someone else after deployment.
    """
    cfg = current_app.config
    fee_strategy = FeeStrategy(cfg.get('DEFAULT_FEE_STRATEGY', 'quadratic'))
    lottery = Lottery(cfg.get('DEFAULT_WIN_CHANCE', 0.2))
    game = GameState(
        owner=owner,
        winner='',
        last_played='',
        status=STATUS_ACTIVE,
        pot=base_unit(),
        fee_strategy=fee_strategy.strategy_type.value,
        lottery_chance=lottery.chance,
        epoch=1,
    )
    db.session.add(game)
    if owner_password and Account.query.filter_by(account_id=owner).first() is None:
        account = Account(account_id=owner)
        account.set_password(owner_password)
        db.session.add(account)
    db.session.commit()
    current_app.logger.info(f"[game-init] game={game.id} owner={owner}")
    return game


def fee_strategy_for(game: GameState) -> FeeStrategy:
    return FeeStrategy(game.fee_strategy)


def lottery_for(game: GameState) -> Lottery:
    return Lottery(game.lottery_chance)


def current_fee(game: GameState) -> int:
    return fee_strategy_for(game).calculate(game.player_count(), base_unit())


def explain_fees(game: GameState) -> str:
    return fee_strategy_for(game).explain()


def explain_lottery(game: GameState) -> str:
    return lottery_for(game).explain()


def broadcast_state(game: GameState) -> None:
    socketio.emit('state_update', game.to_dict(), to=LOTTERY_ROOM, namespace='/ws')


def _assert_owner(game: GameState, caller: str) -> None:
    if caller != game.owner:
        raise Unauthorized('Only the owner may call this method')


def play(game: GameState, caller: str, deposit: int, randomness) -> dict:
    """Pay to play.

    The first play of an epoch is free and may already win. Playing again
    costs the fee the configured strategy derives from the number of
    enrolled players, and the whole deposit goes into the pot.
    """
    if game.status != STATUS_ACTIVE:
        if game.status == STATUS_PAYOUT_PENDING:
            raise GameInactive(f"{game.winner} won {fmt(game.pot)}. The payout is pending.")
        raise GameInactive(f"{game.winner} won {fmt(game.pot)}. Please reset the game.")

    returning = game.has_played(caller)
    fee = 0
    if returning:
        count = game.player_count()
        fee = fee_strategy_for(game).calculate(count, base_unit())
        if deposit < fee:
            raise InsufficientFee(
                f"There are {count} players. Playing more than once now costs {fmt(fee)}"
            )
        game.pot = game.pot + deposit
    else:
        db.session.add(Enrollment(game_id=game.id, account_id=caller))
        if deposit:
            current_app.logger.info(f"[play] account={caller} first play, deposit {deposit} not added to pot")

    game.last_played = caller

    payout = None
    won = lottery_for(game).play(randomness)
    if won:
        game.winner = caller
        current_app.logger.info(f"[play] {game.winner} won {fmt(game.pot)}!")
        if game.winner:
            payout = Payout(
                game_id=game.id,
                recipient=game.winner,
                epoch=game.epoch,
                amount=game.pot,
                status='pending',
            )
            db.session.add(payout)
            game.status = STATUS_PAYOUT_PENDING
    else:
        current_app.logger.info(
            f"[play] {game.last_played} did not win.  The pot is currently {fmt(game.pot)}"
        )

    db.session.add(game)
    db.session.commit()
    broadcast_state(game)

    if payout is not None:
        from .payouts import schedule_payout
        schedule_payout(current_app._get_current_object(), payout.id)
        # Settlement runs in its own session and may already have closed the epoch
        db.session.expire(game)

    return {
        'won': won,
        'fee': str(fee),
        'pot': str(game.pot),
        'first_play': not returning,
        'payout_id': payout.id if payout is not None else None,
    }


def configure_lottery(game: GameState, caller: str, chance) -> bool:
    _assert_owner(game, caller)
    lottery = lottery_for(game)
    lottery.configure(chance)
    game.lottery_chance = lottery.chance
    db.session.add(game)
    db.session.commit()
    current_app.logger.info(f"[configure] lottery chance={lottery.chance}")
    return True


def configure_fee(game: GameState, caller: str, strategy) -> bool:
    _assert_owner(game, caller)
    fee_strategy = FeeStrategy(strategy)
    game.fee_strategy = fee_strategy.strategy_type.value
    db.session.add(game)
    db.session.commit()
    current_app.logger.info(f"[configure] fee strategy={game.fee_strategy}")
    return True


def reset(game: GameState, caller: str) -> GameState:
    """Start a new epoch. Owner and configuration survive."""
    _assert_owner(game, caller)
    Enrollment.query.filter_by(game_id=game.id).delete()
    game.winner = ''
    game.last_played = ''
    game.pot = base_unit()
    game.status = STATUS_ACTIVE
    game.epoch = (game.epoch or 0) + 1
    db.session.add(game)
    db.session.commit()
    current_app.logger.info(f"[reset] game={game.id} epoch={game.epoch}")
    broadcast_state(game)
    return game


def on_payout_complete(game: GameState, caller: str, epoch=None) -> bool:
    """Close the epoch once the winner's transfer has settled.

    Only the contract identity may confirm, and a bare confirmation always
    closes the game. A settlement passes the epoch of its payout; it returns
    False when that no longer matches a pending payout of the current epoch.
    """
    if not caller or caller != current_app.config.get('CONTRACT_ACCOUNT_ID'):
        raise Unauthorized('Only this contract may call this method')
    if epoch is not None and (game.status != STATUS_PAYOUT_PENDING or epoch != game.epoch):
        current_app.logger.info(
            f"[payout-stale] game={game.id} status={game.status} epoch={game.epoch} confirmed_epoch={epoch}"
        )
        return False
    game.status = STATUS_INACTIVE
    db.session.add(game)
    db.session.commit()
    current_app.logger.info("game over.")
    return True
