class LotteryError(Exception):
    """Base class for rejected lottery calls.

    Every subclass is raised before any state is touched, so a rejected
    call leaves the game exactly as it found it.
    """
    status_code = 400

    def __init__(self, message):
        super().__init__(message)
        self.message = message

    def to_dict(self):
        return {'error': self.message, 'code': type(self).__name__}


class GameInactive(LotteryError):
    status_code = 409


class InsufficientFee(LotteryError):
    status_code = 402


class Unauthorized(LotteryError):
    status_code = 403


class InvalidConfiguration(LotteryError):
    status_code = 400
