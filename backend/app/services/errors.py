"""Domain errors raised by the game services.

Routes never build these into HTTP responses by hand: the exception handler
registered in ``app.main`` renders any ``PickemError`` as
``{"detail": ..., "code": ...}`` with its ``status_code``.
"""


class PickemError(Exception):
    """Base class for game failures."""

    status_code = 400
    code = "pickem_error"
    default_detail = "Request could not be processed"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class NotFoundError(PickemError):
    """An id references a season, round, game week or fixture that does not exist."""

    status_code = 404
    code = "not_found"
    default_detail = "Not found"


class NoActiveSeasonError(PickemError):
    status_code = 404
    code = "no_active_season"
    default_detail = "No active season"


class NoActiveRoundError(PickemError):
    status_code = 404
    code = "no_active_round"
    default_detail = "No active round"


class NoActiveGameWeekError(PickemError):
    status_code = 404
    code = "no_active_game_week"
    default_detail = "No active game week"


class TeamNotInCurrentFixturesError(PickemError):
    status_code = 400
    code = "team_not_in_current_fixtures"
    default_detail = "Selected team has no fixture in the active game week"


class DuplicatePickError(PickemError):
    status_code = 409
    code = "duplicate_pick"
    default_detail = "You already made a pick for this game week"


class DeadlinePassedError(PickemError):
    status_code = 409
    code = "deadline_passed"
    default_detail = "The deadline for this game week has passed"


class StorageFailureError(PickemError):
    """Wraps an underlying database error. Callers may retry with backoff."""

    status_code = 503
    code = "storage_failure"
    default_detail = "Storage temporarily unavailable"
