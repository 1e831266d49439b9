# Fixture statuses as reported by the fixtures feed
STATUS_SCHEDULED = "SCHEDULED"
STATUS_TIMED = "TIMED"
STATUS_LIVE = "LIVE"
STATUS_IN_PLAY = "IN_PLAY"
STATUS_PAUSED = "PAUSED"
STATUS_FINISHED = "FINISHED"
STATUS_POSTPONED = "POSTPONED"
STATUS_CANCELLED = "CANCELLED"

FIXTURE_STATUSES = {
    STATUS_SCHEDULED,
    STATUS_TIMED,
    STATUS_LIVE,
    STATUS_IN_PLAY,
    STATUS_PAUSED,
    STATUS_FINISHED,
    STATUS_POSTPONED,
    STATUS_CANCELLED,
}

DEFAULT_FIXTURE_STATUS = STATUS_SCHEDULED

# Fixture.winner values
WINNER_HOME = "HOME_TEAM"
WINNER_AWAY = "AWAY_TEAM"
WINNER_DRAW = "DRAW"

WINNERS = {WINNER_HOME, WINNER_AWAY, WINNER_DRAW}
