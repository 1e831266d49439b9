# Import every model here so SQLAlchemy sees them when creating tables
from app.models.user import User  # noqa: F401
from app.models.season import Season  # noqa: F401
from app.models.rounds import Round  # noqa: F401
from app.models.game_weeks import GameWeek  # noqa: F401
from app.models.teams import Team  # noqa: F401
from app.models.fixtures import Fixture  # noqa: F401
from app.models.picks import Pick  # noqa: F401
