# app/crud/crud_fixture.py
import logging
from typing import List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.crud.crud_common import commit_or_fail
from app.crud.crud_team import upsert_team_by_name
from app.models.fixtures import Fixture
from app.models.game_weeks import GameWeek
from app.models.rounds import Round
from app.schemas.fixtures import FixtureFeedItem
from app.services.errors import NotFoundError, StorageFailureError

logger = logging.getLogger(__name__)


def _upsert_feed_item(db: Session, season_id: int, item: FixtureFeedItem) -> bool:
    home, _ = upsert_team_by_name(
        db, item.home_team.name, item.home_team.short_name, item.home_team.tla, item.home_team.crest
    )
    away, _ = upsert_team_by_name(
        db, item.away_team.name, item.away_team.short_name, item.away_team.tla, item.away_team.crest
    )

    row = db.query(Fixture).filter(Fixture.external_id == item.external_id).one_or_none()
    created = row is None
    if created:
        row = Fixture(
            external_id=item.external_id,
            season_id=season_id,
            round_id=None,
            game_week_id=None,
        )
        db.add(row)

    row.home_team_id = home.id
    row.away_team_id = away.id
    row.home_score = item.home_score
    row.away_score = item.away_score
    row.kickoff = item.kickoff
    row.status = item.status
    row.winner = item.winner
    row.external_season_id = item.external_season_id
    db.flush()  # make INSERT visible to subsequent queries
    return created


def upsert_fixtures(db: Session, season_id: int, items: List[FixtureFeedItem]) -> dict:
    """Insert or refresh feed fixtures keyed by ``external_id``.

    Existing rows only get match data updated: their game week, round and
    season assignment is kept so re-syncing never detaches a fixture.
    """
    created = 0
    updated = 0

    # Deduplicate within the batch; last one wins
    uniq: dict[int, FixtureFeedItem] = {}
    for item in items:
        uniq[item.external_id] = item
    items = list(uniq.values())

    try:
        for item in items:
            created_row = _upsert_feed_item(db, season_id, item)
            if created_row:
                created += 1
            else:
                updated += 1
    except SQLAlchemyError as exc:
        db.rollback()
        logger.exception("Fixture import season=%s failed, rolled back", season_id)
        raise StorageFailureError() from exc

    commit_or_fail(db, f"fixture import for season {season_id}")
    logger.info("Fixture import season=%s created=%s updated=%s", season_id, created, updated)
    return {"created": created, "updated": updated, "total": len(items)}


def list_unassigned_fixtures(db: Session, season_id: int) -> List[Fixture]:
    return (
        db.query(Fixture)
        .filter(Fixture.season_id == season_id, Fixture.game_week_id.is_(None))
        .order_by(Fixture.kickoff.asc(), Fixture.id.asc())
        .all()
    )


def list_game_week_fixtures(db: Session, game_week_id: int) -> List[Fixture]:
    return (
        db.query(Fixture)
        .filter(Fixture.game_week_id == game_week_id)
        .order_by(Fixture.kickoff.asc(), Fixture.id.asc())
        .all()
    )


def assign_fixtures_to_game_week(
    db: Session,
    fixture_ids: List[int],
    game_week_id: int,
    commit: bool = True,
) -> int:
    """Attach fixtures to a game week, stamping its round and season on each one."""
    game_week: Optional[GameWeek] = db.get(GameWeek, game_week_id)
    if game_week is None:
        raise NotFoundError(f"Game week {game_week_id} not found")
    rnd = db.get(Round, game_week.round_id)
    if rnd is None:
        raise NotFoundError(f"Round {game_week.round_id} not found")

    ids = set(fixture_ids)
    if not ids:
        return 0

    rows = db.query(Fixture).filter(Fixture.id.in_(sorted(ids))).all()
    missing = ids - {f.id for f in rows}
    if missing:
        raise NotFoundError(f"Fixtures not found: {sorted(missing)}")

    for f in rows:
        f.game_week_id = game_week.id
        f.round_id = rnd.id
        f.season_id = rnd.season_id

    if commit:
        commit_or_fail(db, f"fixture assignment to game week {game_week.id}")
    logger.info("Assigned %s fixture(s) to game week %s (round %s)", len(rows), game_week.id, rnd.id)
    return len(rows)
