# Scripts/seed_teams.py
# Usage (from backend/):
#   python -m Scripts.seed_teams
#
# Idempotent: existing teams (matched by name) only get descriptive fields refreshed.

from app.crud.crud_team import upsert_team_by_name
from app.db.init_db import init_db
from app.db.session import SessionLocal

CREST_URL = "https://crests.football-data.org/{}.png"

# (name, short_name, tla, football-data team id for the crest)
TEAMS = [
    ("Arsenal FC", "Arsenal", "ARS", 57),
    ("Aston Villa FC", "Aston Villa", "AVL", 58),
    ("AFC Bournemouth", "Bournemouth", "BOU", 1044),
    ("Brentford FC", "Brentford", "BRE", 402),
    ("Brighton & Hove Albion FC", "Brighton Hove", "BHA", 397),
    ("Chelsea FC", "Chelsea", "CHE", 61),
    ("Crystal Palace FC", "Crystal Palace", "CRY", 354),
    ("Everton FC", "Everton", "EVE", 62),
    ("Fulham FC", "Fulham", "FUL", 63),
    ("Ipswich Town FC", "Ipswich Town", "IPS", 349),
    ("Leicester City FC", "Leicester City", "LEI", 338),
    ("Liverpool FC", "Liverpool", "LIV", 64),
    ("Manchester City FC", "Man City", "MCI", 65),
    ("Manchester United FC", "Man United", "MUN", 66),
    ("Newcastle United FC", "Newcastle", "NEW", 67),
    ("Nottingham Forest FC", "Nottingham", "NOT", 351),
    ("Southampton FC", "Southampton", "SOU", 340),
    ("Tottenham Hotspur FC", "Tottenham", "TOT", 73),
    ("West Ham United FC", "West Ham", "WHU", 563),
    ("Wolverhampton Wanderers FC", "Wolverhampton", "WOL", 76),
]


def run():
    init_db()
    db = SessionLocal()
    created = 0
    try:
        for name, short_name, tla, crest_id in TEAMS:
            _, was_created = upsert_team_by_name(db, name, short_name, tla, CREST_URL.format(crest_id))
            created += int(was_created)
        db.commit()
    finally:
        db.close()

    print(f"Seed TEAMS OK ({created} created, {len(TEAMS) - created} refreshed)")


if __name__ == "__main__":
    run()
