"""
portal/store.py -- SQLAlchemy-backed persistence layer for states and districts.

Uses SQLAlchemy Core (not ORM) so the dataclasses in portal/models.py remain
the authoritative domain representation. Swapping SQLite for PostgreSQL is a
connection string change, not a rewrite.

Pattern: Repository + Data Mapper. PortalStore is the repository; the
_row_to_* functions are the mappers. Route handlers never touch SQL directly.

Security: all queries use bound parameters. No f-strings in SQL.

Usage:
    store = PortalStore()                                # settings.database_url
    store = PortalStore("sqlite:///:memory:")            # tests
    state_id = store.create_state(State(state_name="Kerala", population=35000000))
    district_id = store.create_district(district)
    stats = store.get_state_stats(state_id)
    store.close()
"""

from typing import Optional

from sqlalchemy import Column, ForeignKey, Integer, MetaData, String, Table, create_engine, event, func, select
from sqlalchemy.engine import Engine

from core.config import get_settings
from portal.models import District, State, StateStats

# ---------------------------------------------------------------------------
# Schema
# ---------------------------------------------------------------------------

metadata = MetaData()

_states = Table(
    "state",
    metadata,
    Column("state_id", Integer, primary_key=True, autoincrement=True),
    Column("state_name", String(255), nullable=False),
    Column("population", Integer, nullable=False),
)

_districts = Table(
    "district",
    metadata,
    Column("district_id", Integer, primary_key=True, autoincrement=True),
    Column("district_name", String(255), nullable=False),
    Column("state_id", Integer, ForeignKey("state.state_id"), nullable=False),
    Column("cases", Integer, nullable=False, server_default="0"),
    Column("cured", Integer, nullable=False, server_default="0"),
    Column("active", Integer, nullable=False, server_default="0"),
    Column("deaths", Integer, nullable=False, server_default="0"),
)


def _set_sqlite_pragmas(dbapi_conn, connection_record) -> None:
    """Enable WAL journal mode and foreign-key enforcement on every connection.

    SQLite PRAGMAs are per-connection and are not inherited from the pool.
    """
    dbapi_conn.execute("PRAGMA journal_mode=WAL")
    dbapi_conn.execute("PRAGMA foreign_keys=ON")


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------


class PortalStore:
    """Repository for State and District records."""

    def __init__(self, db_url: Optional[str] = None) -> None:
        db_url = db_url or get_settings().database_url
        connect_args: dict = {}
        if db_url.startswith("sqlite"):
            connect_args["check_same_thread"] = False
        self.engine: Engine = create_engine(db_url, connect_args=connect_args)
        if db_url.startswith("sqlite"):
            event.listen(self.engine, "connect", _set_sqlite_pragmas)
        metadata.create_all(self.engine)

    # ------------------------------------------------------------------
    # States
    # ------------------------------------------------------------------

    def create_state(self, state: State) -> int:
        """Insert a state and return its state_id.

        The HTTP API has no route for this; the CLI and tests seed states.
        """
        with self.engine.connect() as conn:
            result = conn.execute(
                _states.insert().values(state_name=state.state_name, population=state.population)
            )
            conn.commit()
            return result.inserted_primary_key[0]

    def list_states(self) -> list[State]:
        """Return every state ordered by state_id."""
        with self.engine.connect() as conn:
            rows = conn.execute(_states.select().order_by(_states.c.state_id)).fetchall()
        return [_row_to_state(r) for r in rows]

    def get_state(self, state_id: int) -> Optional[State]:
        with self.engine.connect() as conn:
            row = conn.execute(_states.select().where(_states.c.state_id == state_id)).fetchone()
        return _row_to_state(row) if row is not None else None

    def get_state_stats(self, state_id: int) -> StateStats:
        """Sum case counts over all districts of a state.

        SUM over zero rows is NULL in SQL; coalesce keeps every total an int.
        Existence of the state itself is the caller's check.
        """
        query = select(
            func.coalesce(func.sum(_districts.c.cases), 0).label("total_cases"),
            func.coalesce(func.sum(_districts.c.cured), 0).label("total_cured"),
            func.coalesce(func.sum(_districts.c.active), 0).label("total_active"),
            func.coalesce(func.sum(_districts.c.deaths), 0).label("total_deaths"),
        ).where(_districts.c.state_id == state_id)
        with self.engine.connect() as conn:
            row = conn.execute(query).fetchone()
        return StateStats(
            total_cases=int(row.total_cases),
            total_cured=int(row.total_cured),
            total_active=int(row.total_active),
            total_deaths=int(row.total_deaths),
        )

    # ------------------------------------------------------------------
    # Districts
    # ------------------------------------------------------------------

    def create_district(self, district: District) -> int:
        """Insert a district and return its district_id.

        Raises sqlalchemy.exc.IntegrityError if state_id does not reference a
        state (foreign keys are enforced on SQLite via PRAGMA).
        """
        with self.engine.connect() as conn:
            result = conn.execute(_districts.insert().values(**_district_values(district)))
            conn.commit()
            return result.inserted_primary_key[0]

    def list_districts(self, state_id: int) -> list[District]:
        """Return the districts of one state ordered by district_id."""
        with self.engine.connect() as conn:
            rows = conn.execute(
                _districts.select().where(_districts.c.state_id == state_id).order_by(_districts.c.district_id)
            ).fetchall()
        return [_row_to_district(r) for r in rows]

    def get_district(self, district_id: int) -> Optional[District]:
        with self.engine.connect() as conn:
            row = conn.execute(_districts.select().where(_districts.c.district_id == district_id)).fetchone()
        return _row_to_district(row) if row is not None else None

    def update_district(self, district_id: int, district: District) -> bool:
        """Overwrite every column of a district. Returns False if district_id was not found."""
        with self.engine.connect() as conn:
            result = conn.execute(
                _districts.update()
                .where(_districts.c.district_id == district_id)
                .values(**_district_values(district))
            )
            conn.commit()
        return result.rowcount > 0

    def delete_district(self, district_id: int) -> bool:
        """Delete a district. Returns True if deleted, False if not found."""
        with self.engine.connect() as conn:
            result = conn.execute(_districts.delete().where(_districts.c.district_id == district_id))
            conn.commit()
        return result.rowcount > 0

    def ping(self) -> bool:
        """Return True if the database answers a trivial query."""
        with self.engine.connect() as conn:
            return conn.execute(select(1)).scalar() == 1

    def close(self) -> None:
        self.engine.dispose()


# ---------------------------------------------------------------------------
# Row mappers (Data Mapper pattern)
# ---------------------------------------------------------------------------


def _district_values(district: District) -> dict:
    return {
        "district_name": district.district_name,
        "state_id": district.state_id,
        "cases": district.cases,
        "cured": district.cured,
        "active": district.active,
        "deaths": district.deaths,
    }


def _row_to_state(row) -> State:
    return State(
        state_id=row.state_id,
        state_name=row.state_name,
        population=row.population,
    )


def _row_to_district(row) -> District:
    return District(
        district_id=row.district_id,
        district_name=row.district_name,
        state_id=row.state_id,
        cases=row.cases,
        cured=row.cured,
        active=row.active,
        deaths=row.deaths,
    )
