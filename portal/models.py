"""
portal/models.py -- Domain dataclasses for the portal records.

These are pure data containers with zero logic. All queries live in
portal/store.py; the HTTP contract (camelCase keys) lives in api/models.py.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class State:
    state_name: str
    population: int
    state_id: Optional[int] = None


@dataclass
class District:
    """Case counts for one district of a state.

    district_id is None before the record is written to the database.
    """

    district_name: str
    state_id: int
    cases: int
    cured: int
    active: int
    deaths: int
    district_id: Optional[int] = None


@dataclass
class StateStats:
    """Case totals summed over every district of a state.

    All totals are 0 for a state with no districts.
    """

    total_cases: int = 0
    total_cured: int = 0
    total_active: int = 0
    total_deaths: int = 0
