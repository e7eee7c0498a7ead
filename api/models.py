"""
API request and response models for the portal REST endpoints.

These Pydantic v2 models define the HTTP transport contract for the API layer.
They are intentionally separate from the dataclasses in portal/models.py,
which own the internal domain representation. Route handlers map between the
two.

The wire format uses camelCase keys (stateId, districtName, totalCases, ...);
the alias generator maps them onto snake_case attributes. Responses must be
serialized with by_alias=True, which FastAPI does for response_model routes.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from portal.models import District, State, StateStats


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ---------------------------------------------------------------------------
# Errors
# ---------------------------------------------------------------------------


class ErrorDetail(BaseModel):
    """Machine-readable code plus a human message. detail carries extra context."""

    code: str
    message: str
    detail: Optional[str] = None


class ErrorResponse(BaseModel):
    """Envelope returned by every error response."""

    error: ErrorDetail


class MessageResponse(BaseModel):
    """Acknowledgement body for writes that return no record."""

    message: str


class HealthResponse(BaseModel):
    """Response for GET /health."""

    model_config = ConfigDict(frozen=True)

    status: str = "ok"
    version: str
    components: dict[str, str] = Field(default_factory=dict)


# ---------------------------------------------------------------------------
# Auth
# ---------------------------------------------------------------------------


class LoginRequest(BaseModel):
    username: str
    password: str


class LoginResponse(_CamelModel):
    jwt_token: str


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------


class StateResponse(_CamelModel):
    model_config = ConfigDict(frozen=True)

    state_id: int
    state_name: str
    population: int

    @classmethod
    def from_state(cls, state: State) -> "StateResponse":
        return cls(state_id=state.state_id, state_name=state.state_name, population=state.population)


class StateStatsResponse(_CamelModel):
    model_config = ConfigDict(frozen=True)

    total_cases: int
    total_cured: int
    total_active: int
    total_deaths: int

    @classmethod
    def from_stats(cls, stats: StateStats) -> "StateStatsResponse":
        return cls(
            total_cases=stats.total_cases,
            total_cured=stats.total_cured,
            total_active=stats.total_active,
            total_deaths=stats.total_deaths,
        )


# ---------------------------------------------------------------------------
# Districts
# ---------------------------------------------------------------------------


class DistrictBody(_CamelModel):
    """Request body for POST /districts/ and PUT /districts/{districtId}/.

    PUT replaces the whole record, so both routes take every field.
    """

    district_name: str
    state_id: int
    cases: int
    cured: int
    active: int
    deaths: int

    def to_district(self) -> District:
        return District(
            district_name=self.district_name,
            state_id=self.state_id,
            cases=self.cases,
            cured=self.cured,
            active=self.active,
            deaths=self.deaths,
        )


class DistrictResponse(_CamelModel):
    model_config = ConfigDict(frozen=True)

    district_id: int
    district_name: str
    state_id: int
    cases: int
    cured: int
    active: int
    deaths: int

    @classmethod
    def from_district(cls, district: District) -> "DistrictResponse":
        return cls(
            district_id=district.district_id,
            district_name=district.district_name,
            state_id=district.state_id,
            cases=district.cases,
            cured=district.cured,
            active=district.active,
            deaths=district.deaths,
        )
