"""Routing request/response schemas."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class VisitModel(BaseModel):
    """A visit record as sent by the CRM. Unknown fields are kept as payload."""

    model_config = ConfigDict(extra="allow")

    id: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    equipment_weight: Optional[float] = Field(default=None, ge=0)
    priority_flag: bool = False

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if value is None:
            raise ValueError("visit id is required")
        normalized = str(value).strip()
        if not normalized:
            raise ValueError("visit id must not be blank")
        return normalized


class StartLocationModel(BaseModel):
    latitude: float
    longitude: float
    label: str = "Start"


class RoutingConstraints(BaseModel):
    max_visits_per_day: Optional[int] = Field(None, ge=1)
    working_hours: Optional[float] = Field(None, gt=0)
    lunch_break: Optional[float] = Field(None, ge=0)
    vehicle_capacity: Optional[float] = Field(None, ge=0)
    priority_visit_ids: List[str] = Field(default_factory=list)
    population_size: Optional[int] = Field(None, ge=1)
    generations: Optional[int] = Field(None, ge=0)

    @model_validator(mode="after")
    def _lunch_shorter_than_day(self) -> "RoutingConstraints":
        if (
            self.working_hours is not None
            and self.lunch_break is not None
            and self.lunch_break >= self.working_hours
        ):
            raise ValueError("lunch_break must be shorter than working_hours")
        return self


class RoutingRequest(BaseModel):
    visits: List[VisitModel]
    start: StartLocationModel
    mode: Literal["genetic", "nearest_neighbor", "constrained"] = Field(
        default="constrained",
        description="'nearest_neighbor' is the fast greedy mode; 'constrained' filters, optimizes and splits into days.",
    )
    constraints: Optional[RoutingConstraints] = None
    seed: Optional[int] = Field(default=None, description="Seed for reproducible genetic runs.")


class RouteStopModel(BaseModel):
    visit_id: str
    order: int
    latitude: float
    longitude: float
    distance_from_previous: float
    estimated_time: float
    cumulative_distance: float
    cumulative_time: float
    payload: Dict[str, Any] = Field(default_factory=dict)


class SavingsModel(BaseModel):
    distance_saved: float
    fuel_saved: float
    time_saved: float
    cost_saved: float


class DailyRouteModel(BaseModel):
    day_index: int
    visit_ids: List[str]
    total_time: float
    estimated_finish_time: float
    is_feasible: bool


class RoutingResponse(BaseModel):
    stops: List[RouteStopModel]
    total_distance: float
    total_time: float
    estimated_fuel: float
    savings: Optional[SavingsModel] = None
    daily_routes: List[DailyRouteModel] = Field(default_factory=list)
    metadata: dict


class ReportModel(BaseModel):
    summary: Dict[str, Any]
    savings: Optional[Dict[str, Any]] = None
    daily_breakdown: List[Dict[str, Any]]
    recommendations: List[str]


class RoutingReportResponse(BaseModel):
    route: RoutingResponse
    report: ReportModel
