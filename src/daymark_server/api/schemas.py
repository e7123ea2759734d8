"""Request and response schemas shared across routers.

Response models read straight from ORM rows (``from_attributes``). Request
bodies accept snake_case and the camelCase names the web client sends.
"""

from datetime import date, datetime
from typing import Optional

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class ORMModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)


# --- Day-scoped responses ---


class PriorityResponse(ORMModel):
    """A top priority on a Day."""

    id: str
    day_id: str
    title: str
    completed: bool
    order: int
    created_at: Optional[datetime] = None


class DiscussionItemResponse(ORMModel):
    id: str
    day_id: str
    content: str
    order: int


class TimeBlockResponse(ORMModel):
    id: str
    day_id: str
    title: str
    start_time: datetime
    end_time: datetime
    type: str


class QuickNoteResponse(ORMModel):
    id: str
    day_id: str
    content: str
    updated_at: Optional[datetime] = None


class DailyReviewResponse(ORMModel):
    id: str
    day_id: str
    went_well: Optional[str] = None
    didnt_go_well: Optional[str] = None
    updated_at: Optional[datetime] = None


class DayResponse(ORMModel):
    """Full Day aggregate as rendered by the dashboard."""

    id: str
    user_id: str
    date: date
    priorities: list[PriorityResponse] = []
    discussion_items: list[DiscussionItemResponse] = []
    time_blocks: list[TimeBlockResponse] = []
    quick_note: Optional[QuickNoteResponse] = None
    daily_review: Optional[DailyReviewResponse] = None


class DayProgressResponse(BaseModel):
    total: int
    completed: int


class CarryForwardResponse(BaseModel):
    """Outcome of copying unfinished priorities to another day."""

    carried: int
    skipped: int
    priorities: list[PriorityResponse]


class DeletedResponse(BaseModel):
    status: str = "deleted"
    id: str


# --- Tools ---


class EisenhowerTaskResponse(ORMModel):
    id: str
    title: str
    note: Optional[str] = None
    quadrant: int
    created_at: Optional[datetime] = None


class DecisionResponse(ORMModel):
    id: str
    title: str
    date: date
    context: Optional[str] = None
    decision: str
    outcome: Optional[str] = None
    created_at: Optional[datetime] = None


class FocusSessionResponse(ORMModel):
    """A focus timer run; ``duration`` and ``target_duration`` in seconds."""

    id: str
    time_block_id: str
    started_at: datetime
    ended_at: Optional[datetime] = None
    duration: Optional[int] = None
    completed: bool
    interrupted: bool
    session_type: str
    target_duration: Optional[int] = None
    created_at: Optional[datetime] = None


class FocusStatsResponse(ORMModel):
    total_sessions: int
    completed_sessions: int
    interrupted_sessions: int
    total_focus_minutes: int
    average_session_minutes: int


class LifeAreaResponse(ORMModel):
    id: str
    name: str
    color: Optional[str] = None
    order: int
    is_archived: bool


# --- Request bodies ---


class PriorityCreate(BaseModel):
    title: str = Field(..., max_length=500)


class PriorityUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=500)
    completed: Optional[bool] = None


class DiscussionItemBody(BaseModel):
    content: str


class TimeBlockCreate(BaseModel):
    title: str = Field(..., max_length=500)
    start_time: datetime = Field(validation_alias=AliasChoices("start_time", "startTime"))
    end_time: datetime = Field(validation_alias=AliasChoices("end_time", "endTime"))
    type: Optional[str] = Field(default=None, max_length=50)


class TimeBlockUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=500)
    start_time: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("start_time", "startTime")
    )
    end_time: Optional[datetime] = Field(
        default=None, validation_alias=AliasChoices("end_time", "endTime")
    )
    type: Optional[str] = Field(default=None, max_length=50)


class QuickNoteBody(BaseModel):
    content: str = ""


class ReviewBody(BaseModel):
    went_well: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("went_well", "wentWell")
    )
    didnt_go_well: Optional[str] = Field(
        default=None, validation_alias=AliasChoices("didnt_go_well", "didntGoWell")
    )


class CarryForwardRequest(BaseModel):
    to_date: str = Field(validation_alias=AliasChoices("to_date", "toDate"))


class PromoteRequest(BaseModel):
    date: str


class EisenhowerTaskCreate(BaseModel):
    title: str = Field(..., max_length=500)
    note: Optional[str] = None
    quadrant: int


class EisenhowerTaskUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=500)
    note: Optional[str] = None
    quadrant: Optional[int] = None


class DecisionCreate(BaseModel):
    title: str = Field(..., max_length=500)
    date: str
    decision: str
    context: Optional[str] = None
    outcome: Optional[str] = None


class DecisionUpdate(BaseModel):
    title: Optional[str] = Field(default=None, max_length=500)
    date: Optional[str] = None
    decision: Optional[str] = None
    context: Optional[str] = None
    outcome: Optional[str] = None


class LifeAreaCreate(BaseModel):
    name: str = Field(..., max_length=100)
    color: Optional[str] = Field(default=None, max_length=20)


class LifeAreaUpdate(BaseModel):
    name: Optional[str] = Field(default=None, max_length=100)
    color: Optional[str] = Field(default=None, max_length=20)
    order: Optional[int] = None


class LifeAreaReorder(BaseModel):
    ordered_ids: list[str] = Field(validation_alias=AliasChoices("ordered_ids", "orderedIds"))


class FocusSessionStart(BaseModel):
    time_block_id: str = Field(validation_alias=AliasChoices("time_block_id", "timeBlockId"))
    session_type: Optional[str] = Field(
        default=None,
        max_length=20,
        validation_alias=AliasChoices("session_type", "sessionType"),
    )
    target_duration: Optional[int] = Field(
        default=None,
        gt=0,
        validation_alias=AliasChoices("target_duration", "targetDuration"),
    )


class FocusSessionEnd(BaseModel):
    completed: Optional[bool] = None
    interrupted: Optional[bool] = None
