# session lifecycle — idle -> active -> ended state machine for one vent/mentor session
#
# timing is derived on demand from the stored start time and a wall clock;
# expiry never changes state by itself, callers end() explicitly.

import enum
import logging
from datetime import datetime
from typing import Callable, Optional

from app.config import settings
from app.exceptions import SessionStateError
from app.models.message import Message
from app.models.session import Draft, Mode
from app.services.weeks import from_millis, to_millis, utc_now, week_id_for

logger = logging.getLogger(__name__)


class SessionState(str, enum.Enum):
    IDLE = "idle"
    ACTIVE = "active"
    ENDED = "ended"


def default_duration(mode: Mode) -> int:
    return settings.VENT_DURATION_MINUTES if mode == "vent" else settings.MENTOR_DURATION_MINUTES


def time_remaining(start_time: int, duration_minutes: float, now: datetime) -> float:
    """minutes left: max(0, duration - minutes elapsed since start_time)"""
    elapsed = (now - from_millis(start_time)).total_seconds() / 60
    return max(0.0, duration_minutes - elapsed)


class SessionLifecycle:
    def __init__(self, clock: Callable[[], datetime] = utc_now):
        self.clock = clock
        self.state = SessionState.IDLE
        self.mode: Mode = "vent"
        self.messages: list[Message] = []
        self.start_time = 0
        self.duration_minutes = settings.VENT_DURATION_MINUTES
        self.current_date = ""
        self.week_id = ""

    @property
    def is_active(self) -> bool:
        return self.state is SessionState.ACTIVE

    def _stamp_calendar(self, now: datetime) -> None:
        self.current_date = now.date().isoformat()
        self.week_id = week_id_for(now)

    def start(self, mode: Mode, duration_minutes: Optional[int] = None) -> None:
        if self.is_active:
            raise SessionStateError("A session is already active")
        now = self.clock()
        self.mode = mode
        self.messages = []
        self.start_time = to_millis(now)
        self.duration_minutes = duration_minutes or default_duration(mode)
        self._stamp_calendar(now)
        self.state = SessionState.ACTIVE
        logger.info(f"Started {mode} session ({self.duration_minutes} min, week {self.week_id})")

    def add_message(self, message: Message) -> Message:
        """append with a capture timestamp; only while active"""
        if not self.is_active:
            raise SessionStateError(f"Cannot add messages to a session that is {self.state.value}")
        stamped = message.model_copy(update={"timestamp": to_millis(self.clock())})
        self.messages.append(stamped)
        return stamped

    def end(self) -> None:
        if not self.is_active:
            raise SessionStateError(f"Cannot end a session that is {self.state.value}")
        self.state = SessionState.ENDED

    def restore(self, mode: Mode, duration_minutes: int, messages: list[Message], start_time: int) -> None:
        """resume from a draft. week/date come from the clock, start_time from the draft."""
        self.mode = mode
        self.duration_minutes = duration_minutes
        self.messages = list(messages)
        self.start_time = start_time
        self._stamp_calendar(self.clock())
        self.state = SessionState.ACTIVE

    @classmethod
    def from_draft(cls, draft: Draft, clock: Callable[[], datetime] = utc_now) -> "SessionLifecycle":
        lifecycle = cls(clock=clock)
        lifecycle.restore(draft.mode, draft.duration_minutes, draft.messages, draft.start_time)
        return lifecycle

    def time_remaining(self, now: Optional[datetime] = None) -> float:
        if not self.is_active:
            return 0.0
        return time_remaining(self.start_time, self.duration_minutes, now or self.clock())

    def is_expired(self, now: Optional[datetime] = None) -> bool:
        return self.time_remaining(now) <= 0

    def to_draft(self) -> Draft:
        return Draft(
            mode=self.mode,
            messages=self.messages,
            startTime=self.start_time,
            durationMinutes=self.duration_minutes,
        )
