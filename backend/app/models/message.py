# message model — one turn of a vent, mentor or journal exchange
# ordering inside a session is insertion order and is sent to the llm as-is

from typing import Optional, Literal
from pydantic import BaseModel, Field

Role = Literal["user", "assistant"]


class Message(BaseModel):
    role: Role
    content: str = ""
    timestamp: Optional[int] = Field(None, description="client-side capture time, epoch millis")

    @property
    def is_blank(self) -> bool:
        return not self.content.strip()
