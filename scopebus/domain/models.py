"""Option and registry models for the publisher."""

from __future__ import annotations

import math
from typing import Any, Callable, Union

from pydantic import BaseModel, ConfigDict, StrictFloat, StrictInt, field_validator

CallLimit = Union[StrictInt, StrictFloat]


class SubscribeOptions(BaseModel):
    """Options accepted when subscribing to an event."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Number of deliveries after which the subscriber is removed automatically.
    max_call_count: CallLimit = math.inf
    # Narrows the event to a sub-channel; must match the scope used to publish.
    scope: str | None = None

    @field_validator("max_call_count")
    @classmethod
    def _positive_limit(cls, value: float) -> float:
        if not value > 0:
            raise ValueError("max_call_count must be greater than 0")
        return value


class PublishOptions(BaseModel):
    """Options accepted when publishing an event."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    # Lets subscribers call prevent_default() on the published action.
    cancellable: bool = False
    scope: str | None = None


class Subscription(BaseModel):
    """Registry entry binding one callback to one effective event name."""

    callback: Callable[..., Any]
    max_call_count: CallLimit = math.inf
    call_count: int = 0
    scope: str | None = None

    @property
    def exhausted(self) -> bool:
        return self.call_count >= self.max_call_count


DEFAULT_SUBSCRIBE_OPTIONS = SubscribeOptions()
