"""The value delivered to subscribers every time an event is published."""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, PrivateAttr

T = TypeVar("T")


class Action(BaseModel, Generic[T]):
    """One published occurrence of an event.

    ``detail`` and ``cancelable`` are fixed at construction. Subscribers can
    only signal back to the publisher through :meth:`prevent_default`, which
    has an effect only when the action is cancelable.
    """

    model_config = ConfigDict(frozen=True)

    detail: T | None = None
    cancelable: bool = False

    _default_prevented: bool = PrivateAttr(default=False)

    def __init__(self, detail: T | None = None, cancelable: bool = False, **data: Any) -> None:
        super().__init__(detail=detail, cancelable=cancelable, **data)

    @property
    def default_prevented(self) -> bool:
        """True once a subscriber has cancelled a cancelable action."""
        return self._default_prevented

    def prevent_default(self) -> None:
        """Ask the publisher not to carry out the action it announced."""
        if self.cancelable:
            self._default_prevented = True
