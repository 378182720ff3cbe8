"""Request model handed to the dispatch queue."""

from typing import Any

from pydantic import BaseModel, Field, field_validator


class Request(BaseModel):
    """A single remote method invocation.

    Immutable: pagination derives follow-up requests with ``with_params``
    instead of mutating the original.
    """

    method: str = Field(min_length=1)
    params: dict[str, Any] = Field(default_factory=dict)
    token: str | None = None
    acting_user: str | None = None
    timeout: float | None = Field(default=None, gt=0)

    model_config = {"frozen": True}

    @field_validator("method")
    @classmethod
    def method_has_no_slashes(cls, v: str) -> str:
        if v.startswith("/") or v.endswith("/"):
            raise ValueError("method must not start or end with '/'")
        return v

    @field_validator("params")
    @classmethod
    def copy_params(cls, v: dict[str, Any]) -> dict[str, Any]:
        return dict(v)

    def with_params(self, **updates: Any) -> "Request":
        """Return a copy with ``updates`` merged over the current params."""
        return self.model_copy(update={"params": {**self.params, **updates}})
