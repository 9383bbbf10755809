"""Tagged outcomes of a store lookup."""

from __future__ import annotations

from typing import Any, Union

from pydantic import BaseModel


class Found(BaseModel):
    """The key is present; ``value`` is the stored conversion result."""

    value: Any


class NotFound(BaseModel):
    """The key is absent. Not an error."""


class StoreError(BaseModel):
    """The store failed to answer; callers degrade to a miss."""

    cause: Exception

    model_config = {"arbitrary_types_allowed": True}


Lookup = Union[Found, NotFound, StoreError]
