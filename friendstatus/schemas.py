"""Request bodies accepted by the services."""

import json
from typing import Any, Dict

from pydantic import BaseModel, ConfigDict, StrictStr


class PasswordBody(BaseModel):
    """Body of a token or sign-on request."""

    model_config = ConfigDict(extra='forbid')

    Password: StrictStr


class FriendsBody(BaseModel):
    """Body of a status push: the pusher's serialized friend list."""

    model_config = ConfigDict(extra='forbid')

    Friends: StrictStr


def to_properties(payload: Any) -> Dict[str, str]:
    """
    Flatten a JSON object into entity properties.

    String values are kept as-is; anything else is stored as its JSON text.

    Raises
    ------
    ValueError
        If ``payload`` is not a JSON object.

    """
    if not isinstance(payload, dict):
        raise ValueError('Properties must be a JSON object')
    return {
        str(key): value if isinstance(value, str) else json.dumps(value)
        for key, value in payload.items()
    }
