from typing import Any

from pydantic import BaseModel, ConfigDict


__all__ = (
    'DiscordModel',
)


class DiscordModel(BaseModel):
    # ? discord adds fields all the time, never reject a payload for them
    model_config = ConfigDict(extra='ignore')

    def as_payload(self) -> dict[str, Any]:
        return self.model_dump(mode='json', exclude_none=True)
