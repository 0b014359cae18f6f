from typing import Literal, Optional

from pydantic import BaseModel, Field, ValidationError


class SettingsSchema(BaseModel):
    language: Literal["en", "ru"] = "en"
    log_level: Literal["TRACE", "DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    log_file: Optional[str] = None
    rate_limit: Optional[int] = Field(default=None, gt=0)
    rate_window: int = Field(default=60, gt=0)


def validate_settings(data: dict) -> SettingsSchema:
    try:
        return SettingsSchema(**data)
    except ValidationError as e:
        raise ValueError(str(e))
