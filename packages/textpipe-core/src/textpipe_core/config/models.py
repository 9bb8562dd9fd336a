from pydantic import BaseModel, Field, field_validator
from typing import Literal


class PreviewSettings(BaseModel):
    debounce_ms: int = Field(default=150, ge=0)
    scheduler: Literal["thread", "asyncio", "manual"] = "thread"


class OperationsSettings(BaseModel):
    plugins_enabled: bool = True
    plugins: list[str] = Field(default_factory=list)
    disabled: list[str] = Field(default_factory=list)

    @field_validator("plugins", "disabled")
    @classmethod
    def _distinct_names(cls, names: list[str]) -> list[str]:
        stripped = [name.strip() for name in names]
        if not all(stripped):
            raise ValueError("names cannot be blank")
        return list(dict.fromkeys(stripped))


class TextpipeConfig(BaseModel):
    preview: PreviewSettings = Field(default_factory=PreviewSettings)
    operations: OperationsSettings = Field(default_factory=OperationsSettings)
    log_level: Literal["debug", "info", "warn", "error"] = "info"
    log_format: Literal["text", "json"] = "text"
