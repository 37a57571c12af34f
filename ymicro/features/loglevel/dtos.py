from pydantic import BaseModel, ConfigDict, Field, field_validator

ACCEPTED_LEVELS = ("debug", "info", "warn", "error", "panic", "fatal")


class ChangeLogLevelRequest(BaseModel):
    """调整日志级别的请求体"""
    model_config = ConfigDict(populate_by_name=True)

    new_level: str = Field(alias="newLevel", description="新的日志级别", examples=["debug"])

    @field_validator("new_level")
    @classmethod
    def _must_be_log_level(cls, value: str) -> str:
        if value not in ACCEPTED_LEVELS:
            raise ValueError("must be one of debug, info, warn, error, panic, or fatal")
        return value


class LogLevelResponse(BaseModel):
    """当前日志级别"""
    level: str
