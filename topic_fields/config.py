from dataclasses import dataclass

from dotenv import load_dotenv
from pydantic_settings import BaseSettings, SettingsConfigDict

from topic_fields.exceptions import FieldConfigurationError
from topic_fields.fields import FieldType

load_dotenv()


class Settings(BaseSettings):
    # Application settings
    app_name: str = "Topic Custom Fields"
    app_version: str = "1.0.0"
    environment: str = "development"

    # Database settings
    database_url: str = "sqlite:///./topic_fields.db"

    # Topic custom field settings
    topic_custom_field_enabled: bool = True
    topic_custom_field_name: str = "topic_custom_field"
    topic_custom_field_type: str = "string"

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )


@dataclass(frozen=True)
class FieldConfig:
    """The field every component works with, fixed at startup."""

    name: str
    value_type: FieldType
    enabled: bool = True

    @classmethod
    def from_values(cls, name, value_type, enabled=True) -> "FieldConfig":
        if not isinstance(name, str) or not name.strip():
            raise FieldConfigurationError("topic_custom_field_name must not be empty", field=name)
        return cls(name=name.strip(), value_type=FieldType.parse(value_type, field=name), enabled=bool(enabled))


settings = Settings()
