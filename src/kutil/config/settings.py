# config/settings.py
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional
from enum import Enum
from dotenv import load_dotenv

# Load .env file explicitly
load_dotenv()


class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"


class KubernetesSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="K8S_")

    kubeconfig_path: Optional[str] = Field(None, description="Path to kubeconfig file")
    context: Optional[str] = Field(None, description="Kubernetes context to use")


class AggregationSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="AGGREGATION_")

    legacy_node_memory_limit: bool = Field(
        False,
        description="Add node memory limits into the node memory request sum, as kutil 0.9 did"
    )


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    debug: bool = Field(False, description="Debug mode")
    log_level: LogLevel = Field(LogLevel.WARNING, description="Log level")
    log_config_path: Optional[str] = Field(None, description="YAML logging dictConfig file")

    kubernetes: KubernetesSettings = Field(default_factory=lambda: KubernetesSettings())
    aggregation: AggregationSettings = Field(default_factory=lambda: AggregationSettings())

    @field_validator('log_level', mode='before')
    @classmethod
    def validate_log_level(cls, v):
        if isinstance(v, str):
            return LogLevel(v.upper())
        return v

    @classmethod
    def create_from_env(cls) -> "Settings":
        """Create settings instance from environment variables."""
        return cls()
