from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

PROVIDERS = ("anthropic", "gemini")


class Settings(BaseSettings):
	# Provider can be "anthropic" (Messages API) or "gemini" (Generative Language API)
	provider: str = Field(default="anthropic", validation_alias="ANALYZER_PROVIDER")

	anthropic_api_key: str | None = Field(default=None, validation_alias="ANTHROPIC_API_KEY")
	anthropic_model: str = Field(default="claude-sonnet-4-20250514", validation_alias="ANTHROPIC_MODEL")
	anthropic_base_url: str = Field(default="https://api.anthropic.com/v1/messages", validation_alias="ANTHROPIC_BASE_URL")
	anthropic_version: str = Field(default="2023-06-01", validation_alias="ANTHROPIC_VERSION")
	anthropic_max_tokens: int = Field(default=4000, validation_alias="ANTHROPIC_MAX_TOKENS")

	gemini_api_key: str | None = Field(default=None, validation_alias="GEMINI_API_KEY")
	gemini_model: str = Field(default="gemini-2.5-flash", validation_alias="GEMINI_MODEL")
	gemini_base_url: str = Field(default="https://generativelanguage.googleapis.com/v1beta/models", validation_alias="GEMINI_BASE_URL")
	gemini_temperature: float = Field(default=0.7, validation_alias="GEMINI_TEMPERATURE")
	gemini_max_output_tokens: int = Field(default=4000, validation_alias="GEMINI_MAX_OUTPUT_TOKENS")

	http_timeout: float = Field(default=60.0, validation_alias="ANALYZER_HTTP_TIMEOUT")
	# When false, out-of-range scores and unknown likelihoods are logged instead of rejected
	strict_validation: bool = Field(default=True, validation_alias="ANALYZER_STRICT_VALIDATION")

	cors_allowed_origins: str = Field(default="*", validation_alias="CORS_ALLOWED_ORIGINS")
	log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

	# pydantic-settings v2 style config
	model_config = SettingsConfigDict(env_file=".env", extra="ignore")

	@field_validator("provider", mode="before")
	@classmethod
	def normalize_provider(cls, value: object) -> object:
		if not isinstance(value, str):
			return "anthropic"
		normalized = value.strip().lower()
		return normalized if normalized in PROVIDERS else "anthropic"

	@field_validator("anthropic_api_key", "gemini_api_key", mode="before")
	@classmethod
	def blank_key_is_unset(cls, value: object) -> object:
		if isinstance(value, str) and not value.strip():
			return None
		return value

	@property
	def cors_origins(self) -> list[str]:
		return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

	@property
	def active_api_key(self) -> str | None:
		if self.provider == "gemini":
			return self.gemini_api_key
		return self.anthropic_api_key


@lru_cache
def get_settings() -> Settings:
	return Settings()
