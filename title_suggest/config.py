from pydantic import BaseModel, ConfigDict
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    gemini_api_key: str | None = None
    model_name: str = "gemini-2.5-flash"

    temperature: float = 0.7
    top_p: float = 0.9
    top_k: int = 32
    max_output_tokens: int = 2048

    max_title_length: int = 45
    require_description: bool = True

    log_level: str = "INFO"
    log_dir: str | None = None


class SamplingConfig(BaseModel):
    """Static generation parameters handed to the model call."""

    model_config = ConfigDict(frozen=True, protected_namespaces=())

    model_name: str
    temperature: float
    top_p: float
    top_k: int
    max_output_tokens: int


def sampling_config(cfg: Settings | None = None) -> SamplingConfig:
    cfg = cfg or settings
    return SamplingConfig(
        model_name=cfg.model_name,
        temperature=cfg.temperature,
        top_p=cfg.top_p,
        top_k=cfg.top_k,
        max_output_tokens=cfg.max_output_tokens,
    )


settings = Settings()
