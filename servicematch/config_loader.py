import yaml
import os
import logging
from typing import Optional
from pydantic import BaseModel, Field, model_validator

logger = logging.getLogger(__name__)

# Keys shipped in sample .env files; treated the same as no key at all
PLACEHOLDER_API_KEYS = frozenset({"demo-key", "sk-dummy-key-for-development", "changeme"})


class LlmConfig(BaseModel):
    api_key: Optional[str] = None
    base_url: Optional[str] = None
    model: str = "gpt-4o-mini"
    temperature: float = 0.2
    max_tokens: int = 800

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key) and self.api_key not in PLACEHOLDER_API_KEYS


class ScoringWeights(BaseModel):
    """
    Weights of the deterministic score components, in percent.

    experience_reliability covers the 50/50 blend of the experience and
    reliability component scores.
    """
    skill_match: float = 40.0
    experience_reliability: float = 20.0
    value: float = 10.0
    location_advantage: float = 20.0
    urgency_fit: float = 10.0

    @model_validator(mode="after")
    def _check_total(self) -> "ScoringWeights":
        values = (
            self.skill_match, self.experience_reliability, self.value,
            self.location_advantage, self.urgency_fit,
        )
        if any(v < 0 for v in values):
            raise ValueError("Scoring weights must be non-negative")
        total = sum(values)
        if abs(total - 100.0) > 1e-6:
            raise ValueError(f"Scoring weights must sum to 100, got {total}")
        return self


class ScoringConfig(BaseModel):
    """
    AI call policy and deterministic weights.

    The LLM service issues exactly one request per call; timeout_seconds
    and max_attempts configure the LLMCallPolicy that AppContext wraps
    around it for every AI caller.
    """
    timeout_seconds: float = Field(default=15.0, gt=0)
    max_attempts: int = Field(default=2, ge=1)
    weights: ScoringWeights = Field(default_factory=ScoringWeights)


class MatchingConfig(BaseModel):
    qualification_threshold: float = Field(default=60.0, ge=0, le=100)
    max_results: int = Field(default=10, ge=1)
    default_search_radius_km: float = Field(default=15.0, gt=0)


class CatalogConfig(BaseModel):
    path: Optional[str] = None  # None = packaged service_categories.yaml


class WebConfig(BaseModel):
    host: str = "0.0.0.0"
    port: int = 8080
    providers_file: Optional[str] = None  # YAML seed for the provider directory


class AppConfig(BaseModel):
    llm: LlmConfig = Field(default_factory=LlmConfig)
    scoring: ScoringConfig = Field(default_factory=ScoringConfig)
    matching: MatchingConfig = Field(default_factory=MatchingConfig)
    catalog: CatalogConfig = Field(default_factory=CatalogConfig)
    web: WebConfig = Field(default_factory=WebConfig)


def _section(data: dict, name: str) -> dict:
    if not isinstance(data.get(name), dict):
        data[name] = {}
    return data[name]


def load_config(config_path: str = "config.yaml") -> AppConfig:
    # If not found at relative path (e.g. running from another directory), try the project root
    if not os.path.exists(config_path):
        base_dir = os.path.dirname(os.path.abspath(__file__))
        config_path = os.path.join(base_dir, "..", "config.yaml")

    data = {}
    if os.path.exists(config_path):
        with open(config_path, "r") as f:
            data = yaml.safe_load(f) or {}
    else:
        logger.info("No config.yaml found; using defaults and environment")

    # Allow env var override for LLM credentials and endpoint
    env_api_key = os.environ.get("OPENAI_API_KEY")
    if env_api_key:
        _section(data, 'llm')['api_key'] = env_api_key

    env_base_url = os.environ.get("LLM_BASE_URL")
    if env_base_url:
        _section(data, 'llm')['base_url'] = env_base_url

    env_model = os.environ.get("LLM_MODEL")
    if env_model:
        _section(data, 'llm')['model'] = env_model

    # Web server overrides
    if 'WEB_HOST' in os.environ:
        _section(data, 'web')['host'] = os.environ['WEB_HOST']

    if 'WEB_PORT' in os.environ:
        _section(data, 'web')['port'] = int(os.environ['WEB_PORT'])

    if 'PROVIDERS_FILE' in os.environ:
        _section(data, 'web')['providers_file'] = os.environ['PROVIDERS_FILE']

    return AppConfig(**data)
