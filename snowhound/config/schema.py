"""Pydantic v2 configuration schema with strict validation."""

from pydantic import BaseModel, Field

DEFAULT_USER_AGENT = "SnowHound Weather App"


class ProviderKeysConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    openweather_api_key: str = ""
    weatherapi_key: str = ""


class FeaturesConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    enable_mock_data: bool = False  # force every provider into mock mode
    use_backend: bool = False  # route forecasts through the caching backend


class BackendConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    api_base_url: str = "http://localhost:3001"
    api_timeout_seconds: float = Field(default=30.0, gt=0.0)


class HttpConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    timeout_seconds: float = Field(default=15.0, ge=1.0, le=60.0)
    user_agent: str = DEFAULT_USER_AGENT
    max_retries: int = Field(default=1, ge=0, le=5)
    retry_base_delay: float = Field(default=1.0, ge=0.0)


class CacheConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    enabled: bool = True
    ttl_minutes: int = Field(default=60, ge=1)
    db_path: str = "data/snowhound.db"


class RateLimitConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    window_minutes: int = Field(default=15, ge=1)
    max_requests: int = Field(default=50, ge=1)


class DepthConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    max_history: int = Field(default=30, ge=1)


class AppConfig(BaseModel):
    model_config = {"extra": "forbid", "frozen": True}

    keys: ProviderKeysConfig = ProviderKeysConfig()
    features: FeaturesConfig = FeaturesConfig()
    backend: BackendConfig = BackendConfig()
    http: HttpConfig = HttpConfig()
    cache: CacheConfig = CacheConfig()
    rate_limit: RateLimitConfig = RateLimitConfig()
    depth: DepthConfig = DepthConfig()
