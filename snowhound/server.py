"""SnowHound backend: FastAPI proxy for provider forecasts and geocoding with a TTL cache."""

import logging
import math
import sqlite3
import time
from datetime import timedelta

from fastapi import Body, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address

from snowhound.config.schema import AppConfig, RateLimitConfig
from snowhound.errors import RateLimited, UpstreamUnavailable, ValidationError
from snowhound.ingest.nominatim_client import NominatimClient
from snowhound.ingest.nws_client import NwsClient
from snowhound.ingest.openweather_client import OpenWeatherClient
from snowhound.ingest.routing import parse_provider
from snowhound.ingest.weatherapi_client import WeatherApiClient
from snowhound.models.common import ProviderId, utc_now_iso
from snowhound.models.validation import is_searchable, sanitize_search_query
from snowhound.storage.cache_repo import ForecastCache

logger = logging.getLogger(__name__)

# forecast and geocode share one budget per client address
RATE_LIMIT_SCOPE = "weather"
THROTTLED_MESSAGE = "Too many weather requests, please try again later."


def rate_limit_string(rate_limit: RateLimitConfig) -> str:
    """Limit in slowapi notation, e.g. "50/15 minutes"."""
    return f"{rate_limit.max_requests}/{rate_limit.window_minutes} minutes"


def _error(status: int, message: str, **extra: object) -> JSONResponse:
    return JSONResponse(status_code=status, content={"error": message, **extra})


def _rate_limit_exceeded(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    limiter: Limiter = request.app.state.limiter
    item, identifiers = request.state.view_rate_limit
    reset_at, _remaining = limiter.limiter.get_window_stats(item, *identifiers)
    retry_after = max(0, math.ceil(reset_at - time.time()))
    logger.warning("Rate limit exceeded for %s: %s", get_remote_address(request), exc.detail)
    resp = _error(429, THROTTLED_MESSAGE, retryAfter=retry_after)
    resp.headers["Retry-After"] = str(retry_after)
    return resp


def _parse_location(body: dict) -> tuple[float, float]:
    location = body.get("location") or {}
    if not isinstance(location, dict):
        raise ValidationError("Location (lat, lon) is required")
    lat, lon = location.get("lat"), location.get("lon")
    if lat is None or lon is None:
        raise ValidationError("Location (lat, lon) is required")
    try:
        lat_f, lon_f = float(lat), float(lon)
    except (TypeError, ValueError) as e:
        raise ValidationError("Invalid coordinates") from e
    if lat_f != lat_f or lon_f != lon_f:
        raise ValidationError("Invalid coordinates")
    if not (-90 <= lat_f <= 90 and -180 <= lon_f <= 180):
        raise ValidationError("Coordinates out of range")
    return lat_f, lon_f


def create_app(config: AppConfig, conn: sqlite3.Connection | None = None) -> FastAPI:
    """Build the backend app. ``conn`` enables the forecast cache when given."""
    http = config.http
    clients = {
        ProviderId.OPENWEATHERMAP: OpenWeatherClient(
            config.keys.openweather_api_key,
            timeout=http.timeout_seconds,
            max_retries=http.max_retries,
            retry_base_delay=http.retry_base_delay,
        ),
        ProviderId.WEATHERAPI: WeatherApiClient(
            config.keys.weatherapi_key,
            timeout=http.timeout_seconds,
            max_retries=http.max_retries,
            retry_base_delay=http.retry_base_delay,
        ),
        ProviderId.NWS: NwsClient(
            user_agent=http.user_agent,
            timeout=http.timeout_seconds,
            max_retries=http.max_retries,
            retry_base_delay=http.retry_base_delay,
        ),
    }
    nominatim = NominatimClient(user_agent=http.user_agent, timeout=http.timeout_seconds)
    cache = ForecastCache(
        conn if config.cache.enabled else None,
        ttl=timedelta(minutes=config.cache.ttl_minutes),
    )
    limiter = Limiter(key_func=get_remote_address, storage_uri="memory://")
    weather_limit = limiter.shared_limit(
        rate_limit_string(config.rate_limit), scope=RATE_LIMIT_SCOPE
    )

    app = FastAPI(title="SnowHound Backend", version="0.1.0")
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    def health():
        return {"status": "ok", "timestamp": utc_now_iso()}

    @app.post("/api/weather/forecast")
    @weather_limit
    async def forecast(request: Request, body: dict = Body(...)):
        """Provider payload for (location, model), served from cache when fresh."""
        try:
            lat, lon = _parse_location(body)
            model, provider_name = body.get("model"), body.get("provider")
            if not model or not provider_name:
                raise ValidationError("Missing required fields: location, model, provider")
            provider = parse_provider(str(provider_name))
            model = str(model)
        except ValidationError as e:
            return _error(400, str(e))

        cached = cache.get(lat, lon, model)
        if cached is not None:
            return {**cached, "cached": True}

        try:
            data = await clients[provider].get_forecast(lat, lon)
        except RateLimited as e:
            return _error(429, str(e), retryAfter=e.retry_after)
        except UpstreamUnavailable as e:
            logger.error("Forecast error for %s via %s: %s", model, provider, e)
            return _error(502, str(e))

        cache.put(lat, lon, model, data)
        return {**data, "cached": False}

    @app.get("/api/weather/geocode")
    @weather_limit
    async def geocode(request: Request, q: str | None = None):
        if not q or not is_searchable(q):
            return _error(400, 'Query parameter "q" is required')
        try:
            results = await nominatim.search(sanitize_search_query(q))
        except (UpstreamUnavailable, RateLimited) as e:
            logger.error("Geocoding error for %r: %s", q, e)
            return _error(502, "Failed to geocode location")
        return [
            {
                "place_id": r.get("place_id"),
                "display_name": r.get("display_name", ""),
                "lat": r.get("lat"),
                "lon": r.get("lon"),
            }
            for r in results
            if isinstance(r, dict)
        ]

    return app
