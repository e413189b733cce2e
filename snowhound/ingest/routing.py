"""Fixed model-to-provider routing shared by the aggregator and the backend proxy."""

from snowhound.config.defaults import MODELS_BY_ID
from snowhound.errors import ValidationError
from snowhound.models.common import ProviderId
from snowhound.models.forecast import WeatherModel

NWS_MODELS = frozenset({"gfs", "nam", "hrrr"})
OPENWEATHER_MODELS = frozenset({"ecmwf", "ukmet", "gem", "jma"})

PROVIDER_DISPLAY_NAMES: dict[ProviderId, str] = {
    ProviderId.NWS: "National Weather Service",
    ProviderId.OPENWEATHERMAP: "OpenWeatherMap",
    ProviderId.WEATHERAPI: "WeatherAPI.com",
}

# Accepted spellings of a provider on the backend wire
PROVIDER_ALIASES: dict[str, ProviderId] = {
    "nws": ProviderId.NWS,
    "national weather service": ProviderId.NWS,
    "openweathermap": ProviderId.OPENWEATHERMAP,
    "weatherapi": ProviderId.WEATHERAPI,
}


def provider_for(model_id: str) -> ProviderId:
    """Pure lookup: which upstream serves a model id."""
    if model_id in NWS_MODELS:
        return ProviderId.NWS
    if model_id in OPENWEATHER_MODELS:
        return ProviderId.OPENWEATHERMAP
    return ProviderId.WEATHERAPI


def resolve_model(model_id: str) -> tuple[WeatherModel, ProviderId]:
    """Look up a catalog model and its provider. Unknown or empty ids are rejected."""
    if not model_id or not model_id.strip():
        raise ValidationError("Model id is required")
    model = MODELS_BY_ID.get(model_id)
    if model is None:
        raise ValidationError(f"Model {model_id} not found")
    return model, provider_for(model_id)


def parse_provider(name: str) -> ProviderId:
    provider = PROVIDER_ALIASES.get(name.strip().lower())
    if provider is None:
        raise ValidationError(f"Invalid provider: {name}")
    return provider
