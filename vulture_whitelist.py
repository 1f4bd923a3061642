"""Vulture whitelist — false positives that are actually used by frameworks."""

# ---------------------------------------------------------------------------
# Public API methods on HashFort (used by consumers, not internally)
# ---------------------------------------------------------------------------
from hashfort.hashfort import HashFort

HashFort.on
HashFort.add_hook
HashFort.fastapi_router
HashFort.create_app

# ---------------------------------------------------------------------------
# FastAPI route handlers and middleware (registered via decorators)
# ---------------------------------------------------------------------------
_.overview_endpoint
_.hash_endpoint
_.verify_endpoint
_.batch_hash_endpoint
_.config_endpoint
_.health_endpoint
_.request_context
_.hashfort_error_handler
_.request_validation_handler
_.unhandled_error_handler
_.lifespan

# ---------------------------------------------------------------------------
# Pydantic / dataclass fields (used for serialization, not accessed in code)
# ---------------------------------------------------------------------------
_.isValid
_.defaultOptions
_.note
_.timestamp
_.model_config
