"""Provider/runtime configuration for the LLM layer.

Architectural role:
    Centralizes endpoint, model selection, variant settings, and credential lookup
    for `tripimport.llm.client`, `tripimport.core.engine`, and the API layer.

Variant settings:
    - `EXTRACT_CONFIG`: literal extraction, lighter model, temperature 0.2,
      provider failures always reported as 500.
    - `PLAN_CONFIG`: generative day planning, newer model, temperature 0.5,
      provider status codes relayed to the caller.

Determinism:
    Deterministic for a fixed process environment and key file. Module constants
    are resolved at import time; the credential is resolved per call by `load_key`.

Failure behavior:
    Missing key material is represented as `None`; callers turn it into a
    `MissingCredential` failure before any network call.
"""

import os
from dotenv import load_dotenv

from tripimport.core.types import PasteImportConfig
from tripimport.prompting.prompt_builder import EXTRACTION_INSTRUCTION, PLANNING_INSTRUCTION

load_dotenv()

GEMINI_URL_TEMPLATE = (
    "https://generativelanguage.googleapis.com/v1beta/models/"
    "{model}:generateContent"
)

GEMINI_KEY_FILE = "config/gemini.key"
GEMINI_KEY_VARIABLE = "GEMINI_API_KEY"

EXTRACT_MODEL_NAME = os.getenv("EXTRACT_MODEL_NAME", "gemini-1.5-pro")
PLAN_MODEL_NAME = os.getenv("PLAN_MODEL_NAME", "gemini-2.5-flash")

PLAN_REJECT_DUPLICATE_LOCATIONS = os.getenv("PLAN_REJECT_DUPLICATE_LOCATIONS", "false").lower() == "true"


def _timeout_from_env():
    raw = os.getenv("PROVIDER_TIMEOUT_SECONDS", "").strip()
    if not raw:
        return None
    try:
        return float(raw)
    except ValueError:
        return None


# `None` leaves the outbound call unbounded; the hosting environment's own
# request timeout applies.
PROVIDER_TIMEOUT_SECONDS = _timeout_from_env()


EXTRACT_CONFIG = PasteImportConfig(
    name="extract",
    instruction_text=EXTRACTION_INSTRUCTION,
    model_id=EXTRACT_MODEL_NAME,
    temperature=0.2,
    relay_provider_status=False,
    include_preferences=False,
)

PLAN_CONFIG = PasteImportConfig(
    name="plan",
    instruction_text=PLANNING_INSTRUCTION,
    model_id=PLAN_MODEL_NAME,
    temperature=0.5,
    relay_provider_status=True,
    include_preferences=True,
    reject_duplicate_locations=PLAN_REJECT_DUPLICATE_LOCATIONS,
)

VARIANTS = {
    EXTRACT_CONFIG.name: EXTRACT_CONFIG,
    PLAN_CONFIG.name: PLAN_CONFIG,
}


def load_key(path=GEMINI_KEY_FILE, variable=GEMINI_KEY_VARIABLE):
    """Return the Gemini API key, or `None` when it is not configured.

    Called once per request so a key added to the environment or written to
    `config/gemini.key` takes effect without a restart. A non-empty `variable`
    in the environment wins over the key file.
    """
    env_value = os.getenv(variable)
    if env_value:
        return env_value
    if not path or not os.path.exists(path):
        return None
    with open(path, "r") as f:
        return f.read().strip() or None
