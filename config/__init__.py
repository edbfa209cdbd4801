import os

DEFAULT_OPERATORS = "alex:Alex,sam:Sam"


def get_settings_module() -> str:
    # APP_ENV selects the settings module; anything unknown falls back to development
    env = os.getenv("APP_ENV", "development").lower()

    if env in {"prod", "production"}:
        return "config.production"

    if env in {"test", "testing"}:
        return "config.testing"

    return "config.development"


def parse_operators(raw: str) -> list[tuple[str, str]]:
    """Parse ``"id:Name,id:Name"`` into (id, display name) pairs."""
    pairs = []
    for chunk in raw.split(","):
        if not chunk.strip():
            continue
        op_id, _, name = chunk.partition(":")
        pairs.append((op_id.strip(), name.strip() or op_id.strip()))
    return pairs
