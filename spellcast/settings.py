import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 3
    MAX_WORD_LENGTH: int = 20
    MAX_RESULTS: int = 100

    SEARCH_TIMEOUT_SECONDS: float = 3.0
    PRUNE_RATIO: float = 0.7
    PRUNE_MIN_LENGTH: int = 6

    DEBUG: bool = False

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "data" / "words.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                setattr(self, fld, _coerce(getattr(self, fld), env_val))


# Fields that may be changed at runtime through the settings API
EDITABLE_FIELDS: dict[str, type] = {
    "MAX_RESULTS": int,
    "MAX_WORD_LENGTH": int,
    "SEARCH_TIMEOUT_SECONDS": float,
    "PRUNE_RATIO": float,
    "PRUNE_MIN_LENGTH": int,
    "DEBUG": bool,
}


def _coerce(current: Any, value: Any) -> Any:
    if isinstance(current, bool):
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        return bool(value)
    if isinstance(current, int):
        return int(value)
    if isinstance(current, float):
        return float(value)
    if isinstance(current, Path):
        return Path(value)
    return value


def get_editable_settings(cfg: Settings) -> dict[str, Any]:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def update_settings(cfg: Settings, **values: Any) -> dict[str, str]:
    """Apply editable values to ``cfg``. Returns errors keyed by field name.

    Valid fields are applied even when others fail.
    """
    errors: dict[str, str] = {}
    for name, value in values.items():
        if name not in EDITABLE_FIELDS:
            errors[name] = "not an editable setting"
            continue
        try:
            coerced = _coerce(getattr(cfg, name), value)
        except (TypeError, ValueError) as e:
            errors[name] = f"invalid {EDITABLE_FIELDS[name].__name__}: {e}"
            continue
        if isinstance(coerced, (int, float)) and not isinstance(coerced, bool) and coerced < 0:
            errors[name] = "must be non-negative"
            continue
        setattr(cfg, name, coerced)
    return errors


settings = Settings()
