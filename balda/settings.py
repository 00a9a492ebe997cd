import os
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Settings:
    BASE_DIR: Path = field(default_factory=lambda: Path(__file__).resolve().parent.parent)

    DICTIONARY_PATH: Path = field(init=False)

    MIN_WORD_LENGTH: int = 2

    BOARD_SIZE: int = 5
    SEED_WORD: str = "БАЛДА"

    TERMINAL_BONUS: int = 2
    ILLEGAL_MOVE_POLICY: str = "retry"
    MAX_RETRIES: int = 3
    ADVERSARIAL_WORK_LIMIT: int = 250_000
    RANDOM_SEED: int = 0

    DEBUG: bool = False
    PORT: int = 10001

    def __post_init__(self):
        self.DICTIONARY_PATH = self.BASE_DIR / "dictionary.txt"

        # Override from environment
        for fld in self.__dataclass_fields__:
            env_val = os.environ.get(fld)
            if env_val is not None:
                current = getattr(self, fld)
                if isinstance(current, bool):
                    setattr(self, fld, env_val.lower() in ("1", "true", "yes"))
                elif isinstance(current, int):
                    setattr(self, fld, int(env_val))
                elif isinstance(current, Path):
                    setattr(self, fld, Path(env_val))
                else:
                    setattr(self, fld, env_val)


# Fields that may be changed at runtime through update_settings()
EDITABLE_FIELDS: dict[str, type] = {
    "BOARD_SIZE": int,
    "SEED_WORD": str,
    "TERMINAL_BONUS": int,
    "ILLEGAL_MOVE_POLICY": str,
    "MAX_RETRIES": int,
    "ADVERSARIAL_WORK_LIMIT": int,
    "DEBUG": bool,
}

ILLEGAL_MOVE_POLICIES = ("retry", "forfeit")


def get_editable_settings(cfg: Settings) -> dict:
    return {name: getattr(cfg, name) for name in EDITABLE_FIELDS}


def _coerce(name: str, value, kind: type):
    if kind is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in ("1", "true", "yes")
        raise ValueError(f"expected bool, got {value!r}")
    if kind is int:
        if isinstance(value, bool):
            raise ValueError(f"expected int, got {value!r}")
        coerced = int(value)
        if coerced < 0:
            raise ValueError("must not be negative")
        return coerced
    coerced = str(value)
    if name == "ILLEGAL_MOVE_POLICY" and coerced not in ILLEGAL_MOVE_POLICIES:
        raise ValueError(f"must be one of {', '.join(ILLEGAL_MOVE_POLICIES)}")
    return coerced


def update_settings(cfg: Settings, **changes) -> dict[str, str]:
    """Apply changes to editable fields. Valid fields are applied even if others fail.

    Returns a mapping of field name to error message for every rejected change.
    """
    errors: dict[str, str] = {}
    for name, value in changes.items():
        kind = EDITABLE_FIELDS.get(name)
        if kind is None:
            if hasattr(cfg, name):
                errors[name] = "field is not editable"
            else:
                errors[name] = "unknown field"
            continue
        try:
            setattr(cfg, name, _coerce(name, value, kind))
        except (TypeError, ValueError) as e:
            errors[name] = str(e)
    return errors


settings = Settings()
