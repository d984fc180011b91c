import os
from dataclasses import dataclass
from typing import Mapping, Optional

KEY_NAME_ENV = "TF_KEY_NAME"
STATE_ENV = "TF_STATE"
DEFAULT_STATE_FILE = "terraform.tfstate"


@dataclass
class InventoryConfig:
    key_name: Optional[str] = None     # forces a single address attribute
    state_path: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "InventoryConfig":
        env = os.environ if environ is None else environ
        return cls(
            key_name=env.get(KEY_NAME_ENV) or None,
            state_path=env.get(STATE_ENV) or None,
        )
