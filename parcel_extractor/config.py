import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv


def load_environment():
    """Load .env from the working directory or the home directory"""
    for env_path in [".env", os.path.expanduser("~/.env")]:
        if os.path.exists(env_path):
            load_dotenv(dotenv_path=env_path)
            break
    else:
        load_dotenv()  # fallback to default behavior


@dataclass(frozen=True)
class Settings:
    data_dir: str = "data"
    owners_dir: str = "owners"
    log_dir: str = "logs"
    log_level: str = "INFO"
    county: Optional[str] = None

    @classmethod
    def from_env(cls, load_dotenv_files=True):
        if load_dotenv_files:
            load_environment()
        return cls(
            data_dir=os.getenv("PARCEL_DATA_DIR", "data"),
            owners_dir=os.getenv("PARCEL_OWNERS_DIR", "owners"),
            log_dir=os.getenv("PARCEL_LOG_DIR", "logs"),
            log_level=os.getenv("PARCEL_LOG_LEVEL", "INFO").upper(),
            county=os.getenv("PARCEL_COUNTY") or None,
        )
