from pathlib import Path

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}

    rates_file: Path = Path("data/rates.json")
    offers_file: Path = Path("data/offers.json")
    log_level: str = "INFO"
