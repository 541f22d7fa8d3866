# rockschool/core/config.py
"""Application configuration using Pydantic."""
from pydantic_settings import BaseSettings
from typing import List

class Settings(BaseSettings):
    database_url: str = 'sqlite+aiosqlite:///./rockschool.db'

    app_name: str = 'Rock School API'
    app_version: str = '1.0.0'
    environment: str = 'development'
    log_level: str = 'info'
    sql_echo: bool = False
    allowed_origins: List[str] = ['*']

    model_config = {
        'env_file': '.env',
        'extra': 'ignore'
    }

settings = Settings()
