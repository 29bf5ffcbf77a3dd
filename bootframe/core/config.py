"""
Configuration for bootframe itself
These settings control how the framework finds files and logs, not the
application configuration it assembles
"""
import os
from typing import Optional
from dotenv import load_dotenv

load_dotenv()


class Config:
    """Framework settings, read from the environment (and .env) at import"""
    
    # Debug marker (set BOOTFRAME_DEBUG=true to run as Development)
    DEBUG: bool = os.getenv("BOOTFRAME_DEBUG", "").lower() in ("true", "1", "yes")
    
    # Settings files: <SETTINGS_FILE>.json and <SETTINGS_FILE>.<Environment>.json
    SETTINGS_FILE: str = os.getenv("BOOTFRAME_SETTINGS_FILE", "appsettings")
    
    # Directory holding the settings files (None = working directory at assembly time)
    SETTINGS_PATH: Optional[str] = os.getenv("BOOTFRAME_SETTINGS_PATH") or None
    
    # Only environment variables starting with this prefix are loaded (prefix is stripped)
    ENV_PREFIX: str = os.getenv("BOOTFRAME_ENV_PREFIX", "")
    
    # Default application logger
    LOG_FILE_KEY: str = "Logging:LogFileLocation"
    DEFAULT_LOG_FILE: str = os.getenv("BOOTFRAME_LOG_FILE", os.path.join("logs", "app.log"))
    LOG_TEMPLATE: str = "{timestamp} [{level}] {message}"
    APP_LOGGER_NAME: str = "bootframe.app"
    
    @classmethod
    def settings_file_name(cls, environment_label: Optional[str] = None) -> str:
        """File name of the base settings file, or of the environment-specific one"""
        if environment_label:
            return f"{cls.SETTINGS_FILE}.{environment_label}.json"
        return f"{cls.SETTINGS_FILE}.json"
