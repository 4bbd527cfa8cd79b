"""Configuration management for the interface design catalog."""
from pydantic_settings import BaseSettings
from typing import List, Union
from pydantic import field_validator


class Settings(BaseSettings):
    """Application settings."""

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "Interface Design Catalog"

    # CORS Settings
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["http://localhost:3000"]

    @field_validator('BACKEND_CORS_ORIGINS', mode='before')
    @classmethod
    def assemble_cors_origins(cls, v: Union[str, List[str]]) -> Union[List[str], str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',')]
        elif isinstance(v, (list, str)):
            return v
        raise ValueError(v)

    # Catalog Locations
    INSTANCES_ROOT: str = "./instances"
    TEMPLATES_ROOT: str = "./templates"
    DEFAULT_TEMPLATE: str = "bsi-tr-03153-03151"
    INTERFACE_DESIGN_FOLDER: str = "interfacedesign"

    # Language Settings (order is the fallback priority)
    SUPPORTED_LANGUAGES: Union[List[str], str] = ["de", "en"]
    DEFAULT_LANGUAGE: str = "de"

    @field_validator('SUPPORTED_LANGUAGES', mode='before')
    @classmethod
    def assemble_languages(cls, v: Union[str, List[str]]) -> List[str]:
        if isinstance(v, str) and not v.startswith('['):
            return [i.strip() for i in v.split(',') if i.strip()]
        return v

    # Parsing Settings
    MAX_PARSE_WORKERS: int = 10

    # Server Settings
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 3001

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
