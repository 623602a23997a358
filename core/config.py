"""
Application configuration using Pydantic Settings
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    """Pipeline settings with environment variable support"""
    
    # Source archive
    DUMP_URL: str = "https://fiber-challenges.s3.amazonaws.com/dump.tar.gz"
    DOWNLOAD_PATH: str = "tmp/dump.tar.gz"
    EXTRACT_PATH: str = "tmp/extracted"
    
    # CSV files, relative to EXTRACT_PATH
    ORGANIZATIONS_CSV: str = "dump/organizations.csv"
    CUSTOMERS_CSV: str = "dump/customers.csv"
    
    # Database
    DATABASE_URL: str = "sqlite+aiosqlite:///out/database.sqlite"
    DB_POOL_SIZE: int = 10
    
    # Environment
    ENVIRONMENT: str = "development"
    LOG_LEVEL: str = "INFO"
    
    # ETL Configuration
    BATCH_SIZE: int = 100
    HTTP_TIMEOUT: float = 30.0
    
    class Config:
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"


settings = Settings()
