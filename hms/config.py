"""
Application configuration settings loaded from environment variables.
Uses pydantic_settings for validation and type conversion.
"""
from pydantic_settings import BaseSettings
from typing import List, Optional

class Settings(BaseSettings):
    """
    Application settings class with environment variable validation.
    
    Attributes:
        database_url: SQLAlchemy connection string
        secret_key: Secret key for signing bearer tokens
        algorithm: HMAC algorithm used for token signing (HS256, HS384 or HS512)
        access_token_expire_minutes: Access token lifetime in minutes
        bcrypt_rounds: Cost factor for password hashing
        password_min_length: Minimum accepted password length
        log_level: Root logging level
        cors_origins: Browser origins allowed by the CORS middleware
        
        # Bootstrap admin settings (optional)
        bootstrap_admin_email: Optional admin email for first admin creation
        bootstrap_admin_password: Optional admin password for first admin creation
        bootstrap_admin_name: Display name for the bootstrap admin
    """
    # Database settings
    database_url: str = "sqlite:///./hms.db"
    
    # Token settings
    secret_key: str
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24
    
    # Password settings
    bcrypt_rounds: int = 12
    password_min_length: int = 8
    
    log_level: str = "INFO"
    cors_origins: List[str] = ["http://localhost:5173"]
    
    # Bootstrap admin settings (optional - only used for first admin creation)
    bootstrap_admin_email: Optional[str] = None
    bootstrap_admin_password: Optional[str] = None
    bootstrap_admin_name: str = "System Administrator"

    class Config:
        """Configuration for environment variables loading"""
        env_file = ".env"
        case_sensitive = False

# Create settings instance
settings = Settings()
