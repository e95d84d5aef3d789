from pydantic_settings import BaseSettings

class Settings(BaseSettings):
    app_name: str = "Provably Fair Verifier API"

    # Crash multiplier cap applied by the outcome engine
    max_mult: int = 10000

    # Rate limiting for /api/verify (requests per window per client IP)
    rate_limit_per_min: int = 60
    rate_limit_window_sec: int = 60

    # Largest accepted request body, in bytes
    max_body_bytes: int = 10 * 1024

    # Logging settings
    log_level: str = "INFO"

    # Server settings
    host: str = "0.0.0.0"
    port: int = 8080

    class Config:
        env_file = ".env"
        env_file_encoding = 'utf-8'

settings = Settings()
