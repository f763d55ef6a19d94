from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # Required from environment (.env / deployment secrets)
    database_url: str
    secret_key: str
    algorithm: str = "HS256"
    app_env: str = "development"  # development, staging, production

    # Cookie-backed server-side sessions
    session_expire_minutes: int = 60 * 24  # 24 hours
    session_cookie_name: str = "jobtracker_sid"
    session_cookie_secure: bool = False  # set true behind HTTPS

    # CORS origins as comma-separated values
    # Example: "https://tracker.example.com,http://localhost:3000"
    cors_allow_origins: str = "http://localhost:3000"

    log_level: str = "INFO"  # DEBUG, INFO, WARNING, ERROR

    # Upcoming-action notification window, in whole days after today
    upcoming_window_days: int = 3

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"


settings = Settings()
