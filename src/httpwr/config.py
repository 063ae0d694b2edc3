from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """httpwr settings loaded from environment variables.

    Variables are prefixed with HTTPWR_ (e.g. HTTPWR_UNCLASSIFIED_STATUS=503).
    A .env file is read when present. Values are looked up per request, so
    tests and host applications may adjust ``settings`` at runtime.
    """

    # Status used for errors that carry no status of their own
    unclassified_status: int = 500
    # When False, unclassified errors reach clients as "internal server error"
    # and their real message only goes to the logs
    expose_unclassified_errors: bool = True

    model_config = SettingsConfigDict(
        env_prefix="HTTPWR_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()
