from pydantic_settings import BaseSettings


class Settings(BaseSettings):

    HOST: str = "0.0.0.0"
    PORT: int = 3000

    # Upstream APIs
    SEARCH_API_URL: str = "https://www.jiosaavn.com/api.php"
    DETAIL_API_URL: str = "https://saavn.dev/api/songs"
    UPSTREAM_TIMEOUT: float = 5.0  # seconds

    LOG_LEVEL: str = "INFO"

    class Config:
        env_file = ".env"
        extra = "allow"


# Global settings instance, only read by the process entry point
settings = Settings()
