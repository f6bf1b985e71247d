from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional, List


class Settings(BaseSettings):
    # Supabase
    supabase_url: str = ""
    supabase_key: str = ""
    supabase_service_role_key: Optional[str] = None  # Required for storage signed URLs and admin lookups
    supabase_storage_bucket: str = "shoot-images"

    # AWS S3 (optional; when set, uploads are presigned against S3 instead of Supabase Storage)
    aws_access_key_id: Optional[str] = None
    aws_secret_access_key: Optional[str] = None
    aws_region: str = "us-east-1"
    s3_bucket_name: Optional[str] = None

    # Google (service account JSON as a string)
    google_service_account: Optional[str] = None
    google_calendar_id: str = "primary"
    google_maps_api_key: Optional[str] = None

    # Resend
    resend_api_key: Optional[str] = None
    resend_from_email: Optional[str] = None

    integration_timeout_seconds: float = 10.0
    upload_url_ttl_seconds: int = 900

    # App
    app_name: str = "shootplanner-backend"
    debug: bool = False
    environment: str = "development"  # development | staging | production
    log_level: str = "INFO"
    cors_origins: str = "http://localhost:3000,http://localhost:5173,http://127.0.0.1:3000,http://127.0.0.1:5173"
    rate_limit: str = "100/minute"  # slowapi format, e.g. "100/minute"
    auth_cookie_secure: bool = False

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @property
    def calendar_configured(self) -> bool:
        return bool(self.google_service_account)

    @property
    def docs_configured(self) -> bool:
        return bool(self.google_service_account)

    @property
    def email_configured(self) -> bool:
        return bool(self.resend_api_key and self.resend_from_email)

    @property
    def places_configured(self) -> bool:
        return bool(self.google_maps_api_key)

    @property
    def s3_configured(self) -> bool:
        return all([self.aws_access_key_id, self.aws_secret_access_key, self.s3_bucket_name])

    def get_cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        env_prefix="",  # No prefix needed
        extra="ignore"
    )


settings = Settings()
