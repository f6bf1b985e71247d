"""
Signed upload URLs for images.

Uses S3 when AWS credentials and a bucket are configured, otherwise
Supabase Storage.
"""

import logging
import mimetypes
import uuid
from typing import Dict, Optional

import boto3
from botocore.exceptions import BotoCoreError, ClientError
from supabase import Client

from app.config import Settings
from app.core.exceptions import IntegrationError, IntegrationUnavailableError

logger = logging.getLogger(__name__)

FALLBACK = "Paste an image URL instead of uploading"


class ObjectStorageService:
    def __init__(self, settings: Settings, supabase: Optional[Client] = None):
        self.settings = settings
        self.supabase = supabase
        self.s3_client = None
        if settings.s3_configured:
            self.s3_client = boto3.client(
                "s3",
                aws_access_key_id=settings.aws_access_key_id,
                aws_secret_access_key=settings.aws_secret_access_key,
                region_name=settings.aws_region
            )
            logger.info("S3 storage initialized successfully")
        else:
            logger.info("S3 credentials not fully configured, will use Supabase Storage")

    @property
    def configured(self) -> bool:
        return self.s3_client is not None or (
            self.supabase is not None and bool(self.settings.supabase_storage_bucket)
        )

    @staticmethod
    def object_path(team_id: str, content_type: str) -> str:
        extension = mimetypes.guess_extension(content_type) or ""
        return f"{team_id}/{uuid.uuid4().hex}{extension}"

    def create_upload_url(self, team_id: str, content_type: str) -> Dict[str, str]:
        if not self.configured:
            raise IntegrationUnavailableError("Object storage is not configured", fallback=FALLBACK)

        path = self.object_path(team_id, content_type)
        if self.s3_client:
            return {"upload_url": self._presign_s3(path, content_type), "object_path": path, "provider": "s3"}
        return {"upload_url": self._sign_supabase(path), "object_path": path, "provider": "supabase"}

    def _presign_s3(self, key: str, content_type: str) -> str:
        try:
            return self.s3_client.generate_presigned_url(
                "put_object",
                Params={"Bucket": self.settings.s3_bucket_name, "Key": key, "ContentType": content_type},
                ExpiresIn=self.settings.upload_url_ttl_seconds,
            )
        except (BotoCoreError, ClientError) as e:
            logger.error(f"Failed to presign S3 upload: {str(e)}")
            raise IntegrationError("Failed to create upload URL", fallback=FALLBACK) from e

    def _sign_supabase(self, path: str) -> str:
        try:
            result = self.supabase.storage.from_(self.settings.supabase_storage_bucket).create_signed_upload_url(path)
        except Exception as e:
            logger.error(f"Failed to sign Supabase Storage upload: {str(e)}")
            raise IntegrationError("Failed to create upload URL", fallback=FALLBACK) from e

        url = (result.get("signed_url") or result.get("signedUrl")) if isinstance(result, dict) else None
        if not url:
            raise IntegrationError("Storage did not return an upload URL", fallback=FALLBACK)
        return url
