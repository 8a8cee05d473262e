"""Local storage for property images.

Uploaded images are written to ``<upload_dir>/properties`` before the create
request is validated, so every failure path after that point must discard the
file again. Deleting a property removes its image when the URL points into the
same directory. File removal is best-effort: errors are logged, never raised.
"""

import logging
import uuid
from dataclasses import dataclass
from pathlib import Path

from starlette.datastructures import UploadFile

from property_api.core.config import Settings
from property_api.core.exceptions import ValidationError

logger = logging.getLogger(__name__)

IMAGE_SUBDIR = "properties"
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".gif", ".webp"}
CHUNK_SIZE = 64 * 1024


@dataclass(frozen=True)
class StoredImage:
    """An image file written to local storage."""

    filename: str
    path: Path


class ImageStore:
    """Keeps uploaded image files in step with the properties that use them."""

    def __init__(
        self,
        upload_dir: Path,
        url_prefix: str = "/uploads",
        max_size: int = 5 * 1024 * 1024,
        allowed_extensions: set[str] | None = None,
    ) -> None:
        self.upload_dir = Path(upload_dir)
        self.url_prefix = "/" + url_prefix.strip("/")
        self.max_size = max_size
        self.allowed_extensions = allowed_extensions or ALLOWED_EXTENSIONS

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageStore":
        return cls(
            upload_dir=settings.UPLOAD_DIR,
            url_prefix=settings.UPLOAD_URL_PREFIX,
            max_size=settings.MAX_UPLOAD_SIZE,
        )

    @property
    def image_dir(self) -> Path:
        return self.upload_dir / IMAGE_SUBDIR

    @property
    def public_path(self) -> str:
        """URL path under which stored images are served."""
        return f"{self.url_prefix}/{IMAGE_SUBDIR}/"

    def ensure_dirs(self) -> None:
        self.image_dir.mkdir(parents=True, exist_ok=True)

    def save(self, upload: UploadFile) -> StoredImage:
        """Write an uploaded image to disk under a generated name."""
        extension = Path(upload.filename or "").suffix.lower()
        content_type = upload.content_type or ""
        if extension not in self.allowed_extensions or not content_type.startswith("image/"):
            raise ValidationError(
                "Validation error",
                errors=[{"field": "image", "message": "Only image files are allowed"}],
            )

        self.ensure_dirs()
        filename = f"image-{uuid.uuid4().hex}{extension}"
        path = self.image_dir / filename

        written = 0
        try:
            with path.open("wb") as out:
                while chunk := upload.file.read(CHUNK_SIZE):
                    written += len(chunk)
                    if written > self.max_size:
                        break
                    out.write(chunk)
        except BaseException:
            # A partly written file must not outlive the failed upload
            self.discard(StoredImage(filename=filename, path=path))
            raise

        if written > self.max_size:
            self.discard(StoredImage(filename=filename, path=path))
            raise ValidationError(
                "Validation error",
                errors=[
                    {
                        "field": "image",
                        "message": f"Image must be at most {self.max_size // (1024 * 1024)}MB",
                    }
                ],
            )

        logger.info("Stored uploaded image %s (%d bytes)", filename, written)
        return StoredImage(filename=filename, path=path)

    def public_url(self, base_url: str, filename: str) -> str:
        """Absolute URL for a stored image, e.g. http://host/uploads/properties/x.jpg."""
        return f"{base_url.rstrip('/')}{self.public_path}{filename}"

    def discard(self, image: StoredImage) -> None:
        """Remove an image whose property was never created."""
        try:
            image.path.unlink(missing_ok=True)
            logger.info("Discarded uploaded image %s", image.filename)
        except OSError as e:
            logger.warning("Could not discard uploaded image %s: %s", image.path, e)

    def path_for_url(self, image_url: str | None) -> Path | None:
        """Resolve a stored image URL to its file, or None for external URLs."""
        if not image_url or self.public_path not in image_url:
            return None

        filename = image_url.split(self.public_path, 1)[1].split("?", 1)[0].split("#", 1)[0]
        # Only bare filenames inside the image directory are ours to delete
        if not filename or Path(filename).name != filename or filename in (".", ".."):
            return None
        return self.image_dir / filename

    def remove_for_url(self, image_url: str | None) -> bool:
        """Delete the local file behind an image URL; True if a file was removed."""
        path = self.path_for_url(image_url)
        if path is None or not path.exists():
            return False

        try:
            path.unlink()
        except OSError as e:
            logger.warning("Could not delete image file %s: %s", path, e)
            return False

        logger.info("Deleted image file %s", path.name)
        return True


def resolve_upload(upload: UploadFile | str | None) -> UploadFile | None:
    """Treat missing, non-file and empty file parts as no upload."""
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None
    return upload
