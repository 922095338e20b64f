"""
Illustrative image upload flow.

Validates the whole batch first, then uploads each image to Cloudinary and
upserts its URL under a category label.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import asyncpg

from core import cloudinary
from core.errors import ObjectStorageError, PersistenceError, ValidationError
from core.uploads import validate_extension

from . import repository

MAX_IMAGES_PER_REQUEST = 10
ALLOWED_EXTENSIONS = {".jpg", ".jpeg", ".png", ".webp"}
ALLOWED_FORMATS = ["jpg", "jpeg", "png", "webp"]
UPLOAD_TRANSFORMATION = "c_limit,w_800,h_800"
DEFAULT_LABEL = "Elemento {n}"

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    filename: str
    data: bytes


@dataclass(frozen=True)
class IllustrativeImage:
    category: str
    url: str


def category_label(index: int, labels: list[str] | None = None) -> str:
    """
    Caller label at the same position, else "Elemento N" (1-based); lower-cased.
    """
    label = ""
    if labels and index < len(labels):
        label = (labels[index] or "").strip()
    if not label:
        label = DEFAULT_LABEL.format(n=index + 1)
    return label.lower()


def validate_batch(filenames: list[str]) -> None:
    if not filenames:
        raise ValidationError("No se recibieron imágenes.")
    if len(filenames) > MAX_IMAGES_PER_REQUEST:
        raise ValidationError(f"Se permiten como máximo {MAX_IMAGES_PER_REQUEST} imágenes por solicitud.")
    for filename in filenames:
        validate_extension(
            filename,
            ALLOWED_EXTENSIONS,
            message="Solo se permiten imágenes (.jpg, .jpeg, .png, .webp)",
        )


async def upload_images(
    pool: asyncpg.Pool,
    images: list[UploadedImage],
    labels: list[str] | None = None,
    *,
    credentials: cloudinary.CloudinaryCredentials | None = None,
) -> list[IllustrativeImage]:
    validate_batch([image.filename for image in images])
    credentials = credentials or cloudinary.credentials_from_env()
    folder = cloudinary.upload_folder()

    saved: list[IllustrativeImage] = []
    for i, image in enumerate(images):
        category = category_label(i, labels)
        try:
            url = await cloudinary.upload_image(
                credentials=credentials,
                filename=image.filename,
                data=image.data,
                folder=folder,
                allowed_formats=ALLOWED_FORMATS,
                transformation=UPLOAD_TRANSFORMATION,
            )
        except cloudinary.CloudinaryError as exc:
            raise ObjectStorageError("Error al subir imágenes ilustrativas.") from exc

        try:
            await repository.upsert_image(pool, category=category, url=url)
        except (asyncpg.PostgresError, asyncpg.InterfaceError, OSError) as exc:
            raise PersistenceError("Error al guardar imágenes ilustrativas.") from exc

        logger.info("image_saved category=%s filename=%s", category, image.filename)
        saved.append(IllustrativeImage(category=category, url=url))

    return saved
