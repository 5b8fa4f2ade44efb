"""Photo source and preview service."""
import io
import logging
from pathlib import Path

import toga
from PIL import Image, UnidentifiedImageError

IMAGE_FILE_TYPES = ['jpg', 'jpeg', 'png', 'heic', 'webp']


def make_thumbnail(image_data, max_size=100):
    """Build a small JPEG/PNG preview of a photo.

    Returns None when the bytes are not a readable image; previews are only
    for display and never replace the submitted photo.
    """
    if not image_data:
        return None
    try:
        img = Image.open(io.BytesIO(image_data))
        img.thumbnail((max_size, max_size), Image.Resampling.LANCZOS)
    except (UnidentifiedImageError, OSError) as e:
        logging.getLogger(__name__).warning(f"Could not build photo preview: {e}")
        return None

    save_format = img.format if img.format in ('PNG', 'WEBP') else 'JPEG'
    if save_format == 'JPEG' and img.mode in ('RGBA', 'P', 'LA'):
        img = img.convert('RGB')

    buffer = io.BytesIO()
    img.save(buffer, format=save_format, quality=85)
    return buffer.getvalue()


class PhotoService:
    """Collects photos from the device camera or gallery as raw bytes."""

    def __init__(self, app):
        self.app = app
        self.logger = logging.getLogger(self.__class__.__name__)

    async def take_photo(self):
        """Take one photo with the camera.

        Returns a list with the photo bytes, or an empty list when the agent
        cancels or the camera permission is refused.

        Raises:
            NotImplementedError: the platform has no camera support.
        """
        camera = self.app.camera
        if not camera.has_permission:
            granted = await camera.request_permission()
            if not granted:
                self.logger.warning("Camera permission denied")
                return []

        image = await camera.take_photo()
        if image is None:
            self.logger.info("Photo capture cancelled")
            return []
        return [image.data]

    async def pick_from_gallery(self, window):
        """Let the agent select one or more image files."""
        dialog = toga.OpenFileDialog(
            'Selecionar fotos',
            file_types=IMAGE_FILE_TYPES,
            multiple_select=True,
        )
        paths = await window.dialog(dialog)
        if not paths:
            return []
        return self.read_files(paths)

    def read_files(self, paths):
        photos = []
        for path in paths:
            try:
                photos.append(Path(path).read_bytes())
            except OSError as e:
                self.logger.warning(f"Failed to read photo {path}: {e}")
        return photos
