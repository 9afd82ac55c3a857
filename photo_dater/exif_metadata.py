"""
Read and write the EXIF capture date (DateTimeOriginal) of image files.

Presence is checked with piexif for JPEG, TIFF and WebP, with Pillow for PNG and with
pyheif for HEIC (install the 'heic' extra). Writing is done by one of two backends:

  PiexifWriter    embeds the date with piexif / Pillow, JPEG, WebP and PNG only
  ExiftoolWriter  shells out to exiftool, which supports nearly every image format

Both overwrite the file in place and keep no backup.
"""

import os
import shutil
import logging
import subprocess

import piexif
from PIL import Image

from .errors import UnreadableMetadata, WriteFailed

logger = logging.getLogger(__name__)

CAPTURE_DATE_TAG = piexif.ExifIFD.DateTimeOriginal
EXIF_IFD_POINTER = piexif.ImageIFD.ExifTag

HEIC_EXTENSIONS = ['.heic', '.heif']
PNG_EXTENSIONS = ['.png']
PIEXIF_WRITABLE_EXTENSIONS = ['.jpg', '.jpeg', '.jpe', '.webp']


def _extension(file_path):
    return os.path.splitext(file_path)[1].lower()


def _load_heic_exif(file_path):
    """Return the piexif dictionary of the Exif block embedded in a HEIC file."""
    try:
        import pyheif
    except ImportError as e:
        raise UnreadableMetadata(file_path, "HEIC support needs pyheif, install photo-dater[heic]") from e

    heif_file = pyheif.read(file_path)
    for metadata in heif_file.metadata or []:
        if metadata['type'] == 'Exif':
            return piexif.load(metadata['data'])
    return {'Exif': {}}


def _png_capture_date(file_path):
    with Image.open(file_path) as img:
        img.load()
        exif = img.getexif()
        return exif.get(CAPTURE_DATE_TAG) or exif.get_ifd(EXIF_IFD_POINTER).get(CAPTURE_DATE_TAG)


def has_capture_date(file_path):
    """Return True if the file's primary image already carries an EXIF DateTimeOriginal."""
    ext = _extension(file_path)
    try:
        if ext in PNG_EXTENSIONS:
            value = _png_capture_date(file_path)
        else:
            if ext in HEIC_EXTENSIONS:
                exif_dict = _load_heic_exif(file_path)
            else:
                exif_dict = piexif.load(file_path)
            value = (exif_dict.get('Exif') or {}).get(CAPTURE_DATE_TAG)
    except UnreadableMetadata:
        raise
    except Exception as e:
        raise UnreadableMetadata(file_path, e) from e

    logger.debug(f"DateTimeOriginal of {file_path}: {value!r}")
    return bool(value)


class PiexifWriter:
    """Write DateTimeOriginal with piexif (JPEG, WebP) or Pillow (PNG)."""

    name = 'piexif'

    def write(self, file_path, timestamp):
        ext = _extension(file_path)
        try:
            if ext in PNG_EXTENSIONS:
                self._write_png(file_path, timestamp)
            elif ext in PIEXIF_WRITABLE_EXTENSIONS:
                self._write_exif(file_path, timestamp)
            else:
                raise WriteFailed(file_path, f"unsupported file format '{ext}' for the piexif backend")
        except WriteFailed:
            raise
        except Exception as e:
            raise WriteFailed(file_path, e) from e

        logger.debug(f"Set DateTimeOriginal of {file_path} to {timestamp} with piexif")

    def _write_exif(self, file_path, timestamp):
        exif_dict = piexif.load(file_path)
        exif_dict['Exif'][CAPTURE_DATE_TAG] = timestamp.encode('ascii')
        exif_bytes = piexif.dump(exif_dict)
        piexif.insert(exif_bytes, file_path)

    def _write_png(self, file_path, timestamp):
        with Image.open(file_path) as img:
            img.load()
            # Pillow keeps the raw eXIf chunk with its 'Exif' header, which piexif can load
            existing = img.info.get('exif')
            exif_dict = piexif.load(existing) if existing else {'0th': {}, 'Exif': {}, 'GPS': {}, '1st': {}, 'thumbnail': None}
            exif_dict['Exif'][CAPTURE_DATE_TAG] = timestamp.encode('ascii')
            img.save(file_path, format='PNG', exif=piexif.dump(exif_dict))


class ExiftoolWriter:
    """Write DateTimeOriginal by running the external exiftool utility."""

    name = 'exiftool'

    def __init__(self, executable=None):
        self.executable = executable or shutil.which('exiftool') or 'exiftool'

    def write(self, file_path, timestamp):
        cmd = [
            self.executable,
            '-overwrite_original',
            '-q',
            f'-DateTimeOriginal={timestamp}',
            file_path,
        ]
        logger.debug(f"Running {' '.join(cmd)}")
        try:
            result = subprocess.run(cmd, capture_output=True, text=True, check=False)
        except OSError as e:
            raise WriteFailed(file_path, f"cannot run {self.executable}: {e}") from e

        if result.returncode != 0:
            error = result.stderr.strip() or f"{self.executable} exited with status {result.returncode}"
            raise WriteFailed(file_path, error)


WRITERS = {
    PiexifWriter.name: PiexifWriter,
    ExiftoolWriter.name: ExiftoolWriter,
}


def get_writer(name):
    """Instantiate the metadata writer registered under name."""
    try:
        return WRITERS[name]()
    except KeyError:
        raise ValueError(f"unknown metadata backend '{name}', choose from {', '.join(WRITERS)}") from None
