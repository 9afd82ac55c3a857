import piexif
from PIL import Image


def make_jpeg(path, capture_date=None):
    """Write a tiny JPEG, optionally with an EXIF DateTimeOriginal."""
    img = Image.new('RGB', (8, 8), color=(200, 120, 40))
    if capture_date:
        exif_dict = {'0th': {}, 'Exif': {piexif.ExifIFD.DateTimeOriginal: capture_date.encode('utf-8')},
                     'GPS': {}, '1st': {}, 'thumbnail': None}
        img.save(path, 'JPEG', exif=piexif.dump(exif_dict))
    else:
        img.save(path, 'JPEG')
    return path


def make_png(path):
    Image.new('RGB', (8, 8), color=(40, 120, 200)).save(path, 'PNG')
    return path


def read_capture_date(path):
    value = piexif.load(path)['Exif'].get(piexif.ExifIFD.DateTimeOriginal)
    return value.decode('utf-8') if value else None


def read_bytes(path):
    with open(path, 'rb') as f:
        return f.read()
