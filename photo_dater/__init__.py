# photo_dater/__init__.py

from .errors import PhotoDaterError, NoDateFound, InvalidDate, InvalidFilenameEncoding, UnreadableMetadata, WriteFailed, InvalidRoot
from .filename_date import PartialDate, infer_date, format_timestamp
from .exif_metadata import has_capture_date, PiexifWriter, ExiftoolWriter, get_writer
from .file_walker import walk_photos, is_ignored
from .photo_date_tagger import Outcome, FileOutcome, RunSummary, tag_file, tag_directory, main
