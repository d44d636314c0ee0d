from .services import decode_spreadsheet, load_upload, process_uploads, ACCEPTED_EXTENSIONS

__all__ = ['decode_spreadsheet', 'load_upload', 'process_uploads', 'ACCEPTED_EXTENSIONS']
