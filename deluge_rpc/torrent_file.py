"""
Torrent file reader for uploads through core.add_torrent_file.

Provides the TorrentFile class for reading a bencoded .torrent file from
disk, checking it is well formed, and producing the base64 payload the
daemon expects.

Custom exceptions:
- TorrentFileError: Base exception for all torrent file errors
- InvalidTorrentFileError: Raised when file is not valid bencode format
- MissingRequiredKeyError: Raised when required keys are missing
"""

import base64
import hashlib
import os

import bencodepy


class TorrentFileError(Exception):
    """Base exception for torrent file parsing errors."""
    pass


class InvalidTorrentFileError(TorrentFileError):
    """Raised when torrent file is not valid bencode format."""
    pass


class MissingRequiredKeyError(TorrentFileError):
    """Raised when torrent file is missing required keys."""
    pass


class TorrentFile:
    def __init__(self, torrent_path):
        self.path = torrent_path
        try:
            with open(torrent_path, 'rb') as f:
                self.content = f.read()
        except FileNotFoundError:
            raise TorrentFileError(f"Torrent file not found: {torrent_path}")
        except PermissionError:
            raise TorrentFileError(f"Permission denied reading torrent file: {torrent_path}")
        except OSError as e:
            raise TorrentFileError(f"Failed to read torrent file: {e}") from e

        try:
            data = bencodepy.decode(self.content)
        except bencodepy.DecodingError as e:
            raise InvalidTorrentFileError(f"Invalid bencode format: {e}") from e
        except Exception as e:
            raise InvalidTorrentFileError(f"Failed to decode torrent file: {e}") from e

        if not isinstance(data, dict):
            raise InvalidTorrentFileError("Torrent data is not a dictionary")
        if b'info' not in data:
            raise MissingRequiredKeyError("Torrent file missing required 'info' dictionary")

        self._raw_info = data[b'info']
        if not isinstance(self._raw_info, dict):
            raise InvalidTorrentFileError("'info' field is not a dictionary")
        if b'name' not in self._raw_info:
            raise MissingRequiredKeyError("Torrent info missing required 'name' key")

        self.is_multi_file = b'files' in self._raw_info

    @property
    def filename(self):
        return os.path.basename(self.path)

    @property
    def name(self):
        return self._raw_info[b'name'].decode('utf-8', errors='replace')

    def files(self):
        if self.is_multi_file:
            return [
                os.path.join(self.name, *(part.decode('utf-8', errors='replace') for part in file[b'path']))
                for file in self._raw_info[b'files']
            ]
        else:
            return [self.name]

    def size(self):
        if self.is_multi_file:
            return sum(file[b'length'] for file in self._raw_info[b'files'])
        else:
            return self._raw_info.get(b'length', 0)

    def info_hash(self):
        return hashlib.sha1(bencodepy.encode(self._raw_info)).hexdigest().upper()

    def b64encode(self):
        """Base64 text of the file contents, as core.add_torrent_file takes it."""
        return base64.b64encode(self.content).decode('ascii')
