"""
Deluge Web JSON-RPC client for managing torrents.

Provides the DelugeClient class, which wraps the core.* remote procedures
of the Deluge Web API as typed methods. Parameters are sent positionally in
the order each procedure expects, and every result is checked against the
shape its procedure returns before it is handed back; a mismatch raises
UnexpectedResultShape rather than being coerced.

Usage:
    from deluge_rpc import DelugeClient

    with DelugeClient("http://localhost:8112/json", "deluge") as client:
        for torrent_id in client.get_session_state():
            print(client.get_torrent_status(torrent_id)["name"])
"""

from typing import Any, Dict, List, Optional

from .config import Config
from .exceptions import UnexpectedResultShape
from .logger import logger
from .session import DelugeSession
from .torrent_file import TorrentFile


DELUGE_URL = Config.DELUGE_URL
DELUGE_PASSWORD = Config.DELUGE_PASSWORD
DELUGE_TIMEOUT = Config.DELUGE_TIMEOUT


def as_string_list(method: str, result: Any) -> List[str]:
    if not isinstance(result, list) or not all(isinstance(item, str) for item in result):
        raise UnexpectedResultShape(method, "list of strings", result)
    return list(result)


def as_mapping(method: str, result: Any) -> Dict[str, Any]:
    if not isinstance(result, dict):
        raise UnexpectedResultShape(method, "mapping", result)
    return result


def as_string(method: str, result: Any) -> str:
    if not isinstance(result, str):
        raise UnexpectedResultShape(method, "string", result)
    return result


def as_bool(method: str, result: Any) -> bool:
    if not isinstance(result, bool):
        raise UnexpectedResultShape(method, "boolean", result)
    return result


class DelugeClient:
    def __init__(
        self,
        url: str = DELUGE_URL,
        password: str = DELUGE_PASSWORD,
        timeout: Optional[float] = DELUGE_TIMEOUT
    ):
        self.url = url
        self.session = DelugeSession(url, password, timeout=timeout)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

    def close(self):
        self.session.close()

    def _call(self, method: str, params: List[Any]) -> Any:
        return self.session.invoke(method, params).result

    def get_session_state(self) -> List[str]:
        """Ids (info hashes) of all torrents in the session."""
        method = "core.get_session_state"
        return as_string_list(method, self._call(method, []))

    def get_torrent_status(self, torrent_id: str) -> Dict[str, Any]:
        """Every status field of one torrent, keyed by field name."""
        method = "core.get_torrent_status"
        return as_mapping(method, self._call(method, [torrent_id, []]))

    def get_torrents_status(self) -> Dict[str, Any]:
        """Status of every torrent in the session, keyed by torrent id."""
        method = "core.get_torrents_status"
        return as_mapping(method, self._call(method, [{}, []]))

    def add_torrent_file(self, filename: str, filedump: str, options: Optional[Dict[str, Any]] = None) -> str:
        """
        Add a torrent from the contents of a .torrent file.

        Args:
            filename: Name of the original .torrent file
            filedump: Base64 encoded contents of the file
            options: Torrent options to set (see the Deluge documentation)

        Returns:
            Id of the new torrent
        """
        method = "core.add_torrent_file"
        return as_string(method, self._call(method, [filename, filedump, options or {}]))

    def add_torrent_magnet(self, uri: str, options: Optional[Dict[str, Any]] = None) -> str:
        """
        Add a torrent from a magnet link.

        Args:
            uri: Magnet URI
            options: Torrent options to set (see the Deluge documentation)

        Returns:
            Id of the new torrent
        """
        method = "core.add_torrent_magnet"
        return as_string(method, self._call(method, [uri, options or {}]))

    def add_torrent_url(self, url: str, options: Optional[Dict[str, Any]] = None) -> str:
        """
        Add a torrent from a URL to a .torrent file. The daemon does the download.

        Args:
            url: HTTP/HTTPS URL to a .torrent file
            options: Torrent options to set (see the Deluge documentation)

        Returns:
            Id of the new torrent
        """
        method = "core.add_torrent_url"
        return as_string(method, self._call(method, [url, options or {}]))

    def add_torrent_path(self, path: str, options: Optional[Dict[str, Any]] = None) -> str:
        """
        Add a torrent from a local .torrent file.

        Raises:
            TorrentFileError: The file cannot be read or is not a valid torrent
        """
        tf = TorrentFile(path)
        logger.debug(
            f"Uploading {tf.filename}: {tf.name}, {len(tf.files())} file(s), "
            f"{tf.size()} bytes ({tf.info_hash()})"
        )
        return self.add_torrent_file(tf.filename, tf.b64encode(), options)

    def remove_torrent(self, torrent_id: str, remove_data: bool = False) -> bool:
        """
        Remove a torrent from the session.

        Args:
            torrent_id: Id (info hash) of the torrent
            remove_data: Also delete the downloaded data

        Returns:
            True if the daemon removed the torrent
        """
        method = "core.remove_torrent"
        return as_bool(method, self._call(method, [torrent_id, remove_data]))
