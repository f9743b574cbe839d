import base64
import hashlib
import os
import shutil
import tempfile
import unittest

import bencodepy

from deluge_rpc.torrent_file import (
    InvalidTorrentFileError,
    MissingRequiredKeyError,
    TorrentFile,
    TorrentFileError,
)


SINGLE_INFO = {
    b'name': b'debian-12.6.0-amd64-netinst.iso',
    b'length': 661651456,
    b'piece length': 262144,
    b'pieces': b'\x01' * 40,
}

MULTI_INFO = {
    b'name': b'Big Buck Bunny',
    b'files': [
        {b'length': 310380, b'path': [b'poster.jpg']},
        {b'length': 140, b'path': [b'Big Buck Bunny.en.srt']},
        {b'length': 276134947, b'path': [b'Big Buck Bunny.mp4']},
    ],
    b'piece length': 262144,
    b'pieces': b'\x02' * 20,
}


class TestTorrentFile(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.temp_dir = tempfile.mkdtemp()
        cls.single_path = cls._write("debian.torrent", bencodepy.encode({b'announce': b'http://bttracker.debian.org:6969/announce', b'info': SINGLE_INFO}))
        cls.multi_path = cls._write("bunny.torrent", bencodepy.encode({b'info': MULTI_INFO}))
        cls.single = TorrentFile(cls.single_path)
        cls.multi = TorrentFile(cls.multi_path)

    @classmethod
    def tearDownClass(cls):
        shutil.rmtree(cls.temp_dir)

    @classmethod
    def _write(cls, name, content):
        path = os.path.join(cls.temp_dir, name)
        with open(path, 'wb') as f:
            f.write(content)
        return path

    def test_name(self):
        self.assertEqual(self.single.name, "debian-12.6.0-amd64-netinst.iso")

    def test_filename(self):
        self.assertEqual(self.single.filename, "debian.torrent")

    def test_is_multi_file(self):
        self.assertFalse(self.single.is_multi_file)
        self.assertTrue(self.multi.is_multi_file)

    def test_files(self):
        self.assertEqual(self.single.files(), ["debian-12.6.0-amd64-netinst.iso"])
        self.assertEqual(self.multi.files()[2], os.path.join("Big Buck Bunny", "Big Buck Bunny.mp4"))

    def test_size(self):
        self.assertEqual(self.single.size(), 661651456)
        self.assertEqual(self.multi.size(), 310380 + 140 + 276134947)

    def test_info_hash(self):
        expected = hashlib.sha1(bencodepy.encode(SINGLE_INFO)).hexdigest().upper()
        self.assertEqual(self.single.info_hash(), expected)
        self.assertEqual(len(self.single.info_hash()), 40)

    def test_b64encode(self):
        with open(self.single_path, 'rb') as f:
            self.assertEqual(base64.b64decode(self.single.b64encode()), f.read())

    def test_missing_file(self):
        with self.assertRaises(TorrentFileError):
            TorrentFile(os.path.join(self.temp_dir, "missing.torrent"))

    def test_invalid_bencode(self):
        path = self._write("garbage.torrent", b"<html>404</html>")
        with self.assertRaises(InvalidTorrentFileError):
            TorrentFile(path)

    def test_not_a_dictionary(self):
        path = self._write("list.torrent", bencodepy.encode([b'info']))
        with self.assertRaises(InvalidTorrentFileError):
            TorrentFile(path)

    def test_missing_info(self):
        path = self._write("noinfo.torrent", bencodepy.encode({b'announce': b'http://tracker'}))
        with self.assertRaises(MissingRequiredKeyError):
            TorrentFile(path)

    def test_info_not_a_dictionary(self):
        path = self._write("badinfo.torrent", bencodepy.encode({b'info': b'nope'}))
        with self.assertRaises(InvalidTorrentFileError):
            TorrentFile(path)

    def test_missing_name(self):
        path = self._write("noname.torrent", bencodepy.encode({b'info': {b'length': 1}}))
        with self.assertRaises(MissingRequiredKeyError):
            TorrentFile(path)


if __name__ == '__main__':
    unittest.main()
