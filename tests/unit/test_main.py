import io
import json
import os
import tempfile
import unittest
from unittest.mock import patch

from bdecode import main


class TestMain(unittest.TestCase):
    def setUp(self):
        fd, self.path = tempfile.mkstemp(suffix=".torrent")
        os.close(fd)
        logger_patcher = patch("bdecode.main.setup_logger")
        logger_patcher.start()
        self.addCleanup(logger_patcher.stop)

    def tearDown(self):
        os.remove(self.path)

    def _write(self, data: bytes):
        with open(self.path, "wb") as f:
            f.write(data)

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_decode_file(self, mock_stdout):
        self._write(b"d4:spaml1:a1:bee")

        status = main.main(["decode", self.path])

        self.assertEqual(status, 0)
        output = json.loads(mock_stdout.getvalue())
        self.assertEqual(len(output), 1)
        self.assertEqual(output[0]["entries"][0]["key"]["text"], "spam")

    @patch("sys.stderr", new_callable=io.StringIO)
    def test_decode_malformed_file(self, mock_stderr):
        self._write(b"i03e")

        status = main.main(["decode", self.path])

        self.assertEqual(status, 1)
        error = json.loads(mock_stderr.getvalue())
        self.assertEqual(error, {"error": "InvalidIntegerEncoding", "offset": 1, "reason": "leading zero in integer"})

    @patch("sys.stderr", new_callable=io.StringIO)
    def test_decode_missing_file(self, mock_stderr):
        status = main.main(["decode", self.path + ".missing"])

        self.assertEqual(status, 2)
        self.assertIn("cannot read", mock_stderr.getvalue())

    @patch("sys.stdout", new_callable=io.StringIO)
    def test_max_depth_option(self, mock_stdout):
        self._write(b"lllleeee")

        with patch("sys.stderr", new_callable=io.StringIO) as mock_stderr:
            status = main.main(["decode", "--max-depth", "3", self.path])

        self.assertEqual(status, 1)
        self.assertEqual(json.loads(mock_stderr.getvalue())["error"], "NestingTooDeep")

    @patch("bdecode.main.uvicorn.run")
    def test_serve(self, mock_run):
        status = main.main(["serve", "--port", "9000"])

        self.assertEqual(status, 0)
        mock_run.assert_called_once()
        args, kwargs = mock_run.call_args
        self.assertIs(args[0], main.fastapi_server.app)
        self.assertEqual(kwargs["host"], main.DEFAULT_HOST)
        self.assertEqual(kwargs["port"], 9000)


class TestSetupLogger(unittest.TestCase):
    def test_verbose(self):
        with patch("bdecode.main.logging.basicConfig") as mock_config:
            main.setup_logger(True)
        mock_config.assert_called_once_with(level=main.logging.DEBUG)

    def test_quiet(self):
        with patch("bdecode.main.logging.basicConfig") as mock_config:
            main.setup_logger(False)
        mock_config.assert_called_once_with(level=main.logging.INFO)
