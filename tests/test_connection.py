"""Tests for the HTTP and replay transports."""

from unittest.mock import MagicMock

import pytest
import requests

from snapmon.connection import HttpTransport
from snapmon.connection.replay import ReplayTransport
from snapmon.errors import TransportError

BASE_URL = "http://switch:8080/public/v1/"


class TestHttpTransport:
    def test_returns_raw_body(self):
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=200, content=b'{"Objects": []}')
        transport = HttpTransport(session=session, timeout=5)

        assert transport.fetch(BASE_URL + "state/psus") == b'{"Objects": []}'
        session.get.assert_called_once_with(BASE_URL + "state/psus", timeout=5)

    def test_error_status_still_returns_body(self):
        session = MagicMock()
        session.get.return_value = MagicMock(status_code=500, content=b'Internal Server Error')
        transport = HttpTransport(session=session)

        assert transport.fetch(BASE_URL + "state/psus") == b'Internal Server Error'

    def test_connection_failure(self):
        session = MagicMock()
        session.get.side_effect = requests.exceptions.ConnectionError("refused")
        transport = HttpTransport(session=session)

        with pytest.raises(TransportError) as excinfo:
            transport.fetch(BASE_URL + "state/psus")
        assert excinfo.value.url == BASE_URL + "state/psus"
        assert "refused" in excinfo.value.reason

    def test_malformed_url(self):
        transport = HttpTransport()
        with pytest.raises(TransportError):
            transport.fetch("not a url")

    def test_close_closes_session(self):
        session = MagicMock()
        HttpTransport(session=session).close()
        session.close.assert_called_once()


class TestReplayTransport:
    def test_nested_capture(self, tmp_path):
        (tmp_path / "state").mkdir()
        (tmp_path / "state" / "psus.json").write_bytes(b'{"Objects": []}')
        transport = ReplayTransport(str(tmp_path), BASE_URL)

        assert transport.fetch(BASE_URL + "state/psus") == b'{"Objects": []}'

    def test_flat_capture(self, tmp_path):
        (tmp_path / "state_platform.json").write_bytes(b'{}')
        transport = ReplayTransport(str(tmp_path), BASE_URL)

        assert transport.fetch(BASE_URL + "state/platform") == b'{}'

    def test_follow_up_page_capture(self, tmp_path):
        (tmp_path / "state").mkdir()
        (tmp_path / "state" / "Ports.json").write_bytes(b'page1')
        (tmp_path / "state" / "Ports_5.json").write_bytes(b'page2')
        transport = ReplayTransport(str(tmp_path), BASE_URL)

        assert transport.fetch(BASE_URL + "state/Ports") == b'page1'
        assert transport.fetch(BASE_URL + "state/Ports?CurrentMarker=5") == b'page2'

    def test_missing_capture(self, tmp_path):
        transport = ReplayTransport(str(tmp_path), BASE_URL)
        with pytest.raises(TransportError):
            transport.fetch(BASE_URL + "state/sfps")
