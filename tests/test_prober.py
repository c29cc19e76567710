"""Unit tests for the feed reachability probe."""

import pytest
import requests

from nuget_feed_tools.feed.prober import probe
from nuget_feed_tools.models import FeedStatus

FEED_URL = "http://example.com/nuget"


class TestProbe:
    """Test probe classification."""

    def test_not_found_is_unreachable(self, mock_session, make_response):
        mock_session.head.return_value = make_response(status_code=404, reason="Not Found")
        result = probe(FEED_URL, session=mock_session)
        assert result.status == FeedStatus.UNREACHABLE
        assert not result.is_success

    @pytest.mark.parametrize("status_code", [200, 204, 301, 302, 401, 403, 405, 500, 503])
    def test_any_other_status_is_reachable(self, mock_session, make_response, status_code):
        mock_session.head.return_value = make_response(status_code=status_code)
        result = probe(FEED_URL, session=mock_session)
        assert result.status == FeedStatus.SUCCESS

    def test_head_request_without_redirects(self, mock_session, make_response):
        mock_session.head.return_value = make_response(status_code=200)
        probe(FEED_URL, session=mock_session, timeout=5)
        args, kwargs = mock_session.head.call_args
        assert args[0] == FEED_URL
        assert kwargs['allow_redirects'] is False
        assert kwargs['timeout'] == 5
        mock_session.get.assert_not_called()

    def test_transport_failure_is_reported(self, mock_session):
        mock_session.head.side_effect = requests.ConnectionError("connection refused")
        result = probe(FEED_URL, session=mock_session)
        assert result.status == FeedStatus.TRANSPORT_ERROR
        assert result.error_kind == "ConnectionError"
        assert result.error_message == "connection refused"
        assert "ConnectionError" in result.error_detail

    def test_timeout_is_a_transport_failure(self, mock_session):
        mock_session.head.side_effect = requests.Timeout("timed out")
        result = probe(FEED_URL, session=mock_session)
        assert result.status == FeedStatus.TRANSPORT_ERROR
        assert result.error_kind == "Timeout"

    def test_no_retry_after_failure(self, mock_session):
        mock_session.head.side_effect = requests.ConnectionError("down")
        probe(FEED_URL, session=mock_session)
        assert mock_session.head.call_count == 1
