"""
Tests for the transform service client.
"""

import pytest
import requests

from src.bridge.errors import TransformError
from src.bridge.transform import TransformClient


class TestTransformClient:
    """Tests for TransformClient class."""

    def test_endpoint(self, mock_session):
        """Test the encrypt path is appended to the base URL."""
        client = TransformClient("http://cipher:8000/")

        assert client.endpoint == "http://cipher:8000/encrypt"

    def test_transform_success(self, mock_session, make_response):
        """Test successful transformation returns the result field."""
        mock_session.post.return_value = make_response(200, {"result": "ENC(x)"})

        client = TransformClient("http://cipher:8000/", timeout_seconds=5.0)
        result = client.transform("x")

        assert result == "ENC(x)"
        mock_session.post.assert_called_once_with(
            "http://cipher:8000/encrypt", json={"text": "x"}, timeout=5.0
        )

    def test_json_content_type(self, mock_session):
        """Test requests are sent as JSON."""
        TransformClient("http://cipher:8000/")

        mock_session.headers.update.assert_called_once_with({"Content-Type": "application/json"})

    def test_payload_is_json_encoded(self, mock_session, make_response):
        """Test quotes in the payload are escaped, not spliced into the body."""
        mock_session.post.return_value = make_response(200, {"result": "ok"})

        TransformClient("http://cipher:8000/").transform('{"temp": 21}')

        assert mock_session.post.call_args.kwargs["json"] == {"text": '{"temp": 21}'}

    def test_endpoint_unset(self, mock_session):
        """Test enabled client without URL fails without calling the service."""
        client = TransformClient(None)

        with pytest.raises(TransformError, match="API URL not set"):
            client.transform("x")

        mock_session.post.assert_not_called()

    def test_timeout(self, mock_session):
        """Test request timeout is reported as a transform failure."""
        mock_session.post.side_effect = requests.exceptions.Timeout("slow")

        with pytest.raises(TransformError, match="timed out"):
            TransformClient("http://cipher:8000/").transform("x")

    def test_transport_error(self, mock_session):
        """Test connection errors are reported as a transform failure."""
        mock_session.post.side_effect = requests.exceptions.ConnectionError("refused")

        with pytest.raises(TransformError, match="Request failed"):
            TransformClient("http://cipher:8000/").transform("x")

    @pytest.mark.parametrize("status_code", [201, 400, 500, 503])
    def test_non_200_status(self, mock_session, make_response, status_code):
        """Test any status other than 200 is a failure."""
        mock_session.post.return_value = make_response(status_code, {"result": "ENC(x)"})

        with pytest.raises(TransformError, match=f"Non-200 response: {status_code}"):
            TransformClient("http://cipher:8000/").transform("x")

    def test_body_not_json(self, mock_session, make_response):
        """Test an undecodable body is a failure."""
        mock_session.post.return_value = make_response(200, json_error=ValueError("bad json"))

        with pytest.raises(TransformError, match="Decode failed"):
            TransformClient("http://cipher:8000/").transform("x")

    @pytest.mark.parametrize("body", [{}, {"result": 42}, ["ENC(x)"], None])
    def test_body_without_result(self, mock_session, make_response, body):
        """Test a body without a string result is a failure."""
        mock_session.post.return_value = make_response(200, body)

        with pytest.raises(TransformError, match="Decode failed"):
            TransformClient("http://cipher:8000/").transform("x")

    def test_close(self, mock_session):
        """Test closing the client closes the HTTP session."""
        TransformClient("http://cipher:8000/").close()

        mock_session.close.assert_called_once()
