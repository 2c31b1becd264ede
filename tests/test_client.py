"""Tests for CompanyDataClient with a mocked requests session."""

import pytest
import requests
from unittest.mock import MagicMock

from api.client import CompanyDataClient


def _make_client(json_data=None):
    client = CompanyDataClient("http://api.test/")
    client.session = MagicMock()
    resp = MagicMock()
    resp.json.return_value = json_data or {"items": []}
    client.session.get.return_value = resp
    return client


class TestRequests:
    def test_strips_trailing_slash(self):
        assert CompanyDataClient("http://api.test/").api_url == "http://api.test"

    def test_count(self):
        client = _make_client({"total": 7})
        assert client.get_count() == {"total": 7}
        args, kwargs = client.session.get.call_args
        assert args[0] == "http://api.test/api/companies/count"

    def test_top_paid_passes_limit(self):
        client = _make_client()
        client.get_top_paid(10)
        args, kwargs = client.session.get.call_args
        assert args[0].endswith("/api/companies/top-paid")
        assert kwargs["params"] == {"limit": 10}

    def test_top_paid_default_sends_no_limit(self):
        client = _make_client()
        client.get_top_paid()
        assert client.session.get.call_args.kwargs["params"] == {}

    def test_headcount_skips_blank_bounds(self):
        client = _make_client()
        client.get_by_headcount_range("100", "")
        assert client.session.get.call_args.kwargs["params"] == {"min": "100"}

    def test_headcount_both_bounds(self):
        client = _make_client()
        client.get_by_headcount_range(100, 1000)
        assert client.session.get.call_args.kwargs["params"] == {"min": 100, "max": 1000}

    @pytest.mark.parametrize("method,path", [
        ("get_by_location", "/api/companies/by-location/San%20Francisco"),
        ("get_by_skill", "/api/companies/by-skill/San%20Francisco"),
        ("get_by_benefit", "/api/companies/benefit/San%20Francisco"),
    ])
    def test_search_terms_are_quoted(self, method, path):
        client = _make_client()
        getattr(client, method)("San Francisco")
        assert client.session.get.call_args.args[0] == f"http://api.test{path}"

    def test_slash_in_term_is_quoted(self):
        client = _make_client()
        client.get_by_skill("CI/CD")
        assert client.session.get.call_args.args[0].endswith("/by-skill/CI%2FCD")


class TestErrors:
    def test_http_error_propagates(self):
        client = _make_client()
        resp = client.session.get.return_value
        resp.raise_for_status.side_effect = requests.HTTPError("500 Server Error")
        with pytest.raises(requests.HTTPError):
            client.get_count()

    def test_raise_for_status_checked(self):
        client = _make_client()
        client.get_count()
        client.session.get.return_value.raise_for_status.assert_called_once()
