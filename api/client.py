"""
HTTP client for the Company Analytics API.

Used by the dashboard views; also usable from scripts and notebooks.
"""

import requests
from typing import Dict, Optional
from urllib.parse import quote


class CompanyDataClient:
    """
    Client for the Company Analytics API.

    Usage:
        client = CompanyDataClient("http://localhost:8000")
        total = client.get_count()["total"]
        top = client.get_top_paid(limit=10)["items"]
    """

    def __init__(self, api_url: str = "http://localhost:8000", timeout: Optional[float] = None):
        """
        Initialize API client.

        Args:
            api_url: Base URL of the API server
            timeout: Per-request timeout in seconds, None to wait indefinitely
        """
        self.api_url = api_url.rstrip('/')
        self.timeout = timeout
        self.session = requests.Session()

    def _get(self, endpoint: str, params: Dict = None) -> Dict:
        """Make GET request to API. Raises requests.HTTPError on non-2xx."""
        url = f"{self.api_url}{endpoint}"
        response = self.session.get(url, params=params, timeout=self.timeout)
        response.raise_for_status()
        return response.json()

    def close(self):
        self.session.close()

    # ----------------------------------------------------------------
    # Health & Stats
    # ----------------------------------------------------------------

    def health_check(self) -> Dict:
        """Check API health and get the live company count."""
        return self._get("/")

    def get_count(self) -> Dict:
        """Returns {"total": N}."""
        return self._get("/api/companies/count")

    # ----------------------------------------------------------------
    # Range & Ranking
    # ----------------------------------------------------------------

    def get_by_headcount_range(self, min_headcount: Optional[str] = None, max_headcount: Optional[str] = None) -> Dict:
        """
        Get companies by headcount range.

        Bounds are forwarded as given so the server decides what is valid;
        blank bounds are left out of the query.

        Returns:
            Dict with an items list
        """
        params = {}
        if min_headcount not in (None, ""):
            params['min'] = min_headcount
        if max_headcount not in (None, ""):
            params['max'] = max_headcount
        return self._get("/api/companies/headcount-range", params)

    def get_top_paid(self, limit: Optional[int] = None) -> Dict:
        """Get the best paying companies (server caps limit at 50)."""
        params = {}
        if limit is not None:
            params['limit'] = limit
        return self._get("/api/companies/top-paid", params)

    # ----------------------------------------------------------------
    # Search
    # ----------------------------------------------------------------

    def get_by_location(self, location: str) -> Dict:
        return self._get(f"/api/companies/by-location/{quote(location, safe='')}")

    def get_by_skill(self, skill: str) -> Dict:
        return self._get(f"/api/companies/by-skill/{quote(skill, safe='')}")

    def get_by_benefit(self, benefit: str) -> Dict:
        return self._get(f"/api/companies/benefit/{quote(benefit, safe='')}")
