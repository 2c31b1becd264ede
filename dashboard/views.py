"""
Dashboard views.

Every data view runs the same state machine:

    idle -> loading -> success | error

load() moves to loading, issues exactly one request through the API
client and lands in success (with parsed results) or error (with the raw
error message). 400 and 500 responses are not told apart.

Search views never re-fetch in place: navigate() pushes a new route onto
the view's history and fetches for it, so the history doubles as a query
log. Fetches are synchronous, so a response always belongs to the most
recent navigation; a concurrent front end over the same endpoints would
need to drop stale responses itself.
"""

import logging
from enum import Enum
from typing import Any, List, Optional
from urllib.parse import quote

import requests

from api.client import CompanyDataClient
from api.models import Company
from utils import log

from .cards import company_card, contains_match, exact_match

logger = logging.getLogger(__name__)


class ViewState(str, Enum):
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class View:
    """Base class for views backed by one endpoint."""

    title = ""
    failure = "Failed to load companies"

    def __init__(self, client: CompanyDataClient):
        self.client = client
        self.state = ViewState.IDLE
        self.error: Optional[str] = None
        self.result: Any = None

    def _fetch(self) -> dict:
        raise NotImplementedError

    def _parse(self, payload: dict) -> Any:
        return [Company.model_validate(item) for item in payload.get("items") or []]

    def _check(self, payload: Any) -> dict:
        if not isinstance(payload, dict):
            raise ValueError(f"Unexpected response body: {type(payload).__name__}")
        return payload

    def load(self) -> ViewState:
        """Fetch once and settle in success or error."""
        self.state = ViewState.LOADING
        self.error = None
        try:
            self.result = self._parse(self._check(self._fetch()))
            self.state = ViewState.SUCCESS
        except (requests.RequestException, KeyError, TypeError, ValueError) as e:
            logger.error(f"{self.title} fetch failed: {e}")
            self.result = None
            self.error = str(e)
            self.state = ViewState.ERROR
        return self.state

    @property
    def companies(self) -> List[Company]:
        return self.result if self.state == ViewState.SUCCESS else []

    def render(self) -> None:
        log.header(self.title)
        if self.state == ViewState.LOADING:
            log.step("Loading...")
        elif self.state == ViewState.ERROR:
            log.err(f"{self.failure}: {self.error}")
        elif self.state == ViewState.SUCCESS:
            self._render_success()
        else:
            self._render_idle()

    def _render_idle(self) -> None:
        pass

    def _render_success(self) -> None:
        raise NotImplementedError


# ---------------------------------------------------------------------------
# Home
# ---------------------------------------------------------------------------

FEATURES = [
    ("Total Companies", "View total number of companies in our database", "/companies/count"),
    ("Top Paid Companies", "Explore companies with highest salary packages", "/companies/top-paid"),
    ("Companies by Skills", "Find companies hiring for specific skills", "/companies/by-skill/JavaScript"),
    ("Companies by Location", "Browse companies in different cities", "/companies/by-location/Bangalore"),
    ("Companies by Headcount", "Filter companies by employee count range", "/companies/headcount-range"),
    ("Companies by Benefits", "Search companies offering specific benefits", "/companies/benefit/Insurance"),
]


class HomeView:
    """Static landing page listing every view."""

    title = "Company Analytics Dashboard"

    def render(self) -> None:
        log.header(self.title)
        log.info("Explore comprehensive company data with our interactive dashboard")
        log.summary_table("Features", [(name, f"{desc}  ({route})") for name, desc, route in FEATURES])


# ---------------------------------------------------------------------------
# Metric & ranking views
# ---------------------------------------------------------------------------

class CountView(View):
    title = "Total Companies"
    failure = "Failed to load companies count"

    def _fetch(self) -> dict:
        return self.client.get_count()

    def _parse(self, payload: dict) -> int:
        return int(payload["total"])

    @property
    def total(self) -> Optional[int]:
        return self.result if self.state == ViewState.SUCCESS else None

    def _render_success(self) -> None:
        log.summary_table("Companies in our database", [("Total", f"{self.result:,}")])


class TopPaidView(View):
    title = "Top Paid Companies"
    failure = "Failed to load top paid companies"

    def __init__(self, client: CompanyDataClient, limit: int = 5):
        super().__init__(client)
        self.limit = limit

    def _fetch(self) -> dict:
        return self.client.get_top_paid(self.limit)

    def _render_success(self) -> None:
        log.info("Companies offering the highest base salaries")
        if not self.result:
            log.warn("No companies found in the database.")
            return
        for rank, company in enumerate(self.result, 1):
            log.card(*company_card(company, rank=rank, show_bonus=True))


class HeadcountRangeView(View):
    """Fetches only on submit; stays idle until at least one bound is given."""

    title = "Companies by Headcount Range"

    def __init__(self, client: CompanyDataClient):
        super().__init__(client)
        self.min_headcount = ""
        self.max_headcount = ""

    def submit(self, min_headcount: Optional[str] = None, max_headcount: Optional[str] = None) -> bool:
        """Set the bounds and fetch. Returns False when both bounds are blank."""
        self.min_headcount = str(min_headcount or "").strip()
        self.max_headcount = str(max_headcount or "").strip()
        if not self.min_headcount and not self.max_headcount:
            return False
        self.load()
        return True

    @property
    def range_label(self) -> str:
        upper = f" - {self.max_headcount}" if self.max_headcount else "+"
        return f"Headcount: {self.min_headcount or '0'}{upper} employees"

    def _fetch(self) -> dict:
        return self.client.get_by_headcount_range(self.min_headcount, self.max_headcount)

    def _render_idle(self) -> None:
        log.info("Enter minimum headcount to find companies with at least that many employees")
        log.info("Enter maximum headcount to set an upper limit")
        log.info("Use both to define a specific range")

    def _render_success(self) -> None:
        log.info(self.range_label)
        if not self.result:
            log.warn("No companies found with headcount in the specified range.")
            return
        log.ok(f"Found {len(self.result)} companies in the specified headcount range")
        for company in self.result:
            log.card(*company_card(company, show_tier=True))


# ---------------------------------------------------------------------------
# Search views
# ---------------------------------------------------------------------------

class SearchView(View):
    """A view whose every search becomes a new route in its history."""

    route_prefix = ""
    found = ""
    not_found = ""

    def __init__(self, client: CompanyDataClient, term: Optional[str] = None):
        super().__init__(client)
        self.term: Optional[str] = None
        self.history: List[str] = []
        if term:
            self.navigate(term)

    def navigate(self, term: str) -> bool:
        """Push the route for `term` and fetch it. Blank terms are ignored."""
        term = (term or "").strip()
        if not term:
            return False
        self.term = term
        self.history.append(f"{self.route_prefix}/{quote(term, safe='')}")
        self.load()
        return True

    @property
    def route(self) -> Optional[str]:
        return self.history[-1] if self.history else None

    def card_options(self) -> dict:
        """Extra company_card() arguments for this view's cards."""
        return {}

    def _render_idle(self) -> None:
        log.info("Enter a search term to begin")

    def _render_success(self) -> None:
        if not self.result:
            log.warn(self.not_found.format(term=self.term))
            return
        log.ok(f"Found {len(self.result)} companies {self.found.format(term=self.term)}")
        options = self.card_options()
        for company in self.result:
            log.card(*company_card(company, **options))


class LocationView(SearchView):
    title = "Companies by Location"
    route_prefix = "/companies/by-location"
    found = 'in "{term}"'
    not_found = 'No companies found in "{term}".'

    def _fetch(self) -> dict:
        return self.client.get_by_location(self.term)


class SkillView(SearchView):
    title = "Companies by Skill"
    route_prefix = "/companies/by-skill"
    found = 'requiring "{term}"'
    not_found = 'No companies found requiring the skill "{term}".'

    def _fetch(self) -> dict:
        return self.client.get_by_skill(self.term)

    def card_options(self) -> dict:
        return {
            "skills_shown": 5,
            "skill_match": exact_match(self.term),
            "skills_label": "Required Skills",
            "benefits_shown": 0,
        }


class BenefitView(SearchView):
    title = "Companies by Benefit"
    route_prefix = "/companies/benefit"
    found = 'offering "{term}"'
    not_found = 'No companies found offering "{term}" benefit.'

    def _fetch(self) -> dict:
        return self.client.get_by_benefit(self.term)

    def card_options(self) -> dict:
        return {
            "benefits_shown": None,
            "benefit_match": contains_match(self.term),
            "benefits_label": "All Benefits",
        }
