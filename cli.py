"""
Command-line entry point for the Company Analytics Dashboard.

Usage:
    # Serve the API
    company-dashboard serve --port 8000

    # Render views against a running API
    company-dashboard count
    company-dashboard top-paid --limit 10
    company-dashboard headcount --min 100 --max 1000
    company-dashboard location Bangalore Mumbai
"""

import argparse
import sys

from api.client import CompanyDataClient
from api.config import settings
from dashboard.views import (
    BenefitView,
    CountView,
    HeadcountRangeView,
    HomeView,
    LocationView,
    SkillView,
    TopPaidView,
    ViewState,
)
from utils import log

SEARCH_VIEWS = {
    "location": LocationView,
    "skill": SkillView,
    "benefit": BenefitView,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Explore the companies collection")
    parser.add_argument("--api-url", default=settings.DASHBOARD_API_URL, help="Base URL of the API server")
    sub = parser.add_subparsers(dest="command", required=True)

    serve = sub.add_parser("serve", help="Run the HTTP API")
    serve.add_argument("--host", default=settings.HOST)
    serve.add_argument("--port", type=int, default=settings.PORT)

    sub.add_parser("home", help="List the dashboard views")
    sub.add_parser("count", help="Total number of companies")

    top = sub.add_parser("top-paid", help="Companies with the highest base salary")
    top.add_argument("--limit", type=int, default=settings.TOP_PAID_DEFAULT_LIMIT)

    headcount = sub.add_parser("headcount", help="Companies within a headcount range")
    headcount.add_argument("--min", dest="min_headcount", default="")
    headcount.add_argument("--max", dest="max_headcount", default="")

    for name in SEARCH_VIEWS:
        search = sub.add_parser(name, help=f"Companies by {name}")
        search.add_argument("terms", nargs="+", help="One or more search terms, searched in order")

    return parser


def serve(host: str, port: int) -> None:
    import uvicorn
    uvicorn.run("api.main:app", host=host, port=port, log_level=settings.LOG_LEVEL.lower())


def run(args: argparse.Namespace) -> int:
    """Render the requested view. Returns a process exit code."""
    if args.command == "home":
        HomeView().render()
        return 0

    client = CompanyDataClient(args.api_url)
    try:
        if args.command == "count":
            views = [CountView(client)]
            views[0].load()
        elif args.command == "top-paid":
            views = [TopPaidView(client, limit=args.limit)]
            views[0].load()
        elif args.command == "headcount":
            view = HeadcountRangeView(client)
            view.submit(args.min_headcount, args.max_headcount)
            views = [view]
        else:
            view = SEARCH_VIEWS[args.command](client)
            failed = False
            for term in args.terms:
                if view.navigate(term):
                    view.render()
                    failed = failed or view.state == ViewState.ERROR
            if view.history:
                log.info(f"History: {' -> '.join(view.history)}")
            return 1 if failed else 0

        for view in views:
            view.render()
        return 1 if any(v.state == ViewState.ERROR for v in views) else 0
    finally:
        client.close()


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    if args.command == "serve":
        serve(args.host, args.port)
        return 0
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
