"""Mini README: FastAPI-powered dashboard for the expense tracker.

Structure:
    * create_application - application factory wiring ledger, store and routes.

The factory builds exactly one ``ExpenseLedger`` (rehydrated from the JSON
store unless one is injected) and shares it with every route. Mutating routes
save the ledger snapshot straight after the change and undo the change when
the write fails, so the file on disk always mirrors what the dashboard shows.
Ledger errors are mapped to HTTP 400/404 responses and save failures to 500;
amounts and dates are formatted only at this layer.
"""

from __future__ import annotations

from datetime import date
from pathlib import Path
from typing import Callable, Optional

from fastapi import FastAPI, Form, HTTPException, Request
from fastapi.responses import HTMLResponse, JSONResponse
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates

from ..configuration import ExpenseTrackerSettings, get_settings
from ..ledger import (
    ExpenseLedger,
    ExpenseNotFoundError,
    OutOfRangeError,
    ValidationError,
)
from ..logging_utils import get_logger
from ..storage import JsonExpenseStore
from .formatting import format_currency, format_display_date, month_labels

LOGGER = get_logger(__name__)


def create_application(
    ledger: Optional[ExpenseLedger] = None,
    store: Optional[JsonExpenseStore] = None,
    settings: Optional[ExpenseTrackerSettings] = None,
) -> FastAPI:
    """Create the FastAPI application with routes and dependencies."""

    settings = settings or get_settings()
    store = store or JsonExpenseStore(settings.ledger_path)
    if ledger is None:
        ledger = ExpenseLedger(store.load())
    LOGGER.info("Starting dashboard with %s stored expenses from %s", len(ledger), store.path)

    app = FastAPI(title="Expense Tracker", version="0.1.0")
    templates = Jinja2Templates(directory=str(Path(__file__).parent / "templates"))
    templates.env.filters["currency"] = lambda value: format_currency(
        value, settings.currency_symbol
    )
    templates.env.filters["display_date"] = format_display_date
    static_directory = Path(__file__).parent / "static"
    app.mount("/static", StaticFiles(directory=str(static_directory)), name="static")

    def persist(rollback: Callable[[], object]) -> None:
        """Save the ledger, undoing the in-memory change if the write fails."""

        try:
            store.save(ledger.snapshot())
        except OSError as error:
            rollback()
            LOGGER.error("Could not save ledger to %s: %s", store.path, error)
            raise HTTPException(
                status_code=500,
                detail="Could not save the ledger; the change was not applied.",
            ) from error

    @app.get("/", response_class=HTMLResponse)
    async def dashboard(request: Request, year: Optional[int] = None) -> HTMLResponse:
        """Render the expense list, summary figures and both charts."""

        today = date.today()
        trend_year = year or today.year
        summary = ledger.summarise(today)
        by_category = summary["by_category"]
        years = sorted(set(ledger.years()) | {today.year, trend_year})
        LOGGER.debug(
            "Rendering dashboard -> expenses: %s total: %.2f trend_year: %s",
            summary["expense_count"],
            summary["total"],
            trend_year,
        )
        return templates.TemplateResponse(
            request,
            "dashboard.html",
            {
                "expenses": list(enumerate(ledger.list_expenses())),
                "summary": summary,
                "categories": settings.categories,
                "category_labels": list(by_category.keys()),
                "category_totals": list(by_category.values()),
                "month_labels": month_labels(),
                "monthly_totals": ledger.by_month(trend_year),
                "trend_year": trend_year,
                "years": years,
                "today": today.isoformat(),
                "currency_symbol": settings.currency_symbol,
            },
        )

    @app.get("/expenses")
    async def list_expenses() -> JSONResponse:
        """Return expenses in ledger order with their current positions."""

        payload = [
            {**expense.as_dict(), "position": position}
            for position, expense in enumerate(ledger.list_expenses())
        ]
        return JSONResponse({"expenses": payload})

    @app.post("/expenses")
    async def create_expense(
        amount: str = Form(...),
        category: str = Form(...),
        expense_date: str = Form(..., alias="date"),
        description: str = Form(""),
    ) -> JSONResponse:
        """Record a submitted expense and persist the ledger."""

        try:
            position = ledger.add(
                {
                    "amount": amount,
                    "category": category,
                    "date": expense_date,
                    "description": description,
                }
            )
        except ValidationError as error:
            LOGGER.warning("Rejected expense submission: %s", error)
            raise HTTPException(status_code=400, detail=str(error)) from error
        persist(lambda: ledger.remove_at(position))
        expense = ledger.list_expenses()[position]
        return JSONResponse({**expense.as_dict(), "position": position}, status_code=201)

    @app.delete("/expenses/position/{position}")
    async def delete_expense_at(position: int) -> JSONResponse:
        """Remove the expense currently listed at ``position``."""

        try:
            removed = ledger.remove_at(position)
        except OutOfRangeError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        persist(lambda: ledger.restore(position, removed))
        return JSONResponse({"removed": removed.as_dict(), "remaining": len(ledger)})

    @app.delete("/expenses/{expense_id}")
    async def delete_expense(expense_id: str) -> JSONResponse:
        """Remove an expense by its stable identifier."""

        try:
            position = ledger.index_of(expense_id)
            removed = ledger.remove_at(position)
        except ExpenseNotFoundError as error:
            raise HTTPException(status_code=404, detail=str(error)) from error
        persist(lambda: ledger.restore(position, removed))
        return JSONResponse({"removed": removed.as_dict(), "remaining": len(ledger)})

    @app.get("/summary")
    async def summary(reference_date: Optional[str] = None) -> JSONResponse:
        """Return headline totals as raw numbers plus display strings."""

        try:
            payload = ledger.summarise(reference_date)
        except ValidationError as error:
            raise HTTPException(status_code=400, detail=str(error)) from error
        payload["display"] = {
            "total": format_currency(payload["total"], settings.currency_symbol),
            "current_month_total": format_currency(
                payload["current_month_total"], settings.currency_symbol
            ),
        }
        return JSONResponse(payload)

    @app.get("/trend")
    async def trend(year: Optional[int] = None) -> JSONResponse:
        """Return the twelve monthly totals for ``year`` (default: this year)."""

        trend_year = year or date.today().year
        return JSONResponse(
            {
                "year": trend_year,
                "labels": month_labels(),
                "totals": ledger.by_month(trend_year),
            }
        )

    return app
