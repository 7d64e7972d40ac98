"""Page state for the club and swimmer views.

Each session holds the inputs of one view (what was searched, the loaded
data, the table query, the chart selection) and recomputes tables and charts
from them on demand.

Fetches are tagged with a generation token. When a second search starts
before the first one finishes, the first result is discarded on arrival
instead of overwriting the newer one.
"""

from enum import StrEnum
from pathlib import Path

from tunas import get_logger
from tunas.client import ApiClientError, TunasClient
from tunas.config import get_settings
from tunas.models import (
    ClubSwimmersResponse,
    MeetResult,
    Sex,
    Swimmer,
    SwimmerBestTimesResponse,
    SwimmerTimeHistoryResponse,
)
from tunas.services.pipeline import Page, TableQuery, run_table
from tunas.services.tables import RESULTS_TABLE, ROSTER_TABLE
from tunas.services.time_codec import MalformedTimeError
from tunas.services.time_series import (
    ChartData,
    ChartView,
    SeriesSelection,
    assemble_time_series,
    build_chart_view,
)
from tunas.storage import load_last_club_code, save_last_club_code

logger = get_logger(__name__)


class SearchGeneration:
    """Monotonic token source; only the newest token is current."""

    def __init__(self) -> None:
        self._current = 0

    @property
    def current(self) -> int:
        return self._current

    def begin(self) -> int:
        self._current += 1
        return self._current

    def is_current(self, token: int) -> bool:
        return token == self._current


# =============================================================================
# CLUB VIEW
# =============================================================================


class ClubSearchSession:
    """Club roster view: search a club, then filter, sort and page its swimmers."""

    def __init__(
        self,
        page_size: int | None = None,
        state_path: Path | None = None,
        remember: bool = True,
    ):
        self.page_size = page_size or get_settings().page_size
        self.state_path = state_path
        self.remember = remember
        self.club_code = ""
        self.data: ClubSwimmersResponse | None = None
        self.error: str | None = None
        self.loading = False
        self.query = ROSTER_TABLE.default_query()
        self.generation = SearchGeneration()

    def begin_search(self, code: str | None = None) -> int | None:
        """Start a search; returns its token, or None when no code was given."""
        code_to_search = (code or self.club_code or "").strip()
        if not code_to_search:
            self.error = "Please enter a club code"
            return None
        self.club_code = code_to_search.upper()
        self.loading = True
        self.error = None
        self.data = None
        return self.generation.begin()

    def finish_search(self, token: int, data: ClubSwimmersResponse) -> bool:
        """Apply a fetched roster. Returns False when the result was superseded."""
        if not self.generation.is_current(token):
            logger.info("stale_result_discarded", view="club", token=token)
            return False
        self.data = data
        self.loading = False
        self.query = ROSTER_TABLE.default_query()
        if self.remember:
            save_last_club_code(self.club_code, self.state_path)
        logger.info(
            "club_swimmers_loaded", club_code=self.club_code, swimmers=len(data.swimmers)
        )
        return True

    def fail_search(self, token: int, message: str) -> bool:
        if not self.generation.is_current(token):
            logger.info("stale_error_discarded", view="club", token=token)
            return False
        self.loading = False
        self.error = message or "Failed to fetch club data"
        return True

    def search(self, client: TunasClient, code: str | None = None) -> bool:
        """Fetch a club's swimmers. Returns True when data was loaded."""
        token = self.begin_search(code)
        if token is None:
            return False
        try:
            data = client.clubs.get_club_swimmers(self.club_code)
        except ApiClientError as e:
            self.fail_search(token, e.message)
            return False
        return self.finish_search(token, data)

    def restore(self, client: TunasClient) -> bool:
        """Search the club remembered from the last session, if any."""
        saved = load_last_club_code(self.state_path)
        if not saved:
            return False
        return self.search(client, saved)

    # Table interactions

    def set_search(self, term: str) -> None:
        self.query = self.query.with_search(term)

    def set_sex(self, sex: Sex | str | None) -> None:
        self.query = self.query.with_category(str(sex) if sex else None)

    def sort_by(self, field: str) -> None:
        ROSTER_TABLE.get_field(field)
        self.query = self.query.with_sort(field)

    def go_to_page(self, page: int) -> None:
        self.query = self.query.with_page(page)

    def page(self) -> Page[Swimmer]:
        swimmers = self.data.swimmers if self.data else []
        page = run_table(swimmers, ROSTER_TABLE, self.query, self.page_size)
        if page.page_index != self.query.page:
            self.query = self.query.with_page(page.page_index)
        return page


# =============================================================================
# SWIMMER VIEW
# =============================================================================


class SwimmerTab(StrEnum):
    BEST = "best"
    HISTORY = "history"


class SwimmerSearchSession:
    """Swimmer view: best-times tab and time-history tab with its chart."""

    def __init__(self, page_size: int | None = None, max_initial_series: int | None = None):
        settings = get_settings()
        self.page_size = page_size or settings.page_size
        self.max_initial_series = max_initial_series or settings.max_initial_series
        self.swimmer_id = ""
        self.active_tab = SwimmerTab.BEST
        self.best_times: SwimmerBestTimesResponse | None = None
        self.history: SwimmerTimeHistoryResponse | None = None
        self.chart: ChartData | None = None
        self.selection: SeriesSelection | None = None
        self.results_query: TableQuery = RESULTS_TABLE.default_query()
        self.error: str | None = None
        self.loading = False
        self.generation = SearchGeneration()

    def begin_search(self, tab: SwimmerTab) -> int | None:
        """Start a fetch for ``tab``, clearing only that tab's data."""
        if not self.swimmer_id.strip():
            self.error = "Please enter a swimmer ID"
            return None
        self.loading = True
        self.error = None
        if tab == SwimmerTab.BEST:
            self.best_times = None
        else:
            self.history = None
            self.chart = None
            self.selection = None
        return self.generation.begin()

    def finish_best_times(self, token: int, data: SwimmerBestTimesResponse) -> bool:
        if not self.generation.is_current(token):
            logger.info("stale_result_discarded", view="best_times", token=token)
            return False
        self.loading = False
        self.best_times = data
        self.active_tab = SwimmerTab.BEST
        return True

    def finish_history(self, token: int, data: SwimmerTimeHistoryResponse) -> bool:
        """Apply a fetched history and rebuild its chart with a fresh selection.

        A malformed time leaves the table usable but no chart, with the parse
        error shown as the view error.
        """
        if not self.generation.is_current(token):
            logger.info("stale_result_discarded", view="history", token=token)
            return False
        self.loading = False
        self.history = data
        self.active_tab = SwimmerTab.HISTORY
        self.results_query = RESULTS_TABLE.default_query()
        try:
            self.chart = assemble_time_series(data.meet_results)
        except MalformedTimeError as e:
            logger.warning("history_chart_failed", swimmer_id=self.swimmer_id, error=str(e))
            self.error = f"Cannot chart time history: {e}"
            self.chart = None
            self.selection = None
            return True
        self.selection = SeriesSelection.initial(self.chart.labels, self.max_initial_series)
        return True

    def fail_search(self, token: int, message: str) -> bool:
        if not self.generation.is_current(token):
            logger.info("stale_error_discarded", view="swimmer", token=token)
            return False
        self.loading = False
        self.error = message or "Failed to fetch swimmer data"
        return True

    def search(self, client: TunasClient, tab: SwimmerTab | None = None) -> bool:
        """Fetch data for ``tab`` (default: the active tab)."""
        tab = tab or self.active_tab
        token = self.begin_search(tab)
        if token is None:
            return False
        swimmer_id = self.swimmer_id.strip()
        try:
            if tab == SwimmerTab.BEST:
                return self.finish_best_times(token, client.swimmers.get_best_times(swimmer_id))
            return self.finish_history(token, client.swimmers.get_time_history(swimmer_id))
        except ApiClientError as e:
            self.fail_search(token, e.message)
            return False

    def open(self, client: TunasClient, swimmer_id: str) -> bool:
        """Load a swimmer from scratch (e.g. a link from the roster) on the best-times tab."""
        self.swimmer_id = swimmer_id.strip()
        self.best_times = None
        self.history = None
        self.chart = None
        self.selection = None
        return self.search(client, SwimmerTab.BEST)

    def switch_tab(self, client: TunasClient, tab: SwimmerTab) -> None:
        """Show ``tab``, fetching its data if it has none yet."""
        self.active_tab = tab
        has_data = self.best_times if tab == SwimmerTab.BEST else self.history
        if self.swimmer_id and not has_data:
            self.search(client, tab)

    # History table and chart

    def results_page(self) -> Page[MeetResult]:
        results = self.history.meet_results if self.history else []
        page = run_table(results, RESULTS_TABLE, self.results_query, self.page_size)
        if page.page_index != self.results_query.page:
            self.results_query = self.results_query.with_page(page.page_index)
        return page

    def chart_view(self) -> ChartView | None:
        if self.chart is None or self.selection is None:
            return None
        return build_chart_view(self.chart, self.selection)
