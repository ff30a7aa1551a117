"""Helper client used by the Streamlit app to talk to the API or fall back to local services."""

from __future__ import annotations

import os
from typing import Any, Dict, List, Optional, Type, TypeVar

import requests
from pydantic import BaseModel
from requests import Response

from listings.db.repo import Repo, get_repository
from listings.errors import DatasetError, MissingInputFile
from listings.models.listing import CorrelationMatrix, DatasetReport, GroupSummary
from listings.models.views import (
    GeoMapResult,
    GeoMapState,
    OverviewResult,
    OverviewState,
    ScatterResult,
    ScatterState,
    StateComparisonResult,
    StateComparisonState,
)
from listings.services.geo_map import GeoMapController
from listings.services.overview import OverviewController
from listings.services.report import ReportService
from listings.services.scatter import ScatterController
from listings.services.state_comparison import StateComparisonController
from listings.utils.logging import get_logger

LOGGER = get_logger("app.backend_client")

M = TypeVar("M", bound=BaseModel)


class BackendClient:
    """Serves every view either from the HTTP API or from in-process controllers.

    An explicit ``listings_csv`` always runs locally, since the API serves
    whatever dataset it was started with. A 404 from the API is raised as
    ``DatasetError`` carrying the server message, a 503 as ``MissingInputFile``;
    any other failure switches the client to local mode.
    """

    def __init__(self, listings_csv: Optional[str] = None) -> None:
        self.base_url = os.getenv("API_BASE_URL", "http://localhost:8000")
        self.listings_csv = listings_csv
        self.session = requests.Session()
        self.use_api = listings_csv is None and self._ping_api()
        self.repository: Optional[Repo] = None
        self.report_service: Optional[ReportService] = None
        self.overview_controller: Optional[OverviewController] = None
        self.state_comparison_controller: Optional[StateComparisonController] = None
        self.scatter_controller: Optional[ScatterController] = None
        self._geo_controller: Optional[GeoMapController] = None
        if not self.use_api:
            self._enable_local_mode()

    def _ping_api(self) -> bool:
        try:
            resp = self.session.get(f"{self.base_url}/api/health", timeout=2)
            return resp.status_code == 200
        except requests.RequestException:
            return False

    # ------------------------------------------------------------------
    # Dataset level
    def dataset_report(self) -> DatasetReport:
        if self.use_api:
            data = self._request("GET", "/api/dataset")
            if data is not None:
                return DatasetReport.model_validate(data)
        return self.report_service.dataset_report()

    def group_summary(self, key_field: str) -> List[GroupSummary]:
        if self.use_api:
            data = self._request("GET", f"/api/summary/{key_field}")
            if data is not None:
                return [GroupSummary.model_validate(item) for item in data]
        return self.report_service.group_summary(key_field)

    def correlations(self) -> CorrelationMatrix:
        if self.use_api:
            data = self._request("GET", "/api/correlations")
            if data is not None:
                return CorrelationMatrix.model_validate(data)
        return self.report_service.correlations()

    # ------------------------------------------------------------------
    # Views
    def default_overview_state(self) -> OverviewState:
        return self._default("overview", OverviewState, lambda: self.overview_controller.default_state())

    def default_state_comparison_state(self) -> StateComparisonState:
        return self._default(
            "state-comparison", StateComparisonState, lambda: self.state_comparison_controller.default_state()
        )

    def default_scatter_state(self) -> ScatterState:
        return self._default("scatter", ScatterState, lambda: self.scatter_controller.default_state())

    def default_geo_map_state(self) -> GeoMapState:
        return self._default("geo-map", GeoMapState, lambda: self.geo_controller().default_state())

    def overview(self, state: OverviewState) -> OverviewResult:
        return self._view("overview", state, OverviewResult, lambda: self.overview_controller.recompute(state))

    def compare_states(self, state: StateComparisonState) -> StateComparisonResult:
        return self._view(
            "state-comparison",
            state,
            StateComparisonResult,
            lambda: self.state_comparison_controller.recompute(state),
        )

    def scatter(self, state: ScatterState) -> ScatterResult:
        return self._view("scatter", state, ScatterResult, lambda: self.scatter_controller.recompute(state))

    def geo_map(self, state: GeoMapState) -> GeoMapResult:
        return self._view("geo-map", state, GeoMapResult, lambda: self.geo_controller().recompute(state))

    def geo_controller(self) -> GeoMapController:
        if self._geo_controller is None:
            self._geo_controller = GeoMapController(self.repository.cleaned, self.repository.polygons())
        return self._geo_controller

    # ------------------------------------------------------------------
    def _default(self, view: str, model: Type[M], local) -> M:
        if self.use_api:
            data = self._request("GET", f"/api/views/{view}/default")
            if data is not None:
                return model.model_validate(data)
        return local()

    def _view(self, view: str, state: BaseModel, model: Type[M], local) -> M:
        if self.use_api:
            data = self._request("POST", f"/api/views/{view}", json=state.model_dump(mode="json"))
            if data is not None:
                return model.model_validate(data)
        return local()

    def _request(self, method: str, path: str, json: Optional[Dict[str, Any]] = None) -> Optional[Any]:
        """JSON body of an API call, or None after switching to local mode."""

        try:
            resp = self.session.request(method, f"{self.base_url}{path}", json=json, timeout=20)
        except requests.RequestException as exc:
            self._handle_api_failure(exc)
            return None
        if resp.status_code == 404:
            raise DatasetError(resp.json().get("detail", path))
        if resp.status_code == 503:
            raise MissingInputFile(resp.json().get("detail", path))
        try:
            self._raise_for_status(resp)
        except requests.RequestException:
            return None
        return resp.json()

    def _enable_local_mode(self) -> None:
        if self.repository is None:
            self.repository = Repo(self.listings_csv) if self.listings_csv else get_repository()
            self.report_service = ReportService(self.repository)
            self.overview_controller = OverviewController(self.repository.raw)
            self.state_comparison_controller = StateComparisonController(self.repository.raw)
            self.scatter_controller = ScatterController(self.repository.raw)
        self.use_api = False

    def _handle_api_failure(self, exc: Exception) -> None:
        LOGGER.warning("api_unavailable base_url=%s error=%s; using local services", self.base_url, exc)
        self._enable_local_mode()

    def _raise_for_status(self, response: Response) -> None:
        try:
            response.raise_for_status()
        except requests.RequestException as exc:
            self._handle_api_failure(exc)
            raise
