import math
from pathlib import Path
from typing import Any, Optional

from fastapi import APIRouter, Depends, FastAPI, HTTPException, Query
from fastapi.encoders import jsonable_encoder

from dotenv import load_dotenv

load_dotenv(dotenv_path=Path(__file__).resolve().parents[1] / ".env", override=False)

from .db.repo import Repo, get_repository
from .errors import FieldNotFound, MissingInputFile
from .models.listing import ListingPage, ListingRecord
from .models.views import GeoMapState, OverviewState, ScatterState, StateComparisonState
from .services.geo_map import GeoMapController
from .services.overview import OverviewController
from .services.report import ReportService
from .services.scatter import ScatterController
from .services.state_comparison import StateComparisonController
from .utils.logging import get_logger

LOGGER = get_logger("api")

app = FastAPI(title="Listings Explorer")
router = APIRouter(prefix="/api")


def _sanitize(value: Any) -> Any:
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if isinstance(value, dict):
        return {k: _sanitize(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_sanitize(item) for item in value]
    return value


def _geo_controller(repo: Repo) -> GeoMapController:
    try:
        polygons = repo.polygons()
    except MissingInputFile as exc:
        LOGGER.warning("geo_map_unavailable error=%s", exc)
        raise HTTPException(503, detail=f"map geometry unavailable: {exc}")
    return GeoMapController(repo.cleaned, polygons)


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/dataset")
def dataset(repo: Repo = Depends(get_repository)):
    return ReportService(repo).dataset_report()


@router.get("/summary/{key_field}")
def summary(key_field: str, repo: Repo = Depends(get_repository)):
    try:
        return ReportService(repo).group_summary(key_field)
    except FieldNotFound as exc:
        raise HTTPException(404, detail=str(exc))


@router.get("/correlations")
def correlations(repo: Repo = Depends(get_repository)):
    return ReportService(repo).correlations()


@router.get("/listings")
def listings(
    state: Optional[str] = Query(None),
    limit: int = Query(50, ge=1, le=500),
    repo: Repo = Depends(get_repository),
):
    rows = repo.list_listings(state=state, limit=limit)
    items = [ListingRecord(**_sanitize(row)) for row in rows]
    return jsonable_encoder(ListingPage(items=items, total=len(rows)))


@router.get("/views/{view}/default")
def view_default(view: str, repo: Repo = Depends(get_repository)):
    if view == "overview":
        return OverviewController(repo.raw).default_state()
    if view == "state-comparison":
        return StateComparisonController(repo.raw).default_state()
    if view == "scatter":
        return ScatterController(repo.raw).default_state()
    if view == "geo-map":
        return _geo_controller(repo).default_state()
    raise HTTPException(404, detail=f"unknown view '{view}'")


@router.post("/views/overview")
def overview(state: OverviewState, repo: Repo = Depends(get_repository)):
    try:
        return OverviewController(repo.raw).recompute(state)
    except FieldNotFound as exc:
        raise HTTPException(404, detail=str(exc))


@router.post("/views/state-comparison")
def state_comparison(state: StateComparisonState, repo: Repo = Depends(get_repository)):
    return StateComparisonController(repo.raw).recompute(state)


@router.post("/views/scatter")
def scatter(state: ScatterState, repo: Repo = Depends(get_repository)):
    return ScatterController(repo.raw).recompute(state)


@router.post("/views/geo-map")
def geo_map(state: GeoMapState, repo: Repo = Depends(get_repository)):
    return _geo_controller(repo).recompute(state)


app.include_router(router)
