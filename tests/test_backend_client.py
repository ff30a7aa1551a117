import pytest
import requests
from fastapi.testclient import TestClient

from app.backend_client import BackendClient
from listings.api import app
from listings.db.repo import Repo, reset_repository, set_repository
from listings.errors import DatasetError, FieldNotFound, MissingInputFile
from listings.models.views import GeoMapState, OverviewState, StateComparisonState

LISTINGS_CSV = """brokered_by,status,price,bed,bath,acre_lot,street,city,state,zip_code,house_size,prev_sold_date
103379,sold,300000,3,2,0.25,1234,Austin,Texas,78701,1800,2019-05-01
103380,for_sale,500000,4,3,0.3,1235,Dallas,Texas,75201,2100,2018-01-15
103381,for_sale,700000,3,2,0.1,1236,Los Angeles,California,90001,1500,
"""

POLYGONS_CSV = """long,lat,group,order,region,subregion
-101.0,30.0,1,1,texas,
-100.0,31.0,1,2,texas,
-99.0,30.0,1,3,texas,
"""

UNREACHABLE = "http://127.0.0.1:9"


class _StatusSession:
    """Answers every request with the same HTTP status."""

    def __init__(self, status: int) -> None:
        self.status = status
        self.calls = 0

    def request(self, method, url, json=None, timeout=None):
        self.calls += 1
        resp = requests.Response()
        resp.status_code = self.status
        resp.reason = "Internal Server Error"
        resp.url = url
        resp._content = b'{"detail": "boom"}'
        return resp


def _repo(tmp_path, polygons: bool = True) -> Repo:
    listings = tmp_path / "listings.csv"
    listings.write_text(LISTINGS_CSV)
    polygon_path = tmp_path / "polygons.csv"
    if polygons:
        polygon_path.write_text(POLYGONS_CSV)
    return Repo(str(listings), str(polygon_path))


def _api_client() -> BackendClient:
    # Starts locally against the unreachable URL, then talks to the app in-process.
    client = BackendClient()
    client.session = TestClient(app)
    client.base_url = ""
    client.use_api = True
    return client


@pytest.fixture
def repository(tmp_path, monkeypatch):
    monkeypatch.setenv("API_BASE_URL", UNREACHABLE)
    repo = _repo(tmp_path)
    set_repository(repo)
    yield repo
    reset_repository()


@pytest.fixture
def repository_without_polygons(tmp_path, monkeypatch):
    monkeypatch.setenv("API_BASE_URL", UNREACHABLE)
    repo = _repo(tmp_path, polygons=False)
    set_repository(repo)
    yield repo
    reset_repository()


def test_unreachable_api_falls_back_to_local_services(repository):
    client = BackendClient()
    assert client.use_api is False
    assert client.repository is repository
    result = client.compare_states(StateComparisonState(selected_states=["California", "Texas"]))
    assert [bar.state for bar in result.bars] == ["California", "Texas"]


def test_explicit_csv_never_uses_api(tmp_path, monkeypatch):
    monkeypatch.setenv("API_BASE_URL", UNREACHABLE)
    path = tmp_path / "listings.csv"
    path.write_text(LISTINGS_CSV)
    client = BackendClient(str(path))
    assert client.use_api is False
    assert client.dataset_report().rows == 3


def test_api_results_match_local_results(repository):
    client = _api_client()
    state = StateComparisonState(selected_states=["Texas", "California"])
    remote = client.compare_states(state)
    assert client.use_api is True
    assert remote == client.state_comparison_controller.recompute(state)


def test_unknown_field_is_a_dataset_error_with_the_server_message(repository):
    client = _api_client()
    with pytest.raises(DatasetError) as excinfo:
        client.overview(OverviewState(selected_field="garage"))
    assert not isinstance(excinfo.value, FieldNotFound)
    message = str(excinfo.value)
    assert message.startswith("Unknown field 'garage'; available: ")
    assert message.count("Unknown field") == 1
    assert client.use_api is True


def test_missing_geometry_is_reported_as_missing_input(repository_without_polygons):
    client = _api_client()
    with pytest.raises(MissingInputFile) as excinfo:
        client.geo_map(GeoMapState())
    assert str(excinfo.value).startswith("map geometry unavailable")
    assert client.use_api is True


def test_server_error_switches_to_local_mode(repository):
    client = BackendClient()
    session = _StatusSession(500)
    client.session = session
    client.use_api = True
    state = StateComparisonState(selected_states=["Texas"])
    result = client.compare_states(state)
    assert session.calls == 1
    assert client.use_api is False
    assert result == client.state_comparison_controller.recompute(state)

    client.compare_states(state)
    assert session.calls == 1
