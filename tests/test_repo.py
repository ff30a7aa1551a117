import pytest

from listings.db.repo import Repo, get_repository, reset_repository
from listings.errors import MissingInputFile

LISTINGS_CSV = """brokered_by,status,price,bed,bath,acre_lot,street,city,state,zip_code,house_size,prev_sold_date
103378,for_sale,105000,3,2,0.12,1962661,Adjuntas,Puerto Rico,601,920,
52707,for_sale,80000,4,2,0.08,1902874,Adjuntas,Puerto Rico,601,1527,
103379,sold,300000,3,2,0.25,1234,Austin,Texas,78701,1800,2019-05-01
103380,for_sale,500000,4,3,0.3,1235,Dallas,Texas,75201,,2018-01-15
103381,for_sale,700000,3,2,0.1,1236,Los Angeles,California,90001,1500,
103382,sold,,2,1,0.05,1237,San Diego,California,92101,900,
"""


def _write(tmp_path, text=LISTINGS_CSV, name="listings.csv") -> str:
    path = tmp_path / name
    path.write_text(text)
    return str(path)


def test_repository_loads_raw_and_cleaned_tables(tmp_path):
    repo = Repo(_write(tmp_path), polygons_csv=str(tmp_path / "none.csv"))
    assert len(repo.raw.index) == 6
    assert len(repo.cleaned.index) == 4
    assert repo.raw["state"].tolist()[:3] == ["Puerto Rico", "Puerto Rico", "Texas"]
    assert "prev_sold_date" in repo.raw.columns


def test_missing_listings_file_is_reported(tmp_path):
    with pytest.raises(MissingInputFile):
        Repo(str(tmp_path / "absent.csv"))
    with pytest.raises(FileNotFoundError):
        Repo(str(tmp_path / "absent.csv"))


def test_missing_required_column_is_reported(tmp_path):
    path = _write(tmp_path, "price,bed,bath\n1,2,3\n")
    with pytest.raises(MissingInputFile) as excinfo:
        Repo(path)
    assert "house_size" in str(excinfo.value)


def test_polygons_load_lazily(tmp_path):
    repo = Repo(_write(tmp_path), polygons_csv=str(tmp_path / "none.csv"))
    with pytest.raises(MissingInputFile):
        repo.polygons()

    polygons = tmp_path / "polygons.csv"
    polygons.write_text("long,lat,group,order,region,subregion\n-1,1,1,2,texas,\n-2,2,1,1,texas,\n")
    repo = Repo(_write(tmp_path), polygons_csv=str(polygons))
    assert repo.polygons()["long"].tolist() == [-2.0, -1.0]


def test_listing_rows_use_none_for_missing_values(tmp_path):
    repo = Repo(_write(tmp_path))
    rows = repo.list_listings(state="Texas")
    assert len(rows) == 2
    assert rows[1]["house_size"] is None
    assert rows[1]["prev_sold_date"] == "2018-01-15"
    assert rows[0]["city"] == "Austin"


def test_repository_singleton_reads_environment(tmp_path, monkeypatch):
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("LISTINGS_CSV", "listings.csv")
    _write(tmp_path)
    reset_repository()
    try:
        repo = get_repository()
        assert get_repository() is repo
        assert len(repo.raw.index) == 6
        assert repo.provenance().startswith("listings.csv#sha256:")
    finally:
        reset_repository()
