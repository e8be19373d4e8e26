import json

import pytest

from core.models import CameraSettings, PhotoRecord, Resolution, Resolutions
from infrastructure.json_repository import (
    JsonCatalogRepository,
    from_document,
    no_data_path,
    record_to_dict,
    to_document,
)


def _full_record() -> PhotoRecord:
    return PhotoRecord(
        file_name="IMG_2040.jpg",
        alt_name="lighthouse.jpg",
        type="webp",
        alt="Lighthouse on a cliff at sunrise",
        resolutions=Resolutions(
            small=Resolution("assets/img/Sm/lighthouse.webp", 960, 640),
            medium=Resolution("assets/img/Md/lighthouse.webp", 1024, 768),
            large=Resolution("assets/img/Lg/lighthouse.webp", 1920, 1080),
        ),
        tags=["coast", "morning", "architecture"],
        camera_settings=CameraSettings(
            camera_model="ILCE-7M3",
            lens_model="FE 24-105mm F4 G OSS",
            shutter_speed="1/320",
            aperture=8.0,
            iso_value="100",
        ),
    )


def test_round_trip_preserves_every_field(tmp_path, catalog):
    records = [PhotoRecord(file_name="empty.png"), _full_record()]
    repo = JsonCatalogRepository()
    path = tmp_path / "out" / "data.json"

    repo.save(path, records)
    loaded = repo.load(path)

    assert loaded == records
    assert loaded[1].tags == ["coast", "morning", "architecture"]

    catalog.extend(loaded)
    assert [r.file_name for r in catalog.records] == ["empty.png", "IMG_2040.jpg"]


def test_document_shape(tmp_path):
    doc = record_to_dict(_full_record())
    assert list(doc) == [
        "fileName",
        "altName",
        "type",
        "alt",
        "resolutions",
        "tags",
        "cameraSettings",
    ]
    assert set(doc["resolutions"]) == {"previewS", "previewM", "previewL"}
    assert doc["resolutions"]["previewL"] == {
        "path": "assets/img/Lg/lighthouse.webp",
        "width": 1920,
        "height": 1080,
    }
    assert doc["cameraSettings"]["aperture"] == 8.0

    empty = record_to_dict(PhotoRecord(file_name="empty.png"))
    assert empty["resolutions"]["previewS"] == {"path": None, "width": 0, "height": 0}
    assert empty["cameraSettings"]["cameraModel"] is None
    assert empty["tags"] == []


def test_loads_pascal_case_documents():
    doc = [
        {
            "FileName": "DSC_0001.JPG",
            "AltName": None,
            "Type": "jpg",
            "Alt": "",
            "Resolutions": {
                "PreviewS": {"Path": "img/Sm/DSC_0001.jpg", "Width": 960, "Height": 640},
                "PreviewM": {"Path": None, "Width": 0, "Height": 0},
                "PreviewL": {"Path": "img/Lg/DSC_0001.jpg", "Width": 1920, "Height": 1080},
            },
            "Tags": ["birds"],
            "CameraSettings": {
                "CameraModel": "NIKON D750",
                "LensModel": None,
                "ShutterSpeed": "1/1000",
                "Aperture": 5.6,
                "IsoValue": "400",
            },
        }
    ]
    (record,) = from_document(doc)
    assert record.file_name == "DSC_0001.JPG"
    assert record.resolutions.small.path == "img/Sm/DSC_0001.jpg"
    assert record.resolutions.large.height == 1080
    assert record.camera_settings.aperture == 5.6
    assert record.tags == ["birds"]


def test_missing_nested_objects_use_defaults():
    (record,) = from_document([{"fileName": "sparse.jpg"}])
    assert record == PhotoRecord(file_name="sparse.jpg")


def test_malformed_entries_are_skipped():
    records = from_document([{"fileName": "ok.jpg"}, {"alt": "no name"}, "junk", 42])
    assert [r.file_name for r in records] == ["ok.jpg"]


def test_non_array_document_is_rejected(tmp_path):
    path = tmp_path / "data.json"
    path.write_text(json.dumps({"fileName": "a.jpg"}), encoding="utf-8")
    with pytest.raises(ValueError):
        JsonCatalogRepository().load(path)


def test_invalid_json_is_rejected(tmp_path):
    path = tmp_path / "data.json"
    path.write_text("{not json", encoding="utf-8")
    with pytest.raises(ValueError):
        JsonCatalogRepository().load(path)


def test_no_data_list_is_not_persisted(tmp_path, catalog):
    catalog.find_or_create("a.jpg")
    catalog.mark_no_data("plain.png")
    doc = to_document(catalog.records)
    assert [d["fileName"] for d in doc] == ["a.jpg"]


def test_loading_twice_does_not_duplicate(tmp_path, catalog):
    repo = JsonCatalogRepository()
    path = tmp_path / "data.json"
    repo.save(path, [_full_record()])

    assert catalog.extend(repo.load(path)) == 1
    assert catalog.extend(repo.load(path)) == 0
    assert len(catalog) == 1


def test_no_data_sidecar_sits_beside_the_catalog(tmp_path):
    repo = JsonCatalogRepository()
    path = tmp_path / "out" / "data.json"
    assert no_data_path(path) == tmp_path / "out" / "data.nodata.json"
    assert repo.load_no_data(path) == []

    repo.save_no_data(path, ["plain.png", "scan.tiff"])
    assert repo.load_no_data(path) == ["plain.png", "scan.tiff"]
    assert not path.exists()


def test_malformed_no_data_sidecar_is_rejected(tmp_path):
    path = tmp_path / "data.json"
    no_data_path(path).write_text('{"plain.png": true}', encoding="utf-8")
    with pytest.raises(ValueError):
        JsonCatalogRepository().load_no_data(path)
