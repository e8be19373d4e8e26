from concurrent.futures import ThreadPoolExecutor

from core.models import PhotoRecord, Resolution, ResolutionSlot


def test_find_or_create_is_idempotent(catalog):
    first = catalog.find_or_create("a.jpg")
    second = catalog.find_or_create("a.jpg")
    assert first is second
    assert [r.file_name for r in catalog.records] == ["a.jpg"]


def test_creation_defaults_only_apply_to_new_records(catalog):
    record = catalog.find_or_create("a.jpg", file_type="png", alt_name="sunset.jpg")
    again = catalog.find_or_create("a.jpg", file_type="webp", alt_name="other.jpg")
    assert again is record
    assert (record.type, record.alt_name) == ("png", "sunset.jpg")


def test_mark_no_data_once(catalog):
    assert catalog.mark_no_data("plain.png") is True
    assert catalog.mark_no_data("plain.png") is False
    assert catalog.no_data == ["plain.png"]
    assert not catalog.contains("plain.png")
    assert catalog.is_known("plain.png")


def test_mark_no_data_refused_for_existing_record(catalog):
    catalog.find_or_create("a.jpg")
    assert catalog.mark_no_data("a.jpg") is False
    assert catalog.no_data == []


def test_set_resolution_keeps_camera_data_and_tags(catalog):
    record = catalog.find_or_create("a.jpg")
    record.camera_settings.camera_model = "Nikon Z6"
    catalog.add_tag("a.jpg", "travel")

    res = Resolution(path="img/Md/a.jpg", width=1024, height=768)
    updated = catalog.set_resolution("a.jpg", ResolutionSlot.MEDIUM, res)

    assert updated is record
    assert record.resolutions.medium == res
    assert record.resolutions.large == Resolution()
    assert record.camera_settings.camera_model == "Nikon Z6"
    assert record.tags == ["travel"]


def test_set_resolution_creates_bare_record(catalog):
    res = Resolution(path="img/Sm/b.jpg", width=960, height=640)
    record = catalog.set_resolution("b.jpg", ResolutionSlot.SMALL, res, file_type="jpg")
    assert record is not None
    assert record.type == "jpg"
    assert record.resolutions.small == res
    assert not record.has_data()


def test_set_resolution_skips_no_data_files(catalog):
    catalog.mark_no_data("plain.png")
    res = Resolution(path="img/Lg/plain.jpg", width=1920, height=1080)
    assert catalog.set_resolution("plain.png", ResolutionSlot.LARGE, res) is None
    assert len(catalog) == 0
    assert catalog.no_data == ["plain.png"]


def test_tags_keep_insertion_order(catalog):
    catalog.find_or_create("a.jpg")
    for tag in ["zebra", "apple", "mango", "apple"]:
        catalog.add_tag("a.jpg", tag)
    assert catalog.find("a.jpg").tags == ["zebra", "apple", "mango", "apple"]


def test_mutators_are_safe_on_empty_catalog(catalog):
    assert catalog.add_tag("missing.jpg", "x") is False
    assert catalog.set_alt("missing.jpg", "text") is False
    assert catalog.find("missing.jpg") is None
    assert len(catalog) == 0


def test_empty_tag_is_ignored(catalog):
    catalog.find_or_create("a.jpg")
    assert catalog.add_tag("a.jpg", "   ") is False
    assert catalog.find("a.jpg").tags == []


def test_set_alt(catalog):
    catalog.find_or_create("a.jpg")
    assert catalog.set_alt("a.jpg", "A red barn at dusk") is True
    assert catalog.find("a.jpg").alt == "A red barn at dusk"


def test_extend_skips_known_names(catalog):
    catalog.find_or_create("a.jpg").tags.append("resident")
    catalog.mark_no_data("plain.png")
    added = catalog.extend(
        [PhotoRecord(file_name="a.jpg"), PhotoRecord(file_name="plain.png"), PhotoRecord("c.jpg")]
    )
    assert added == 1
    assert [r.file_name for r in catalog.records] == ["a.jpg", "c.jpg"]
    assert catalog.find("a.jpg").tags == ["resident"]


def test_concurrent_find_or_create_keeps_names_unique(catalog):
    names = [f"img_{i % 5}.jpg" for i in range(200)]
    with ThreadPoolExecutor(max_workers=8) as ex:
        list(ex.map(catalog.find_or_create, names))
    assert sorted(r.file_name for r in catalog.records) == [f"img_{i}.jpg" for i in range(5)]
