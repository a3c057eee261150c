"""
Tests pour CatalogService sur un repository SQLite en memoire.
"""

import pytest

from shadowcrawler.services.catalog import CatalogService, to_presentation


@pytest.fixture
def catalog(video_repository, record_factory):
    for i, folder in enumerate(["Trip", "Trip", "Home"]):
        video_repository.upsert(record_factory(f"v{i}.mp4", folder_name=folder, creation_date=100 + i))
    return CatalogService(video_repository)


class TestCatalogService:
    """Tests de la facade de consultation."""

    def test_list_page_whole_catalog(self, catalog):
        page = catalog.list_page("creation_date_asc", page=1, page_size=2)

        assert [r.file_name for r in page.records] == ["v0.mp4", "v1.mp4"]
        assert page.total_count == 3
        assert page.has_more is True

    def test_list_page_for_folder(self, catalog):
        page = catalog.list_page(page=1, page_size=10, folder_name="Trip")

        assert [r.file_name for r in page.records] == ["v1.mp4", "v0.mp4"]
        assert page.has_more is False

    def test_folders_search_and_count(self, catalog):
        assert catalog.folders() == ["Home", "Trip"]
        assert [r.file_name for r in catalog.search("home")] == ["v2.mp4"]
        assert catalog.count() == 3
        assert len(catalog.videos_in_folder("Trip")) == 2
        assert [r.file_name for r in catalog.list_videos("name_desc")] == ["v2.mp4", "v1.mp4", "v0.mp4"]

    def test_mark_preloaded(self, catalog):
        record_id = catalog.search("v0")[0].id

        assert catalog.mark_preloaded(record_id, blob_url="blob:1") is True

        stored = catalog.get_video(record_id)
        assert stored.is_preloaded is True
        assert stored.blob_url == "blob:1"

    def test_mark_preloaded_without_url_keeps_existing_url(self, catalog):
        record_id = catalog.search("v0")[0].id
        catalog.mark_preloaded(record_id, blob_url="blob:1")

        assert catalog.mark_preloaded(record_id) is True

        stored = catalog.get_video(record_id)
        assert stored.is_preloaded is True
        assert stored.blob_url == "blob:1"

    def test_delete_and_clear(self, catalog):
        record_id = catalog.search("v0")[0].id

        assert catalog.delete_video(record_id) is True
        assert catalog.clear_index() == 2
        assert catalog.count() == 0


class TestToPresentation:
    def test_dates_in_milliseconds_and_camel_case_fields(self, record_factory):
        record = record_factory(creation_date=10, modified_date=20, blob_url="blob:x", is_preloaded=True)

        data = to_presentation(record)

        assert data["creation_date"] == 10_000
        assert data["modified_date"] == 20_000
        assert data["blobUrl"] == "blob:x"
        assert data["isPreloaded"] is True
        assert "blob_url" not in data
        assert data["full_path"] == record.full_path
