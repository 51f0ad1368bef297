import pytest
from catalogue.carousel.management import create_slide, delete_slide, list_slides, reorder_slides, update_slide
from catalogue.collection.management import (
    create_collection,
    list_all_collections,
    list_public_collections,
    update_collection,
)
from catalogue.settings.site_settings import DEFAULT_SITE_LOGO, get_site_settings, update_site_settings
from shared.exceptions import ValidationError


class TestCollections:
    def test_public_list_hides_inactive_and_orders_by_display_order(self, session):
        create_collection(session, {"name": "Bridal", "slug": "bridal", "display_order": 2})
        create_collection(session, {"name": "Festive", "slug": "festive", "display_order": 1, "is_featured": True})
        create_collection(session, {"name": "Archive", "slug": "archive", "is_active": False})

        assert [c["slug"] for c in list_public_collections(session)] == ["festive", "bridal"]
        assert [c["slug"] for c in list_public_collections(session, featured_only=True)] == ["festive"]
        assert len(list_all_collections(session)) == 3

    def test_duplicate_slug_is_rejected(self, session):
        create_collection(session, {"name": "Bridal", "slug": "bridal"})

        with pytest.raises(ValidationError) as exc:
            create_collection(session, {"name": "Bridal Again", "slug": "bridal"})

        assert exc.value.message == "Collection with this slug already exists"

    def test_updates_are_visible_on_next_public_read(self, session):
        collection = create_collection(session, {"name": "Bridal", "slug": "bridal"})
        assert list_public_collections(session)[0]["name"] == "Bridal"

        update_collection(session, collection.id, {"name": "Bridal Edit"})

        assert list_public_collections(session)[0]["name"] == "Bridal Edit"


class TestCarousel:
    def test_order_defaults_to_next_position(self, session):
        first = create_slide(session, {"image_url": "/img/1.jpg"})
        second = create_slide(session, {"image_url": "/img/2.jpg"})

        assert (first.order, second.order) == (1, 2)

    def test_empty_update_is_rejected(self, session):
        slide = create_slide(session, {"image_url": "/img/1.jpg"})

        with pytest.raises(ValidationError):
            update_slide(session, slide.id, {})

    def test_inactive_slides_only_listed_with_all(self, session):
        create_slide(session, {"image_url": "/img/1.jpg"})
        hidden = create_slide(session, {"image_url": "/img/2.jpg"})
        update_slide(session, hidden.id, {"is_active": False})

        assert len(list_slides(session)) == 1
        assert len(list_slides(session, active_only=False)) == 2

    def test_reorder_applies_new_positions(self, session):
        first = create_slide(session, {"image_url": "/img/1.jpg"})
        second = create_slide(session, {"image_url": "/img/2.jpg"})

        reorder_slides(session, [{"id": first.id, "order": 2}, {"id": second.id, "order": 1}])

        assert [slide["id"] for slide in list_slides(session)] == [second.id, first.id]

    def test_delete_removes_slide(self, session):
        slide = create_slide(session, {"image_url": "/img/1.jpg"})

        delete_slide(session, slide.id)

        assert list_slides(session, active_only=False) == []


class TestSiteSettings:
    def test_defaults_when_never_saved(self, session):
        assert get_site_settings(session)["site_logo"] == DEFAULT_SITE_LOGO

    def test_update_records_editor_and_refreshes_cache(self, session):
        get_site_settings(session)

        update_site_settings(session, {"site_icon": "/favicon.png"}, updated_by="arjun")

        settings = get_site_settings(session)
        assert settings["site_icon"] == "/favicon.png"
        assert settings["updated_by"] == "arjun"

    def test_empty_update_is_rejected(self, session):
        with pytest.raises(ValidationError) as exc:
            update_site_settings(session, {}, updated_by="arjun")

        assert exc.value.message == "No updates provided"
