import pytest
from catalogue.category.management import (
    DEFAULT_CATEGORIES,
    add_category,
    delete_category,
    list_categories,
    rename_category,
    seed_categories,
)
from shared.exceptions import ObjectNotFoundError, ValidationError


class TestCategories:
    def test_add_normalizes_and_returns_sorted_names(self, session):
        add_category(session, "Rings")
        names = add_category(session, " Anklets ")

        assert names == ["anklets", "rings"]

    def test_add_existing_category_is_rejected(self, session):
        add_category(session, "rings")

        with pytest.raises(ValidationError) as exc:
            add_category(session, "RINGS")

        assert exc.value.message == "Category already exists"

    def test_list_includes_categories_only_used_by_products(self, session, product):
        add_category(session, "rings")

        assert list_categories(session) == ["earrings", "rings"]

    def test_rename_moves_products_to_new_name(self, session, product):
        add_category(session, "earrings")

        names = rename_category(session, "earrings", "Ear Cuffs")

        session.refresh(product)
        assert names == ["ear cuffs"]
        assert product.category == "ear cuffs"

    def test_rename_onto_existing_name_is_rejected(self, session):
        add_category(session, "rings")
        add_category(session, "bands")

        with pytest.raises(ValidationError) as exc:
            rename_category(session, "bands", "rings")

        assert exc.value.message == "Category with that name already exists"

    def test_delete_missing_category_is_not_found(self, session):
        with pytest.raises(ObjectNotFoundError):
            delete_category(session, "tiaras")

    def test_seed_is_idempotent(self, session):
        seed_categories(session)
        names = seed_categories(session)

        assert names == sorted(DEFAULT_CATEGORIES)
