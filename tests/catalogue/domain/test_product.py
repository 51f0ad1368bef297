from catalogue.category.category import normalize_category_name
from catalogue.product.product import Product, product_number


def test_decrement_stock_never_goes_below_zero():
    product = Product(id="va-01", stock_qty=2)

    product.decrement_stock(5)

    assert product.stock_qty == 0


def test_decrement_stock_subtracts_quantity():
    product = Product(id="va-01", stock_qty=10)

    product.decrement_stock(3)

    assert product.stock_qty == 7


def test_product_number_parses_generated_ids():
    assert product_number("va-07") == 7
    assert product_number("va-120") == 120
    assert product_number("custom-id") == 0


def test_category_names_are_trimmed_and_lowercased():
    assert normalize_category_name("  Necklaces ") == "necklaces"
    assert normalize_category_name(None) == ""
