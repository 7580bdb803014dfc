import pytest

from storefront_suites.ui_testing.framework.element_actions import ElementAssertionError
from storefront_suites.ui_testing.framework.locators import LiveQuery
from storefront_suites.unit.storefront_fake import BASE_URL, CATALOG


@pytest.fixture
def products(fake_page):
    fake_page.goto(f"{BASE_URL}/products")
    return fake_page


def test_click_runs_element_handler(actions, products):
    actions.click('.navbar-nav a[href="/view_cart"]', "Cart link")
    assert products.path == "/view_cart"


def test_click_hidden_element_times_out_with_target(actions, products):
    with pytest.raises(ElementAssertionError) as excinfo:
        actions.click(".modal-footer .btn-success", "Continue shopping", timeout=300)

    error = excinfo.value
    assert error.target == "Continue shopping"
    assert error.condition == "be clickable"
    assert "Continue shopping" in str(error)
    assert "300ms" in str(error)


def test_click_waits_for_element_to_appear(actions, products):
    # The modal opens only after the add-to-cart handler has run
    actions.click(LiveQuery(".productinfo", products).eq(0).find(".add-to-cart"))
    actions.click(".modal-footer .btn-success", "Continue shopping")
    assert products.modal_open is False


def test_fill_and_type_text(actions, products):
    actions.fill("#search_product", "Top")
    assert actions.value_of("#search_product") == "Top"

    actions.type_text("#search_product", " Blue")
    actions.expect_value("#search_product", "Top Blue")

    actions.clear("#search_product")
    assert products.values["#search_product"] == ""


def test_strict_mode_violation_is_retried_then_reported(actions, products):
    with pytest.raises(ElementAssertionError) as excinfo:
        actions.click(".productinfo", timeout=300)
    assert "strict mode violation" in str(excinfo.value)


def test_getters(actions, products):
    assert actions.count_of(".productinfo") == len(CATALOG)
    assert actions.text_of(".features_items h2.title") == "ALL PRODUCTS"
    names = actions.texts_of(LiveQuery(".productinfo", products).find("p"))
    assert [n.strip() for n in names] == [p["name"] for p in CATALOG]
    assert actions.is_visible(".productinfo") is True
    assert actions.is_visible("#does-not-exist") is False


def test_expect_count_returns_observed_count(actions, products):
    assert actions.expect_count(".productinfo", len(CATALOG)) == len(CATALOG)
    assert actions.expect_count_greater_than(".productinfo", 0) == len(CATALOG)


def test_expect_count_failure_reports_last_count(actions, products):
    with pytest.raises(ElementAssertionError) as excinfo:
        actions.expect_count(".productinfo", 7, "Product cards", timeout=300)
    assert excinfo.value.observed == len(CATALOG)
    assert "Product cards" in str(excinfo.value)


def test_expect_visible_and_hidden(actions, products):
    actions.expect_visible(".features_items")
    actions.expect_hidden(".modal-footer .btn-success")
    actions.expect_hidden("#never-rendered")

    with pytest.raises(ElementAssertionError):
        actions.expect_visible("#never-rendered", timeout=200)


def test_expect_contains_text(actions, products):
    actions.expect_contains_text(".features_items h2.title", "ALL PRODUCTS")
    actions.expect_contains_text(".features_items h2.title", "all products", ignore_case=True)

    with pytest.raises(ElementAssertionError) as excinfo:
        actions.expect_contains_text(".features_items h2.title", "SALE", timeout=200)
    assert excinfo.value.observed == "ALL PRODUCTS"


def test_expect_attribute(actions, products):
    actions.expect_attribute(".logo img", "alt", "Website for automation practice")
    with pytest.raises(ElementAssertionError):
        actions.expect_attribute(".logo img", "alt", "Other", timeout=200)


def test_expect_url(actions, products):
    assert actions.expect_url_contains("/products").endswith("/products")
    actions.expect_url_not_contains("/login")

    with pytest.raises(ElementAssertionError) as excinfo:
        actions.expect_url_contains("/checkout", description="checkout click", timeout=200)
    assert excinfo.value.target == "page URL after checkout click"
    assert excinfo.value.observed == f"{BASE_URL}/products"


def test_misc_interactions(actions, products):
    actions.hover(LiveQuery(".productinfo", products).eq(1), "Second product")
    actions.press_key("Enter", "#search_product")
    actions.press_key("Escape")
    actions.trigger("#submit_search", "focus")
    actions.drag_and_drop("#search_product", "#submit_search")
    actions.upload_file("#search_product", "/tmp/file.txt")
    actions.scroll_into_view(".productinfo")

    assert products.hovered == [".productinfo >> nth=1"]
    assert products.keys == ["Enter", "Escape"]
    assert products.events == [("#submit_search", "focus")]
    assert products.drops == [("#search_product", "#submit_search")]


def test_select_option_rejects_unknown_method(actions, products):
    with pytest.raises(ValueError):
        actions.select_option("#search_product", "x", by="position")

    actions.select_option("#search_product", "2", by="index")
    assert products.values["#search_product"] == "2"


def test_check_and_uncheck(actions, products):
    actions.check("#search_product")
    assert products.values["#search_product"] == "on"
    actions.check("#search_product", checked=False)
    assert products.values["#search_product"] == ""
