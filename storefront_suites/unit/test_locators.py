from storefront_suites.ui_testing.framework.locators import LiveQuery, resolve
from storefront_suites.unit.storefront_fake import BASE_URL, CATALOG


def test_narrowing_builds_selector_chain_without_resolving():
    # A context that fails on use proves eq/find never touch the DOM
    query = LiveQuery(".productinfo", context=None, description="Product card")

    second = query.eq(1)
    button = second.find(".add-to-cart", "Add to cart")

    assert second.selector == ".productinfo >> nth=1"
    assert second.label == "Product card [1]"
    assert button.selector == ".productinfo >> nth=1 >> .add-to-cart"
    assert str(button) == "Add to cart (.productinfo >> nth=1 >> .add-to-cart)"
    assert query.first().selector == ".productinfo >> nth=0"


def test_label_falls_back_to_selector():
    assert LiveQuery("#cart_info_table", None).label == "#cart_info_table"
    assert LiveQuery("p", None).find("span").label == "p span"


def test_query_reflects_state_after_rerender(fake_page):
    rows = LiveQuery("#cart_info_table tbody tr", fake_page, "Cart rows")
    fake_page.goto(f"{BASE_URL}/view_cart")
    assert rows.resolve().count() == 0

    fake_page.cart.append({**CATALOG[0], "quantity": "1"})
    assert rows.resolve().count() == 1

    fake_page.cart.clear()
    assert rows.resolve().count() == 0


def test_out_of_range_index_is_only_detected_on_use(fake_page):
    fake_page.goto(f"{BASE_URL}/products")
    missing = LiveQuery(".productinfo", fake_page).eq(99)
    assert missing.resolve().count() == 0


def test_resolve_uses_context_locator(fake_page):
    fake_page.goto(f"{BASE_URL}/products")
    assert resolve(".productinfo", fake_page).count() == len(CATALOG)
