"""
In-memory stand-in for a Playwright page showing the storefront.

Only the slice of the sync Playwright API used by the framework is modelled.
The DOM is rebuilt from the simulator state on every locator resolution, so
navigation, modals and the cart behave like the live site for the flows the
unit tests drive. Elements are keyed by the exact selectors the page objects
use; a `>>` chain narrows with `nth=i` or descends into child selectors.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass, field
from fnmatch import fnmatch
from typing import Any, Callable, Dict, Iterator, List, Optional
from urllib.parse import urlparse

from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import TimeoutError as PlaywrightTimeoutError


BASE_URL = "https://storefront.test"

VALID_EMAIL = "shopper@example.com"
VALID_PASSWORD = "correct-horse-battery"

CATALOG = [
    {"name": "Blue Top", "price": "Rs. 500"},
    {"name": "Men Tshirt", "price": "Rs. 400"},
    {"name": "Sleeveless Dress", "price": "Rs. 1000"},
    {"name": "Stylish Dress", "price": "Rs. 1500"},
]

CONTACT_SUCCESS = "Success! Your details have been submitted successfully."


@dataclass
class FakeElement:
    text: str = ""
    visible: bool = True
    attrs: Dict[str, str] = field(default_factory=dict)
    children: Dict[str, List["FakeElement"]] = field(default_factory=dict)
    on_click: Optional[Callable[[], None]] = None
    value_key: Optional[str] = None


class FakeLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    # -- resolution ----------------------------------------------------------

    def _elements(self) -> List[FakeElement]:
        parts = [part.strip() for part in self.selector.split(">>")]
        elements = list(self.page.dom().get(parts[0], []))
        for part in parts[1:]:
            if part.startswith("nth="):
                index = int(part[4:])
                elements = [elements[index]] if -len(elements) <= index < len(elements) else []
            else:
                elements = [child for el in elements for child in el.children.get(part, [])]
        return elements

    def _single(self) -> FakeElement:
        elements = self._elements()
        if not elements:
            raise PlaywrightTimeoutError(f"Timeout: waiting for locator('{self.selector}')")
        if len(elements) > 1:
            raise PlaywrightError(
                f"strict mode violation: locator('{self.selector}') resolved to {len(elements)} elements"
            )
        return elements[0]

    def _actionable(self) -> FakeElement:
        element = self._single()
        if not element.visible:
            raise PlaywrightTimeoutError(f"Timeout: element '{self.selector}' is not visible")
        return element

    def locator(self, selector: str) -> "FakeLocator":
        return FakeLocator(self.page, f"{self.selector} >> {selector}")

    def nth(self, index: int) -> "FakeLocator":
        return FakeLocator(self.page, f"{self.selector} >> nth={index}")

    @property
    def first(self) -> "FakeLocator":
        return self.nth(0)

    # -- queries -------------------------------------------------------------

    def count(self) -> int:
        return len(self._elements())

    def is_visible(self) -> bool:
        elements = self._elements()
        return bool(elements) and self._single().visible

    def inner_text(self, timeout: Optional[float] = None) -> str:
        return self._single().text

    def text_content(self, timeout: Optional[float] = None) -> str:
        return self._single().text

    def all_inner_texts(self) -> List[str]:
        return [el.text for el in self._elements()]

    def get_attribute(self, name: str, timeout: Optional[float] = None) -> Optional[str]:
        return self._single().attrs.get(name)

    def input_value(self, timeout: Optional[float] = None) -> str:
        element = self._single()
        return self.page.values.get(element.value_key or self.selector, "")

    # -- actions -------------------------------------------------------------

    def click(self, timeout: Optional[float] = None, force: bool = False) -> None:
        element = self._single() if force else self._actionable()
        self.page.clicks.append(self.selector)
        if element.on_click:
            element.on_click()

    def dblclick(self, timeout: Optional[float] = None, force: bool = False) -> None:
        self.click(timeout=timeout, force=force)
        self.click(timeout=timeout, force=force)

    def fill(self, value: str, timeout: Optional[float] = None) -> None:
        element = self._actionable()
        self.page.values[element.value_key or self.selector] = value

    def press_sequentially(self, text: str, delay: float = 0, timeout: Optional[float] = None) -> None:
        element = self._actionable()
        key = element.value_key or self.selector
        self.page.values[key] = self.page.values.get(key, "") + text

    def clear(self, timeout: Optional[float] = None) -> None:
        self.fill("", timeout=timeout)

    def select_option(self, timeout: Optional[float] = None, **option: Any) -> List[str]:
        element = self._actionable()
        (value,) = option.values()
        self.page.values[element.value_key or self.selector] = str(value)
        return [str(value)]

    def check(self, timeout: Optional[float] = None) -> None:
        element = self._actionable()
        self.page.values[element.value_key or self.selector] = "on"

    def uncheck(self, timeout: Optional[float] = None) -> None:
        element = self._actionable()
        self.page.values[element.value_key or self.selector] = ""

    def hover(self, timeout: Optional[float] = None) -> None:
        self._actionable()
        self.page.hovered.append(self.selector)

    def set_input_files(self, files: Any, timeout: Optional[float] = None) -> None:
        element = self._single()
        self.page.values[element.value_key or self.selector] = str(files)

    def drag_to(self, target: "FakeLocator", timeout: Optional[float] = None) -> None:
        self._actionable()
        target._actionable()
        self.page.drops.append((self.selector, target.selector))

    def press(self, key: str, timeout: Optional[float] = None) -> None:
        self._actionable()
        self.page.keys.append(key)

    def dispatch_event(self, event: str, timeout: Optional[float] = None) -> None:
        self._single()
        self.page.events.append((self.selector, event))

    def scroll_into_view_if_needed(self, timeout: Optional[float] = None) -> None:
        self._single()


class FakeDialog:
    def __init__(self) -> None:
        self.accepted = False

    def accept(self) -> None:
        self.accepted = True

    def dismiss(self) -> None:
        self.accepted = False


@dataclass
class FakeResponse:
    url: str
    status: int


class FakeResponseInfo:
    def __init__(self) -> None:
        self._value: Optional[FakeResponse] = None

    @property
    def value(self) -> FakeResponse:
        if self._value is None:
            raise PlaywrightTimeoutError("Timeout: no matching response")
        return self._value


class FakeFrameLocator:
    def __init__(self, page: "FakePage", selector: str):
        self.page = page
        self.selector = selector

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self.page, f"{self.selector} >> {selector}")


def _url_matches(pattern: Any, url: str) -> bool:
    if callable(pattern):
        return bool(pattern(url))
    if isinstance(pattern, str):
        return fnmatch(url, pattern)
    return bool(pattern.search(url))


class FakeKeyboard:
    def __init__(self, page: "FakePage"):
        self.page = page

    def press(self, key: str) -> None:
        self.page.keys.append(key)


class FakeContext:
    def __init__(self) -> None:
        self._cookies: List[Dict[str, Any]] = []

    def clear_cookies(self) -> None:
        self._cookies.clear()

    def add_cookies(self, cookies: List[Dict[str, Any]]) -> None:
        self._cookies.extend(cookies)

    def cookies(self) -> List[Dict[str, Any]]:
        return list(self._cookies)


class FakePage:
    """Storefront simulator implementing the Page surface the harness uses."""

    def __init__(self, base_url: str = BASE_URL):
        self.base_url = base_url
        self.url = "about:blank"
        self.context = FakeContext()
        self.keyboard = FakeKeyboard(self)
        self.viewport: Optional[Dict[str, int]] = None
        self.local_storage: Dict[str, str] = {}
        self.values: Dict[str, str] = {}
        self.cart: List[Dict[str, str]] = []
        self.modal_open = False
        self.logged_in_as: Optional[str] = None
        self.login_error = ""
        # DOM reads on /view_cart that still show no rows, as while the table loads
        self.cart_render_delay = 0
        self.picker_open = False
        self.responses: List[FakeResponse] = []
        self.contact_submitted = False
        self.handlers: Dict[str, List[Callable[..., Any]]] = {}
        self.clicks: List[str] = []
        self.hovered: List[str] = []
        self.drops: List[tuple] = []
        self.keys: List[str] = []
        self.events: List[tuple] = []
        self.visits: List[str] = []

    # -- Page API ------------------------------------------------------------

    @property
    def path(self) -> str:
        return urlparse(self.url).path or "/"

    def goto(self, url: str, timeout: Optional[float] = None, wait_until: Optional[str] = None) -> None:
        if not url.startswith("http"):
            url = f"{self.base_url}{url}"
        self.url = url
        self.visits.append(self.path)
        self.modal_open = False
        self.login_error = ""
        self.contact_submitted = False
        self.picker_open = False

    def locator(self, selector: str) -> FakeLocator:
        return FakeLocator(self, selector)

    def frame_locator(self, selector: str) -> FakeFrameLocator:
        return FakeFrameLocator(self, selector)

    @contextmanager
    def expect_response(self, url_or_predicate: Any, timeout: Optional[float] = None) -> Iterator[FakeResponseInfo]:
        info = FakeResponseInfo()
        seen = len(self.responses)
        yield info
        for response in self.responses[seen:]:
            if _url_matches(url_or_predicate, response.url):
                info._value = response
                return

    def respond(self, path: str, status: int) -> None:
        """Record a network response, as the page scripts would trigger one."""
        self.responses.append(FakeResponse(f"{self.base_url}{path}", status))

    def title(self) -> str:
        return f"Automation Exercise{' - ' + self.path if self.path != '/' else ''}"

    def on(self, event: str, handler: Callable[..., Any]) -> None:
        self.handlers.setdefault(event, []).append(handler)

    def once(self, event: str, handler: Callable[..., Any]) -> None:
        def fire_once(payload: Any) -> None:
            self.handlers[event].remove(fire_once)
            handler(payload)

        self.on(event, fire_once)

    def emit(self, event: str, payload: Any) -> None:
        for handler in list(self.handlers.get(event, [])):
            handler(payload)

    def evaluate(self, script: str, arg: Any = None) -> Any:
        if "localStorage.setItem" in script:
            key, value = arg
            self.local_storage[key] = value
            return None
        if "localStorage.getItem" in script:
            return self.local_storage.get(arg)
        if "localStorage.clear" in script:
            self.local_storage.clear()
            return None
        return None

    def screenshot(self, path: Optional[str] = None, full_page: bool = False) -> bytes:
        data = b"\x89PNG fake"
        if path:
            with open(path, "wb") as f:
                f.write(data)
        return data

    def set_viewport_size(self, viewport: Dict[str, int]) -> None:
        self.viewport = dict(viewport)

    # -- storefront behaviour ------------------------------------------------

    def _navigate(self, path: str) -> Callable[[], None]:
        return lambda: self.goto(f"{self.base_url}{path}")

    def _submit_login(self) -> None:
        email = self.values.get('[data-qa="login-email"]', "")
        password = self.values.get('[data-qa="login-password"]', "")
        if not email or not password:
            # Browser-side required-field validation blocks the submit
            return
        if email == VALID_EMAIL and password == VALID_PASSWORD:
            self.logged_in_as = "Shopper"
            self.goto(f"{self.base_url}/")
        else:
            self.login_error = "Your email or password is incorrect!"

    def _add_to_cart(self, index: int) -> Callable[[], None]:
        def add() -> None:
            product = CATALOG[index]
            for item in self.cart:
                if item["name"] == product["name"]:
                    item["quantity"] = str(int(item["quantity"]) + 1)
                    break
            else:
                self.cart.append({**product, "quantity": "1"})
            self.modal_open = True
        return add

    def _close_modal(self) -> None:
        self.modal_open = False

    def _remove_from_cart(self, index: int) -> Callable[[], None]:
        return lambda: self.cart.pop(index)

    def _header(self) -> Dict[str, List[FakeElement]]:
        dom: Dict[str, List[FakeElement]] = {
            "body": [FakeElement()],
            "header": [FakeElement()],
            ".logo img": [FakeElement(attrs={"alt": "Website for automation practice"})],
            ".navbar-nav": [FakeElement(text="Home Products Cart Signup / Login Contact us")],
        }
        for href in ("/", "/products", "/view_cart", "/login", "/contact_us"):
            dom[f'.navbar-nav a[href="{href}"]'] = [
                FakeElement(attrs={"href": href}, on_click=self._navigate(href))
            ]
        if self.logged_in_as:
            dom['a[href="/logout"]'] = [FakeElement(on_click=self._logout)]
        return dom

    def _logout(self) -> None:
        self.logged_in_as = None
        self.goto(f"{self.base_url}/login")

    def _product_cards(self) -> List[FakeElement]:
        cards = []
        for index, product in enumerate(CATALOG):
            cards.append(FakeElement(
                text=f"{product['price']} {product['name']} Add to cart",
                children={
                    "p": [FakeElement(text=f" {product['name']} ")],
                    "h2": [FakeElement(text=product["price"])],
                    ".add-to-cart": [FakeElement(on_click=self._add_to_cart(index))],
                },
            ))
        return cards

    def dom(self) -> Dict[str, List[FakeElement]]:
        if not self.url.startswith("http"):
            return {}
        dom = self._header()
        path = self.path

        if path == "/":
            dom[".features_items"] = [FakeElement(text="Features Items")]
            dom[".left-sidebar"] = [FakeElement()]

        elif path == "/login":
            dom[".login-form"] = [FakeElement(text="Login to your account")]
            dom[".signup-form"] = [FakeElement(text="New User Signup!")]
            for qa in ("login-email", "login-password", "signup-name", "signup-email"):
                dom[f'[data-qa="{qa}"]'] = [FakeElement(value_key=f'[data-qa="{qa}"]')]
            dom['[data-qa="login-button"]'] = [FakeElement(on_click=self._submit_login)]
            dom['[data-qa="signup-button"]'] = [FakeElement(on_click=self._navigate("/signup"))]
            if self.login_error:
                dom[".login-form p"] = [FakeElement(text=self.login_error)]

        elif path == "/products":
            dom[".features_items"] = [FakeElement(text="All Products")]
            dom[".features_items h2.title"] = [FakeElement(text="ALL PRODUCTS")]
            dom[".productinfo"] = self._product_cards()
            dom["#search_product"] = [FakeElement(value_key="#search_product")]
            dom["#submit_search"] = [FakeElement()]
            dom[".modal-footer .btn-success"] = [
                FakeElement(text="Continue Shopping", visible=self.modal_open, on_click=self._close_modal)
            ]
            dom['.modal-body a[href="/view_cart"]'] = [
                FakeElement(text="View Cart", visible=self.modal_open, on_click=self._navigate("/view_cart"))
            ]

        elif path == "/view_cart":
            dom["#cart_info_table"] = [FakeElement()]
            rows = []
            rendered = [] if self.cart_render_delay > 0 else self.cart
            self.cart_render_delay = max(self.cart_render_delay - 1, 0)
            for item in rendered:
                price = int(item["price"].split()[-1])
                total = price * int(item["quantity"])
                rows.append(FakeElement(
                    text=f"{item['name']} {item['price']} {item['quantity']} Rs. {total}",
                    children={
                        ".cart_description h4": [FakeElement(text=item["name"])],
                        ".cart_price p": [FakeElement(text=item["price"])],
                        ".cart_quantity button": [FakeElement(text=item["quantity"])],
                        ".cart_total_price": [FakeElement(text=f"Rs. {total}")],
                    },
                ))
            dom["#cart_info_table tbody tr"] = rows
            dom[".cart_quantity_delete"] = [
                FakeElement(on_click=self._remove_from_cart(i)) for i in range(len(rendered))
            ]
            dom["#empty_cart"] = [FakeElement(text="Cart is empty!", visible=not self.cart)]
            dom[".check_out"] = [FakeElement(on_click=self._proceed_to_checkout)]
            dom["#checkoutModal .modal-body"] = [
                FakeElement(
                    text="Register / Login account to proceed on checkout.",
                    visible=self.modal_open,
                )
            ]

        elif path == "/contact_us":
            dom[".contact-form"] = [FakeElement(text="Get In Touch")]
            for qa in ("name", "email", "subject", "message"):
                dom[f'[data-qa="{qa}"]'] = [FakeElement(value_key=f'[data-qa="{qa}"]')]
            dom['input[name="upload_file"]'] = [FakeElement(value_key="upload_file")]
            dom['input[name="submit"]'] = [FakeElement(on_click=self._submit_contact)]
            if self.contact_submitted:
                dom[".contact-form .status"] = [FakeElement(text=CONTACT_SUCCESS)]
                dom["#form-section .btn-success"] = [FakeElement(on_click=self._navigate("/"))]

        elif path == "/widgets":
            dom["#editor-frame"] = [FakeElement(children={"body": [FakeElement(text="Editor ready")]})]
            dom["#delivery-date"] = [FakeElement(on_click=self._open_picker)]
            dom[".datepicker"] = [FakeElement(
                visible=self.picker_open,
                children={
                    f"text={day}": [FakeElement(
                        text=str(day), visible=self.picker_open, on_click=self._pick_date(str(day))
                    )]
                    for day in range(1, 29)
                },
            )]

        return dom

    def _submit_contact(self) -> None:
        dialog = FakeDialog()
        self.emit("dialog", dialog)
        self.contact_submitted = dialog.accepted

    def _open_picker(self) -> None:
        self.picker_open = True

    def _pick_date(self, day: str) -> Callable[[], None]:
        def pick() -> None:
            self.values["#delivery-date"] = day
            self.picker_open = False

        return pick

    def _proceed_to_checkout(self) -> None:
        if self.logged_in_as:
            self.goto(f"{self.base_url}/checkout")
        else:
            self.modal_open = True


__all__ = [
    "BASE_URL",
    "CATALOG",
    "CONTACT_SUCCESS",
    "FakeElement",
    "FakeLocator",
    "FakePage",
    "FakeResponse",
    "VALID_EMAIL",
    "VALID_PASSWORD",
]
