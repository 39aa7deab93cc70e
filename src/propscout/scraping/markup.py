"""Pinnacle markup binding: selectors and in-page scripts.

The scripts only read or click; parsing happens in
:mod:`propscout.scraping.normalizer`.
"""

from __future__ import annotations

from dataclasses import dataclass

from propscout.scraping.normalizer import RawPropRow


@dataclass(frozen=True)
class SiteMarkup:
    game_link: str
    prop_row: str
    expanded_prop_row: str
    row_title: str
    row_title_text: str
    market_button: str
    market_label: str
    market_price: str


PINNACLE_MARKUP = SiteMarkup(
    game_link="a.btn-A8l3Dghoy5",
    prop_row='div[data-test-id^="Event.Row"]',
    expanded_prop_row='div[data-test-id^="Event.Row"]:not([data-collapsed="true"])',
    row_title=".title-BzVHkr9xRI",
    row_title_text=".titleText-BgvECQYfHf",
    market_button="button.market-btn",
    market_label=".label-GT4CkXEOFj",
    market_price=".price-r5BU0ynJha",
)

GAME_HREFS_SCRIPT = "links => links.map(link => link.getAttribute('href'))"

EXPAND_ROWS_SCRIPT = """
([rowSelector, titleSelector]) => {
    let clicked = 0;
    document.querySelectorAll(rowSelector).forEach(row => {
        if (row.getAttribute('data-collapsed') === 'true') {
            const title = row.querySelector(titleSelector);
            if (title) {
                title.click();
                clicked += 1;
            }
        }
    });
    return clicked;
}
"""


def row_text_script(markup: SiteMarkup) -> str:
    """Build the mapper that reads raw text out of every expanded row."""

    return f"""
rows => rows.map(row => {{
    const text = (el, sel) => {{
        const node = el ? el.querySelector(sel) : null;
        return node && node.textContent !== null ? node.textContent.trim() : null;
    }};
    const buttons = row.querySelectorAll({markup.market_button!r});
    const over = buttons[0] || null;
    const under = buttons[1] || null;
    return {{
        title: text(row, {markup.row_title_text!r}) || '',
        overLabel: text(over, {markup.market_label!r}),
        overPrice: text(over, {markup.market_price!r}),
        underPrice: text(under, {markup.market_price!r}),
        hasOver: over !== null,
        hasUnder: under !== null,
    }};
}})
"""


def raw_row_from_payload(payload: dict) -> RawPropRow:
    return RawPropRow(
        title=payload.get("title") or "",
        over_label=payload.get("overLabel"),
        over_price=payload.get("overPrice"),
        under_price=payload.get("underPrice"),
        has_over=bool(payload.get("hasOver")),
        has_under=bool(payload.get("hasUnder")),
    )
