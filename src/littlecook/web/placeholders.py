"""
Loading skeletons for the protected pages.

Pure structure: fixed numbers of grey blocks laid out like the real
screens, rendered to static HTML while the front end fetches data.
"""

from dataclasses import dataclass, field
from html import escape

from littlecook.domain.constants import DAYS_FRENCH, MEAL_TYPES_FRENCH


@dataclass
class Block:
    """One node of a skeleton tree."""
    kind: str  # "skeleton" | "card" | "group"
    css: str = ""
    children: list["Block"] = field(default_factory=list)


def _bar(css: str) -> Block:
    return Block("skeleton", css)


def _card(css: str, *children: Block) -> Block:
    return Block("card", css, list(children))


def _group(css: str, *children: Block) -> Block:
    return Block("group", css, list(children))


def planning_grid_skeleton() -> Block:
    """Week header (one cell per day) then one row of day cards per meal."""
    days = len(DAYS_FRENCH)

    header = _group("grid grid-cols-7 gap-2 mb-4", *[
        _group("text-center", _bar("h-4 w-16 mx-auto mb-1"), _bar("h-6 w-8 mx-auto"))
        for _ in range(days)
    ])

    meal_rows = [
        _group(
            "space-y-2",
            _bar("h-5 w-32"),
            _group("grid grid-cols-7 gap-2", *[
                _card("p-2 min-h-[80px]", _bar("h-4 w-full mb-2"), _bar("h-3 w-3/4"))
                for _ in range(days)
            ]),
        )
        for _ in MEAL_TYPES_FRENCH
    ]

    return _group("space-y-4", header, *meal_rows)


def recipe_card_skeleton() -> Block:
    return _card(
        "overflow-hidden",
        _bar("h-40 sm:h-48 w-full"),
        _group(
            "p-4 sm:p-6 space-y-3",
            _bar("h-5 w-3/4"),
            _bar("h-4 w-full"),
            _bar("h-4 w-5/6"),
            _group("flex items-center space-x-4", _bar("h-4 w-16"), _bar("h-4 w-16")),
            _group("flex space-x-2", _bar("h-6 w-16 rounded-full"), _bar("h-6 w-20 rounded-full")),
            _group(
                "flex justify-between items-center",
                _bar("h-8 w-24"),
                _group("flex space-x-2", _bar("h-8 w-8"), _bar("h-8 w-8")),
            ),
        ),
    )


def recipe_list_skeleton(cards: int = 6) -> Block:
    return _group("grid grid-cols-1 sm:grid-cols-2 lg:grid-cols-3 gap-4", *[
        recipe_card_skeleton() for _ in range(cards)
    ])


def shopping_list_skeleton() -> Block:
    """Summary card with three stats, then four categories of three items."""
    summary = _card(
        "p-4",
        _bar("h-6 w-48 mb-4"),
        _group("grid grid-cols-1 sm:grid-cols-3 gap-4", *[
            _group("text-center", _bar("h-8 w-12 mx-auto mb-2"), _bar("h-4 w-20 mx-auto"))
            for _ in range(3)
        ]),
    )

    def item() -> Block:
        return _group(
            "flex items-center space-x-3",
            _bar("h-5 w-5 rounded"),
            _group("flex-1", _bar("h-4 w-3/4 mb-1"), _bar("h-3 w-1/2")),
            _bar("h-6 w-16"),
        )

    categories = [
        _card("p-4", _bar("h-5 w-32 mb-4"), _group("space-y-3", *[item() for _ in range(3)]))
        for _ in range(4)
    ]

    return _group("space-y-4", summary, *categories)


def admin_table_skeleton(rows: int = 5) -> Block:
    """Toolbar, then a table card with a header and `rows` rows of three cells."""
    toolbar = _group("flex justify-between items-center", _bar("h-8 w-48"), _bar("h-9 w-32"))

    def row(css: str) -> Block:
        return _group(f"grid grid-cols-3 gap-4 {css}", _bar("h-4 w-3/4"), _bar("h-4 w-1/2"), _bar("h-4 w-16"))

    table = _card("p-4 space-y-3", row("pb-2 border-b"), *[row("py-2") for _ in range(rows)])
    return _group("space-y-4", toolbar, table)


def count(block: Block, kind: str) -> int:
    """Number of nodes of the given kind in the tree, root included."""
    own = 1 if block.kind == kind else 0
    return own + sum(count(child, kind) for child in block.children)


def render_html(block: Block) -> str:
    classes = {
        "skeleton": "animate-pulse rounded-md bg-gray-200",
        "card": "rounded-lg border bg-white shadow-sm",
        "group": "",
    }[block.kind]
    css = escape(" ".join(c for c in (classes, block.css) if c))
    inner = "".join(render_html(child) for child in block.children)
    return f'<div class="{css}">{inner}</div>'


def render_page(title: str, body: Block) -> str:
    """Minimal HTML document wrapping a skeleton."""
    return (
        "<!DOCTYPE html>"
        '<html lang="fr"><head><meta charset="utf-8">'
        f"<title>{escape(title)} - My Little Cook</title></head>"
        f'<body><main class="container mx-auto p-4">{render_html(body)}</main></body></html>'
    )
