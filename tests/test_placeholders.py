"""Tests for loading skeletons."""

from littlecook.web.placeholders import (
    admin_table_skeleton,
    count,
    planning_grid_skeleton,
    recipe_card_skeleton,
    recipe_list_skeleton,
    render_html,
    render_page,
    shopping_list_skeleton,
)


def test_planning_grid_structure():
    grid = planning_grid_skeleton()

    header, *meal_rows = grid.children
    assert len(header.children) == 7
    assert len(meal_rows) == 3
    assert count(grid, "card") == 21
    assert count(grid, "skeleton") == 7 * 2 + 3 * (1 + 7 * 2)


def test_recipe_card_structure():
    card = recipe_card_skeleton()

    assert count(card, "card") == 1
    assert count(card, "skeleton") == 11


def test_recipe_list_structure():
    assert count(recipe_list_skeleton(cards=4), "card") == 4


def test_shopping_list_structure():
    skeleton = shopping_list_skeleton()

    assert count(skeleton, "card") == 5
    assert count(skeleton, "skeleton") == (1 + 3 * 2) + 4 * (1 + 3 * 4)


def test_render_is_deterministic():
    assert render_html(planning_grid_skeleton()) == render_html(planning_grid_skeleton())


def test_render_html_emits_one_div_per_node():
    card = recipe_card_skeleton()
    html = render_html(card)

    nodes = count(card, "card") + count(card, "skeleton") + count(card, "group")
    assert html.count("<div") == nodes


def test_render_page_escapes_title():
    page = render_page("<Planning>", recipe_card_skeleton())

    assert "&lt;Planning&gt;" in page
    assert page.startswith("<!DOCTYPE html>")


def test_admin_table_structure():
    skeleton = admin_table_skeleton(rows=5)

    toolbar, table = skeleton.children
    assert count(toolbar, "skeleton") == 2
    assert count(table, "card") == 1
    assert len(table.children) == 1 + 5
    assert count(skeleton, "skeleton") == 2 + (1 + 5) * 3
