"""
Free-text ingredient parsing.

Turns lines like "2 1/2 tasses de farine (tamisée)" into quantity, unit,
name, notes and a shopping category. Understands French and English units,
French decimal commas and small number words ("deux oignons").
"""

import re

from pydantic import BaseModel


class ParsedIngredient(BaseModel):
    quantity: float
    unit: str
    name: str
    notes: str | None = None
    category: str


# Spelling -> canonical unit. Checked in order, first match wins.
UNITS: dict[str, str] = {
    # Volume
    "ml": "ml",
    "millilitre": "ml",
    "millilitres": "ml",
    "cl": "cl",
    "centilitre": "cl",
    "centilitres": "cl",
    "dl": "dl",
    "décilitre": "dl",
    "décilitres": "dl",
    "l": "l",
    "litre": "l",
    "litres": "l",
    "tasse": "tasse",
    "tasses": "tasse",
    "cup": "tasse",
    "cups": "tasse",
    "cuillère à café": "c. à café",
    "cuillères à café": "c. à café",
    "c. à café": "c. à café",
    "cac": "c. à café",
    "tsp": "c. à café",
    "teaspoon": "c. à café",
    "teaspoons": "c. à café",
    "cuillère à soupe": "c. à soupe",
    "cuillères à soupe": "c. à soupe",
    "c. à soupe": "c. à soupe",
    "cas": "c. à soupe",
    "tbsp": "c. à soupe",
    "tablespoon": "c. à soupe",
    "tablespoons": "c. à soupe",
    # Weight
    "g": "g",
    "gramme": "g",
    "grammes": "g",
    "gr": "g",
    "kg": "kg",
    "kilogramme": "kg",
    "kilogrammes": "kg",
    "oz": "oz",
    "ounce": "oz",
    "ounces": "oz",
    "lb": "lb",
    "pound": "lb",
    "pounds": "lb",
    # Pieces
    "pièce": "pièce",
    "pièces": "pièce",
    "pc": "pièce",
    "piece": "pièce",
    "pieces": "pièce",
    "unité": "pièce",
    "unités": "pièce",
    "item": "pièce",
    "items": "pièce",
    # Special measures
    "pincée": "pincée",
    "pincées": "pincée",
    "pinch": "pincée",
    "poignée": "poignée",
    "poignées": "poignée",
    "handful": "poignée",
    "tranche": "tranche",
    "tranches": "tranche",
    "slice": "tranche",
    "slices": "tranche",
    "gousse": "gousse",
    "gousses": "gousse",
    "clove": "gousse",
    "cloves": "gousse",
    "feuille": "feuille",
    "feuilles": "feuille",
    "leaf": "feuille",
    "leaves": "feuille",
    "botte": "botte",
    "bottes": "botte",
    "bunch": "botte",
    "bunches": "botte",
    "brin": "brin",
    "brins": "brin",
    "sprig": "brin",
    "sprigs": "brin",
}

DEFAULT_UNIT = "pièce"

# Category -> name fragments. Checked in order, first match wins.
CATEGORIES: dict[str, list[str]] = {
    "légumes": [
        "tomate", "oignon", "carotte", "poivron", "courgette", "aubergine",
        "pomme de terre", "pommes de terre", "patate", "champignon", "épinards",
        "salade", "laitue", "concombre", "radis", "navet", "chou", "brocoli",
        "haricot", "petit pois", "petits pois", "artichaut", "asperge",
    ],
    "fruits": [
        "pomme", "poire", "banane", "orange", "citron", "lime", "fraise",
        "cerise", "pêche", "abricot", "prune", "raisin", "melon", "pastèque",
        "ananas", "kiwi", "mangue", "avocat",
    ],
    "viandes": [
        "bœuf", "porc", "agneau", "veau", "poulet", "poule", "canard", "dinde",
        "lapin", "jambon", "lard", "bacon", "saucisse", "merguez", "chorizo",
        "steak", "escalope", "côte", "rôti",
    ],
    "poissons": [
        "saumon", "thon", "cabillaud", "morue", "sole", "truite", "bar",
        "dorade", "sardine", "anchois", "maquereau", "hareng", "crevette",
        "moule", "huître", "crabe", "homard", "calamar",
    ],
    "produits laitiers": [
        "lait", "crème", "beurre", "fromage", "yaourt", "yogourt",
        "mascarpone", "ricotta", "mozzarella", "gruyère", "emmental",
        "parmesan", "chèvre", "roquefort", "camembert", "brie",
    ],
    "céréales": [
        "farine", "riz", "pâtes", "spaghetti", "macaroni", "quinoa", "boulgour",
        "semoule", "avoine", "orge", "blé", "pain", "biscottes", "céréales",
    ],
    "épices": [
        "sel", "poivre", "paprika", "cumin", "curry", "thym", "romarin",
        "basilic", "persil", "ciboulette", "origan", "laurier", "cannelle",
        "vanille", "gingembre", "ail", "échalote", "moutarde",
    ],
    "condiments": [
        "huile", "vinaigre", "mayonnaise", "ketchup", "sauce soja", "tabasco",
        "worcestershire",
    ],
    "autres": [
        "œuf", "sucre", "miel", "levure", "bicarbonate", "gélatine", "chocolat",
        "cacao", "café", "thé", "eau",
    ],
}

DEFAULT_CATEGORY = "autres"

WORD_NUMBERS = {
    "un": 1, "une": 1, "deux": 2, "trois": 3, "quatre": 4,
    "cinq": 5, "six": 6, "sept": 7, "huit": 8, "neuf": 9, "dix": 10,
}

_MIXED = re.compile(r"^(\d+)\s+(\d+)/(\d+)")
_FRACTION = re.compile(r"^(\d+)/(\d+)")
_DECIMAL = re.compile(r"^\d+[.,]\d+")
_WHOLE = re.compile(r"^\d+")
_WORD = re.compile(r"^(une|un|deux|trois|quatre|cinq|six|sept|huit|neuf|dix)\b")

_BULLET = re.compile(r"^[-•*\s]*(\[[x\s]\])?\s*")
_PARENTHESES = re.compile(r"^(.*?)\s*\(([^)]+)\)\s*(.*)$")
_TRAILING_NOTE = re.compile(r"^(.*?),\s*([^,]+)$")
_PREPARATION = re.compile(
    r"\b(?:(?:haché|râpé|coupé|tranché|émincé)e?s?|en dés|en rondelles|finement|grossièrement)\b"
)
_ARTICLE = re.compile(r"^(?:(?:de|du|des|la|le|les|un|une)\s+|d'|l')")

_UNIT_PATTERNS = [
    (re.compile(rf"^{re.escape(spelling)}(?![\w'])"), unit)
    for spelling, unit in UNITS.items()
]


def normalize_text(text: str) -> str:
    text = text.lower().strip()
    text = re.sub(r"[’‘]", "'", text)
    return re.sub(r"\s+", " ", text)


def _match_number(text: str) -> tuple[float, str] | None:
    """Leading numeric quantity and the rest of the text."""
    match = _MIXED.match(text)
    if match and int(match.group(3)):
        whole, num, den = (int(g) for g in match.groups())
        return whole + num / den, text[match.end():]

    match = _FRACTION.match(text)
    if match and int(match.group(2)):
        return int(match.group(1)) / int(match.group(2)), text[match.end():]

    match = _DECIMAL.match(text)
    if match:
        return float(match.group(0).replace(",", ".")), text[match.end():]

    match = _WHOLE.match(text)
    if match:
        return float(match.group(0)), text[match.end():]

    return None


def quantity_value(text: str | int | float | None) -> float | None:
    """
    First number found in a stored quantity ("200", "1,5", "environ 1/2").

    None when the text holds no number ("au goût").
    """
    if text is None:
        return None
    if isinstance(text, (int, float)):
        return float(text)
    normalized = re.sub(r"^\D*", "", normalize_text(text))
    found = _match_number(normalized)
    return found[0] if found else None


def parse_quantity(text: str) -> tuple[float, str]:
    """Quantity at the start of text, defaulting to 1."""
    normalized = normalize_text(text)

    found = _match_number(normalized)
    if found:
        quantity, remaining = found
        return quantity, remaining.strip()

    match = _WORD.match(normalized)
    if match:
        return float(WORD_NUMBERS[match.group(1)]), normalized[match.end():].strip()

    return 1.0, normalized


def parse_unit(text: str) -> tuple[str, str]:
    """Canonical unit at the start of text, defaulting to pieces."""
    normalized = normalize_text(text)
    for pattern, unit in _UNIT_PATTERNS:
        match = pattern.match(normalized)
        if match:
            return unit, normalized[match.end():].strip()
    return DEFAULT_UNIT, normalized


def extract_notes(text: str) -> tuple[str, str | None]:
    """Split "(notes)" or a trailing ", preparation" off the name."""
    text = text.strip()

    match = _PARENTHESES.match(text)
    if match:
        before, notes, after = match.groups()
        return f"{before} {after}".strip(), notes.strip()

    match = _TRAILING_NOTE.match(text)
    if match and _PREPARATION.search(match.group(2)):
        return match.group(1).strip(), match.group(2).strip()

    return text, None


def categorize(name: str) -> str:
    normalized = normalize_text(name)
    for category, fragments in CATEGORIES.items():
        if any(fragment in normalized for fragment in fragments):
            return category
    return DEFAULT_CATEGORY


def parse_ingredient(line: str) -> ParsedIngredient:
    text = _BULLET.sub("", normalize_text(line), count=1)

    quantity, after_quantity = parse_quantity(text)
    unit, after_unit = parse_unit(after_quantity)
    name, notes = extract_notes(after_unit)
    name = _ARTICLE.sub("", name, count=1).strip()

    return ParsedIngredient(
        quantity=quantity,
        unit=unit,
        name=name,
        notes=notes,
        category=categorize(name),
    )


def parse_ingredient_list(lines: list[str]) -> list[ParsedIngredient]:
    """Parse every non-blank line."""
    return [parse_ingredient(line) for line in lines if line.strip()]
