"""My Little Cook - domain logic (settings, slot defaults, ingredients, shopping list)."""
