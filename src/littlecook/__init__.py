"""
My Little Cook - meal planning service.

Recipes, weekly meal plans and shopping lists behind an
authenticated web front end.
"""

__version__ = "1.0.0"
