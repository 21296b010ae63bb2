"""
shoppingList.* and recipeImport.* procedures.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from supabase import Client

from littlecook.db.client import get_db
from littlecook.domain.ingredients import ParsedIngredient, parse_ingredient_list
from littlecook.domain.shopping_list import (
    GenerateShoppingListInput,
    ShoppingList,
    generate_shopping_list,
)
from littlecook.web.auth import get_current_session
from littlecook.web.session import Session

router = APIRouter(prefix="/trpc", tags=["shoppingList"])


class ParseIngredientsRequest(BaseModel):
    lines: list[str]


@router.post("/shoppingList.generate", response_model=ShoppingList)
async def generate_shopping_list_procedure(
    body: GenerateShoppingListInput,
    session: Session = Depends(get_current_session),
    client: Client = Depends(get_db),
):
    return await generate_shopping_list(client, session.user_id, body)


@router.post("/recipeImport.parseIngredients", response_model=list[ParsedIngredient])
async def parse_ingredients_procedure(
    body: ParseIngredientsRequest,
    session: Session = Depends(get_current_session),
):
    """Structured ingredients from pasted recipe lines."""
    return parse_ingredient_list(body.lines)
