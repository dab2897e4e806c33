from dataclasses import asdict
from typing import Optional

from fastapi import APIRouter, Form, HTTPException, Request
from fastapi.responses import PlainTextResponse

from meal_compass.core.shopping_list import CATEGORIES, ShoppingList

router = APIRouter(prefix="/shopping", tags=["shopping"])


def _list_context(shopping: ShoppingList) -> dict:
    custom_ids = {item.id for item in shopping.custom_items}
    return {
        "categories": {
            category: [
                {**asdict(line), "custom": getattr(line, "id", None) in custom_ids}
                for line in lines
            ]
            for category, lines in shopping.grouped().items()
        },
        "total_price": round(shopping.total_price(), 2),
        "all_selected": shopping.all_selected,
    }


@router.get("")
def shopping_page(request: Request):
    return _list_context(request.app.state.shopping_list)


@router.post("/generate")
def shopping_generate(request: Request):
    """Re-aggregate the list from the current meal plan. Custom lines are kept."""
    shopping = request.app.state.shopping_list
    shopping.rebuild(request.app.state.schedule.items)
    return _list_context(shopping)


# ── Custom lines ───────────────────────────────────────────────────────────────

@router.post("/items")
def shopping_add_item(
    request: Request,
    name: str = Form(...),
    amount: float = Form(1),
    unit: str = Form("pcs"),
    category: str = Form("other"),
    product_name: str = Form(""),
    price: str = Form(""),
):
    if category not in CATEGORIES:
        raise HTTPException(status_code=400, detail=f"Unknown category: {category}")
    item = request.app.state.shopping_list.add_custom_item(
        name, amount, unit.strip() or "pcs", category,
        product_name.strip() or None, price.strip() or None,
    )
    if item is None:
        raise HTTPException(status_code=400, detail="Item name is required")
    return asdict(item)


@router.delete("/items/{item_id}")
def shopping_remove_item(request: Request, item_id: str):
    request.app.state.shopping_list.remove_custom_item(item_id)
    return {"deleted": item_id}


# ── Toggles ────────────────────────────────────────────────────────────────────

def _toggle(shopping: ShoppingList, field: str, name: Optional[str], item_id: Optional[str]) -> dict:
    """Flip a flag on an aggregated line (by name) or a custom line (by id)."""
    if item_id:
        toggle = shopping.toggle_custom_checked if field == "checked" else shopping.toggle_custom_selected
        line = toggle(item_id)
    elif name:
        toggle = shopping.toggle_checked if field == "checked" else shopping.toggle_selected
        line = toggle(name)
    else:
        raise HTTPException(status_code=400, detail="Either name or item_id is required")
    if line is None:
        raise HTTPException(status_code=404, detail="Shopping list line not found")
    return {**asdict(line), "all_selected": shopping.all_selected}


@router.post("/toggle")
def shopping_toggle(
    request: Request,
    name: Optional[str] = Form(None),
    item_id: Optional[str] = Form(None),
):
    return _toggle(request.app.state.shopping_list, "checked", name, item_id)


@router.post("/select")
def shopping_select(
    request: Request,
    name: Optional[str] = Form(None),
    item_id: Optional[str] = Form(None),
):
    return _toggle(request.app.state.shopping_list, "selected", name, item_id)


@router.post("/select-all")
def shopping_select_all(request: Request):
    return {"all_selected": request.app.state.shopping_list.select_all()}


# ── Export ─────────────────────────────────────────────────────────────────────

@router.get("/cart")
def shopping_cart(request: Request):
    return [asdict(item) for item in request.app.state.shopping_list.cart_items()]


@router.get("/export")
def shopping_export(request: Request):
    text = request.app.state.shopping_list.as_text()
    return PlainTextResponse(text, headers={
        "Content-Disposition": "attachment; filename=shopping_list.txt",
    })
