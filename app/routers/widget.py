"""
Embeddable widget router
"""
import json
from functools import lru_cache
from pathlib import Path

from fastapi import APIRouter
from fastapi.responses import Response

from app.config import settings
from app.services.template_selector import widget_rules_payload


router = APIRouter(prefix="", tags=["widget"])

WIDGET_TEMPLATE_PATH = Path(__file__).resolve().parent.parent / "static" / "widget.js"


@lru_cache(maxsize=1)
def render_widget_script() -> str:
    """Fill the reply table and delay into the static widget source"""
    source = WIDGET_TEMPLATE_PATH.read_text(encoding="utf-8")
    return (
        source
        .replace("__WIDGET_RULES__", json.dumps(widget_rules_payload(), indent=2))
        .replace("__REPLY_DELAY_MS__", str(settings.WIDGET_REPLY_DELAY_MS))
    )


@router.get("/widget.js")
async def widget_script():
    return Response(content=render_widget_script(), media_type="application/javascript")
