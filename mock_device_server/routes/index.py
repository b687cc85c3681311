"""
Mock Device Server - Index Page
===============================

What:  GET / returns a small HTML page listing the available endpoints, for
       someone who opens the stub in a browser.
"""

from html import escape

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

from mock_device_server.routes import AVAILABLE_ROUTES

router = APIRouter(tags=["Index"])

_PAGE = """<!doctype html>
<html>
  <head>
    <meta charset="utf-8"/>
    <title>Mock Device Server</title>
    <style>
      body {{ font-family: Arial, sans-serif; margin: 40px; }}
      h1 {{ color: #333; }}
      ul {{ list-style-type: none; padding: 0; }}
      li {{ margin: 10px 0; padding: 10px; background: #f5f5f5; border-radius: 4px; }}
      code {{ background: #e8e8e8; padding: 2px 6px; border-radius: 3px; }}
    </style>
  </head>
  <body>
    <h1>Mock Device Server</h1>
    <p>API эндпоинты для мок-данных устройств (CORS разрешены)</p>
    <ul>
{items}
    </ul>
    <p>Для тестирования CORS все методы и заголовки разрешены.</p>
  </body>
</html>
"""


def render_index() -> str:
    items = "\n".join(
        f"      <li><code>{escape(route)}</code></li>" for route in AVAILABLE_ROUTES
    )
    return _PAGE.format(items=items)


@router.get("/", response_class=HTMLResponse, include_in_schema=False)
async def index() -> HTMLResponse:
    return HTMLResponse(render_index())
