# Routes package init
"""
Mock Device Server - API Routes Package
=======================================

What:  HTTP route handlers; one module per device family.

Route Inventory:
    - devices.py:        GET  /devices
    - cash_register.py:  PUT  /devices/cash-register/work-shift
                         POST /devices/cash-register/receipts
                         POST /devices/cash-register/non-fiscals
                         POST /devices/cash-register/reports/x
                         GET  /devices/cash-register/shift-totals
    - pos.py:            POST /devices/pos/payments
                         POST /devices/pos/refunds
                         POST /devices/pos/reports/z
                         POST /devices/pos/reports/x
    - health.py:         GET  /healthz
    - index.py:          GET  /            (HTML route listing)

Routes stay thin: take the raw JSON body, call a service, return its model.
"""

from mock_device_server.schemas.devices import RouteNotFoundResponse

# Documented endpoints, shown on the index page, in /healthz and in 404 bodies.
AVAILABLE_ROUTES = (
    "GET /devices",
    "PUT /devices/cash-register/work-shift",
    "POST /devices/pos/reports/z",
    "POST /devices/cash-register/reports/x",
    "POST /devices/pos/reports/x",
    "GET /devices/cash-register/shift-totals",
    "POST /devices/pos/payments",
    "POST /devices/cash-register/receipts",
    "POST /devices/cash-register/non-fiscals",
    "POST /devices/pos/refunds",
    "GET /healthz",
)

# OpenAPI entry for the fallback body; the handler itself lives in main.py.
ROUTE_NOT_FOUND = {404: {"description": "Unknown route", "model": RouteNotFoundResponse}}
