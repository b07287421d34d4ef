# Routes package init
"""
Bars API Backend - API Routes Package
======================================

Route Inventory:
    - bars.py:    GET/POST /bars, GET /user_bars, GET/PATCH/DELETE /bars/{id}
    - users.py:   POST /sign-up, POST /sign-in, PATCH /change-password,
                  DELETE /sign-out
    - health.py:  GET /health

Routes stay thin: extract the request data, call the service, pick the
status code. Business rules belong in services.
"""
