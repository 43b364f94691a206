# Routes package init
"""
MemoPad Backend — API Routes Package
======================================

Route Inventory:
    - auth.py:    POST /signup, /login, /logout, /editProfile, /deleteAccount
                  GET  /getUserData, /checkSession
    - memos.py:   POST /createMemo, /editMemo, /deleteMemo, /getMemo
    - health.py:  GET  /health

Routes stay THIN: parse the body, call a service, shape the response,
and read or write the caller's session. Business rules live in services.
"""
