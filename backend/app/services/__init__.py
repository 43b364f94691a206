# Services package init
"""
MemoPad Backend — Services Layer
==================================

What:  Business logic between routes (HTTP) and the database.

Service Inventory:
    - PasswordService: bcrypt hash/verify (work factor 10)
    - SessionStore (abstract) / InMemorySessionStore: server-side sessions, 24h TTL
    - UserService: signup, authenticate, edit profile, delete account
    - MemoService: create, edit, delete, list by owner

Services raise the typed errors from app.exceptions; they never build
HTTP responses.
"""
