# Routes package init
"""
Practice CMS Backend — API Routes Package
=========================================

What:  HTTP route handlers for the public site and the admin dashboard.

Route Inventory:
    - resources.py:    CRUD + reorder for every orderable content type
                       (/api/{slug}, /api/admin/{slug}/...)
    - articles.py:     featured view, single article, publish/unpublish
    - custom_codes.py: snippets by injection location
    - config.py:       settings store, section colors, maintenance flag
    - documents.py:    contact, footer, cookie banner, privacy policy, terms
    - support_messages.py: admin inbox to the maintainer, change log reader
    - health.py:       GET /health

Design Principle:
    Routes stay THIN: parse the request, call a service, write the audit
    line, return the ORM object for the response model to serialize.
    Transactions belong to get_db_session; rules belong to services.
"""
