# Schemas package init
"""
Practice CMS Backend — API Schemas
==================================

What:  Pydantic request/response contracts for every endpoint.

Schema Inventory:
    - common.py:  CamelModel base, ReorderItem, error/health envelopes
    - content.py: Create/Update/Response for the seven orderable types
    - config.py:  config entries, section styles, maintenance status
"""
