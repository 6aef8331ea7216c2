# Services package init
"""
Practice CMS Backend — Services Layer
=====================================

What:  Business logic layer sitting between routes (HTTP) and database (persistence).
Why:   Routes handle HTTP, services handle the rules: ordering, visibility,
       publication, optimistic concurrency.
How:   Services are stateless singletons. Each call receives the request's
       AsyncSession and flushes but never commits; get_db_session owns the
       transaction.

Service Inventory:
    - OrderedResourceService: generic list / create / update / delete / reorder
    - ArticleService:         publish gate and featured view on top of it
    - CustomCodeService:      lookups by injection location
    - registry.RESOURCES:     URL slug → service + schemas for every content type
    - ConfigService:          key/JSON store and the section color map
    - SiteDocumentService:    typed single-document settings over the config store
    - SupportMessageService:  admin inbox to the site maintainer
    - audit:                  admin mutation trail (log line + change log table)
"""
