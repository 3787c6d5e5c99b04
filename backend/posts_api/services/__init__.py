"""
Posts API: Services Layer
===========================

What:  Operations layer sitting between routes (HTTP) and TableQuery (SQL).
How:   Services accept a session and request data, run their statements,
       and return response models or raise application exceptions.

Service Inventory:
    - PostService: list / get / create / update / delete posts, plus the
      identifier check used by the routes before get/update/delete
"""
