"""
Posts API: Routes Package
===========================

Route Inventory:
    - posts.py:   GET    /posts            (list all posts)
                  GET    /posts/{id}       (get one post)
                  POST   /posts            (create a post)
                  PUT    /posts/{id}       (update a post)
                  DELETE /posts/{id}       (delete a post)
    - health.py:  GET    /health           (service health check)

Routes stay thin: read the request, call the service, return the result.
"""
