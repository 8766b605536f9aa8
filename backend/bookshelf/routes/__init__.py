"""
Bookshelf Backend - API Routes Package
========================================

Route Inventory:
    - books.py:   POST   /books          (create)
                  GET    /books          (list)
                  GET    /books/{id}     (fetch)
                  PUT    /books/{id}     (update)
                  DELETE /books/{id}     (delete)
    - health.py:  GET    /health         (service health check)

Routes are thin: decode the request, call the usecase, encode the result.
"""
