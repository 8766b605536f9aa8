"""
Bookshelf Backend - Services Layer
====================================

Service Inventory:
    - BookUsecase (abstract): the five-operation contract the handler consumes
    - BookService: BookUsecase implementation over BookRepository
    - BookRepository: SQLAlchemy data access for the `books` table
"""
