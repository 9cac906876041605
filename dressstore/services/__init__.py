# Services package init
"""
DressStore Backend: Services Layer
====================================

Service Inventory:
    - ProductService: list/get/create/update/delete over the products table
    - seed_products:  inserts the sample catalogue at startup

Services take the database session (or handle) as an argument and hold no
state of their own, so they can be unit-tested with a mock session.
"""
