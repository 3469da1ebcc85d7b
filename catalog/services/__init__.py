# Services package init
"""
Catalog Backend: Services Layer
===============================

Service Inventory:
    - ProductStore (abstract): persistence contract for products
    - MongoProductStore: ProductStore over a MongoDB collection
    - ProductService: list/get/create/update/delete with error mapping
    - Authorizer: admin token check and password login
    - MediaHost (abstract): image hosting contract
    - CloudinaryService: MediaHost over the Cloudinary SDK
    - StagingService: transient local copies of uploads
    - ImageUploadService: stage → media host → cleanup
"""
