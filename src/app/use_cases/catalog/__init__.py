"""Catalog and distributor maintenance use cases"""
from .products import CreateProduct, GetProduct, ListProducts
from .distributors import CreateDistributor, GetDistributor, ListDistributors
from .dtos import (
    CreateProductCommandDTO,
    ProductResponseDTO,
    CreateDistributorCommandDTO,
    DistributorResponseDTO,
)

__all__ = [
    "CreateProduct",
    "GetProduct",
    "ListProducts",
    "CreateDistributor",
    "GetDistributor",
    "ListDistributors",
    "CreateProductCommandDTO",
    "ProductResponseDTO",
    "CreateDistributorCommandDTO",
    "DistributorResponseDTO",
]
