"""
Feed Module

Contains the reachability probe, the NuGet v2 OData package repository and
the query engine that sits on top of it.
"""

from .prober import probe
from .query import query
from .repository import ODataPackageRepository, PackageRepository, create_repository

__all__ = ['probe', 'query', 'PackageRepository', 'ODataPackageRepository', 'create_repository']
