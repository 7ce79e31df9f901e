"""Service layer: use cases orchestrated over the data store and auth ports.

Import concrete services from their subpackages (``blogapi.services.auth``,
``blogapi.services.posts`` ...); shared primitives live in
``blogapi.services._shared``.
"""
