"""Infrastructure layer: storage behind the catalog.

- **catalog_store**: process-local, lock-guarded product collection and the
  filter/search/pagination/stats queries over it

The catalog is volatile by design; nothing is persisted beyond the lifetime
of the process.
"""
