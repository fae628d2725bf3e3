"""
Persistence adapters.

``kv_store`` talks to the shared key-value table; ``entity_store`` layers a
typed, namespaced collection on top of it. Services depend on entity stores
rather than touching the backend directly.
"""
