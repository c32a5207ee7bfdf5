"""Domain core: identity resolution and time consolidation.

Everything below this package is pure and synchronous. Registries,
configuration and confirmation mappings arrive as call parameters so
concurrent batches never share mutable state.
"""
