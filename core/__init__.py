"""
Core sync engine: canonical models, registry, processors and the
write/diff engine. Tool-specific conversion lives in ``adapters``.
"""
